"""Client metadata recorded with admin password usage."""

import pytest
from starlette.requests import Request

from adminpass.shared.request_audit import get_audit_request_context


def _request(headers: dict[str, str], client: tuple[str, int] | None = ("10.0.0.9", 5000)) -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/api/v1/admin/password",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "client": client,
        }
    )


@pytest.mark.parametrize(
    ("headers", "client", "expected_ip"),
    [
        ({"X-Forwarded-For": "203.0.113.5, 10.0.0.1", "X-Real-IP": "198.51.100.2"}, None, "203.0.113.5"),
        ({"X-Real-IP": "198.51.100.2"}, ("10.0.0.9", 5000), "198.51.100.2"),
        ({}, ("10.0.0.9", 5000), "10.0.0.9"),
        ({}, None, "unknown"),
    ],
)
def test_ip_address_precedence(headers, client, expected_ip) -> None:
    ip_address, _ = get_audit_request_context(_request(headers, client))
    assert ip_address == expected_ip


def test_returns_only_ip_and_user_agent() -> None:
    request = _request({"User-Agent": "pytest-agent"})
    request.state.request_id = "req-123"
    assert get_audit_request_context(request) == ("10.0.0.9", "pytest-agent")


def test_missing_user_agent_is_unknown() -> None:
    assert get_audit_request_context(_request({}))[1] == "unknown"
