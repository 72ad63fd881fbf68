"""Admin password endpoints: auth, role checks, actions and usage logging."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from adminpass.infrastructure.security.jwt import create_access_token

URL = "/api/v1/admin/password"


async def _current_pin(client: AsyncClient, headers: dict[str, str]) -> dict:
    response = await client.get(URL, params={"action": "current"}, headers=headers)
    assert response.status_code == 200
    return response.json()["password"]


async def test_requires_bearer_token(client: AsyncClient) -> None:
    response = await client.get(URL, params={"action": "current"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}


async def test_rejects_invalid_and_expired_tokens(client: AsyncClient) -> None:
    bad = await client.get(URL, params={"action": "current"}, headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401
    expired = create_access_token("user_x", expires_delta=timedelta(seconds=-5))
    response = await client.get(
        URL, params={"action": "current"}, headers={"Authorization": f"Bearer {expired}"}
    )
    assert response.status_code == 401


async def test_non_admin_is_forbidden(client: AsyncClient, staff_headers: dict[str, str]) -> None:
    for method, kwargs in (
        ("GET", {"params": {"action": "current"}}),
        ("POST", {"json": {"password": "123456", "action": "delete_job"}}),
        ("PUT", {}),
    ):
        response = await client.request(method, URL, headers=staff_headers, **kwargs)
        assert response.status_code == 403, method
        assert response.json()["code"] == "FORBIDDEN"


async def test_current_returns_public_fields_only(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.get(URL, params={"action": "current"}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["remaining_seconds"] > 0
    pin = data["password"]
    assert len(pin["password"]) == 6
    assert pin["is_active"] is True
    assert "hashed_password" not in response.text
    assert response.headers["Cache-Control"] == "no-store"
    assert "X-Request-ID" in response.headers


async def test_ensure_is_idempotent(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    first = await client.get(URL, params={"action": "ensure"}, headers=admin_headers)
    second = await client.get(URL, params={"action": "ensure"}, headers=admin_headers)
    assert first.status_code == second.status_code == 200
    assert first.json()["created"] is True
    assert second.json()["created"] is False
    assert first.json()["password"]["id"] == second.json()["password"]["id"]


async def test_generate_and_put_rotate(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    original = await _current_pin(client, admin_headers)

    generated = await client.get(URL, params={"action": "generate"}, headers=admin_headers)
    assert generated.status_code == 200
    assert generated.json()["previous_id"] == original["id"]
    assert generated.json()["password"]["password"] != original["password"]

    put = await client.put(URL, headers=admin_headers)
    assert put.status_code == 200
    body = put.json()
    assert body["previous_id"] == generated.json()["password"]["id"]
    assert "hashed_password" not in put.text

    current = await _current_pin(client, admin_headers)
    assert current["id"] == body["password"]["id"]


async def test_unknown_or_missing_action_is_400(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    for params in ({"action": "nope"}, {}):
        response = await client.get(URL, params=params, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("days", ["0", "366", "abc"])
async def test_stats_days_out_of_range(
    client: AsyncClient, admin_headers: dict[str, str], days: str
) -> None:
    response = await client.get(
        URL, params={"action": "stats", "days": days}, headers=admin_headers
    )
    assert response.status_code == 400


async def test_use_password_logs_usage_and_updates_stats(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    """POST with a valid PIN for delete_job on job 123 increments usageByAction."""
    pin = await _current_pin(client, admin_headers)
    before = await client.get(URL, params={"action": "stats"}, headers=admin_headers)
    assert before.status_code == 200
    assert before.json()["window_days"] == 30
    assert before.json()["usage_by_action"].get("delete_job", 0) == 0

    response = await client.post(
        URL,
        json={
            "password": pin["password"],
            "action": "delete_job",
            "targetId": "123",
            "targetType": "job",
            "metadata": {"reason": "duplicate"},
        },
        headers={**admin_headers, "X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "pytest"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Admin password validated successfully"}

    after = await client.get(URL, params={"action": "stats", "days": 7}, headers=admin_headers)
    stats = after.json()
    assert stats["usage_by_action"]["delete_job"] == 1
    assert stats["total_usage_count"] == 1
    assert stats["user_breakdown"] == [{"key": "user_admin_1", "count": 1}]
    period = next(p for p in stats["periods_in_window"] if p["password_id"] == pin["id"])
    assert period["usage_count"] == 1
    assert "password" not in period

    refreshed = await _current_pin(client, admin_headers)
    assert refreshed["usage_count"] == 1
    assert refreshed["last_used_at"] is not None


async def test_use_password_accepts_snake_case(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    pin = await _current_pin(client, admin_headers)
    response = await client.post(
        URL,
        json={"password": pin["password"], "action": "restore_item", "target_id": "9", "target_type": "item"},
        headers=admin_headers,
    )
    assert response.status_code == 200


async def test_use_password_wrong_pin_is_401(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    pin = await _current_pin(client, admin_headers)
    wrong = "000000" if pin["password"] != "000000" else "111111"
    response = await client.post(
        URL, json={"password": wrong, "action": "delete_job"}, headers=admin_headers
    )
    assert response.status_code == 401
    assert response.json() == {
        "error": "Invalid or expired admin password",
        "code": "INVALID_CREDENTIAL",
    }
    stats = await client.get(URL, params={"action": "stats"}, headers=admin_headers)
    assert stats.json()["total_usage_count"] == 0


async def test_use_password_after_rotation_is_401(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    old = await _current_pin(client, admin_headers)
    await client.put(URL, headers=admin_headers)
    response = await client.post(
        URL, json={"password": old["password"], "action": "delete_job"}, headers=admin_headers
    )
    assert response.status_code == 401


async def test_use_password_missing_fields_is_400(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(URL, json={"action": "delete_job"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
