"""Derive client metadata (IP, user agent) for usage records."""

from __future__ import annotations

from starlette.requests import Request

UNKNOWN_CLIENT = "unknown"


def get_audit_request_context(request: Request) -> tuple[str, str]:
    """Return (ip_address, user_agent) for a usage record.

    IP comes from X-Forwarded-For (first hop), then X-Real-IP, then the socket
    peer. Missing values are recorded as "unknown".
    """
    forwarded = request.headers.get("X-Forwarded-For")
    ip_address = (
        (forwarded.split(",")[0].strip() if forwarded else None)
        or request.headers.get("X-Real-IP")
        or (request.client.host if request.client else None)
        or UNKNOWN_CLIENT
    )
    user_agent = request.headers.get("User-Agent") or UNKNOWN_CLIENT
    return (ip_address, user_agent)
