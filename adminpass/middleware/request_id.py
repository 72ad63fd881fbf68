"""Request ID middleware.

Forwards a safe client-supplied request ID or generates one, exposes it on
request.state.request_id and echoes it on the response. Raw ASGI.
"""

import re
from typing import Callable

from adminpass.shared.utils import generate_cuid

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Keep raw when it is short and log-safe; otherwise mint a new id."""
    candidate = (raw or "").strip()
    if (
        candidate
        and len(candidate) <= REQUEST_ID_MAX_LENGTH
        and _REQUEST_ID_PATTERN.fullmatch(candidate)
    ):
        return candidate
    return generate_cuid()


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request ID to each HTTP request and its response."""
    header_key = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_name.encode(), request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_request_id)

    return asgi_app
