"""Security headers middleware (raw ASGI).

Every response gets no-store caching, anti-framing and nosniff headers.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cache-Control": "no-store",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add security headers that the endpoint did not set itself."""
    extra = [
        (name.lower().encode(), value.encode())
        for name, value in (headers if headers is not None else DEFAULT_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                existing = list(message.get("headers", []))
                present = {name.lower() for name, _ in existing}
                existing.extend((n, v) for n, v in extra if n not in present)
                message["headers"] = existing
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
