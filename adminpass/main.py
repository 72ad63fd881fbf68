"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.

Settings are loaded inside create_app() so that tests can set env (and clear
the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from adminpass.api.v1 import api_router
from adminpass.core.config import get_settings
from adminpass.core.exception_handlers import register_exception_handlers
from adminpass.core.lifespan import create_lifespan
from adminpass.core.limiter import limiter
from adminpass.middleware import RequestIDMiddleware, SecurityHeadersMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: request ID -> security headers -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
