"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error leaves the service
as {"error": <message>, "code": <error_code>}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from adminpass.core.config import get_settings
from adminpass.domain.exceptions import AdminPassError, StorageError

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "CONFIGURATION_ERROR": 500,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "VALIDATION_ERROR": 400,
    "STORAGE_ERROR": 500,
    "INVALID_CREDENTIAL": 401,
    "ACTIVE_PASSWORD_CONFLICT": 409,
}


def status_for(exc: AdminPassError) -> int:
    """HTTP status for a domain exception (400 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _admin_pass_exception_handler(request: Request, exc: AdminPassError) -> JSONResponse:
    """Return JSON from AdminPassError.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with the first failing field and all pydantic errors."""
    errors = exc.errors()
    message = "Request validation failed"
    if errors:
        loc = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"{loc}: {errors[0].get('msg')}" if loc else str(errors[0].get("msg"))
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "code": "VALIDATION_ERROR",
            "details": {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


def _sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database errors that escaped the repositories (e.g. on commit)."""
    logger.exception("Database error: %s", exc)
    return JSONResponse(status_code=500, content=StorageError().to_dict())


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": detail, "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: AdminPassError (and subclasses), RequestValidationError,
    StarletteHTTPException, SQLAlchemyError, generic Exception.
    """
    app.add_exception_handler(AdminPassError, _admin_pass_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
