"""Domain exceptions for the admin password service.

Define errors independent of infrastructure. The presentation layer maps them
to HTTP responses in core.exception_handlers.
"""

from typing import Any


class AdminPassError(Exception):
    """Base exception for all admin password service errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, period).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error envelope for this exception."""
        body: dict[str, Any] = {"error": self.message, "code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(AdminPassError):
    """Raised when a required secret or connection string is not configured."""

    def __init__(self, setting: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{setting} is not configured",
            "CONFIGURATION_ERROR",
            {"setting": setting},
        )


class UnauthorizedError(AdminPassError):
    """Raised when the caller identity or cron token is missing or invalid."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, "UNAUTHORIZED")


class ForbiddenError(AdminPassError):
    """Raised when the caller is authenticated but lacks the required role."""

    def __init__(
        self,
        message: str = "Forbidden",
        required_role: str | None = None,
    ) -> None:
        details = {"required_role": required_role} if required_role else {}
        super().__init__(message, "FORBIDDEN", details)


class ValidationError(AdminPassError):
    """Raised when request input is malformed (missing fields, bad range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class StorageError(AdminPassError):
    """Raised when the backing store is unreachable or an operation fails."""

    def __init__(self, message: str = "Storage operation failed", operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, "STORAGE_ERROR", details)


class InvalidCredentialError(AdminPassError):
    """Raised when a submitted admin password does not match or has expired."""

    def __init__(self, message: str = "Invalid or expired admin password") -> None:
        super().__init__(message, "INVALID_CREDENTIAL")


class ActivePasswordConflictError(AdminPassError):
    """Raised when another writer already holds the single active password slot.

    Repositories raise it when the partial unique index rejects an insert; the
    service resolves it (re-read for ensure, retry for forced rotation).
    """

    def __init__(self, period: str) -> None:
        super().__init__(
            f"Another active admin password already exists (period {period})",
            "ACTIVE_PASSWORD_CONFLICT",
            {"period": period},
        )
