"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Secrets that only some entry points need (DATABASE_URL,
SECRET_KEY, CRON_SECRET_TOKEN) are checked where they are used and raise
ConfigurationError there, so the health endpoint works without them.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment and .env."""

    # App
    app_name: str = "adminpass"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: postgresql+asyncpg://... in production, sqlite+aiosqlite://... for local runs
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security (JWT for admin callers)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Cron hook: GET /cron/daily-password?token=<CRON_SECRET_TOKEN>
    cron_secret_token: SecretStr | None = None

    # Admin password policy
    admin_password_timezone: str = "UTC"
    admin_password_max_rotate_attempts: int = 3
    admin_password_stats_default_days: int = 30

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("admin_password_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject unknown IANA zone names at load time."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"ADMIN_PASSWORD_TIMEZONE must be an IANA time zone, got {value!r}"
            ) from e
        return value

    @field_validator("admin_password_max_rotate_attempts")
    @classmethod
    def validate_rotate_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("ADMIN_PASSWORD_MAX_ROTATE_ATTEMPTS must be at least 1")
        return value

    @property
    def business_timezone(self) -> ZoneInfo:
        """Time zone in which weekly periods start on Monday 00:00."""
        return ZoneInfo(self.admin_password_timezone)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
