"""Admin password API schemas.

Responses are built from application DTOs. None of them has a field for the
hash, so it cannot be serialized by accident.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from adminpass.application.dtos.admin_password import (
    AdminPasswordResult,
    CountBucket,
    CurrentPassword,
    EnsureResult,
    PeriodUsage,
    RegenerateResult,
    UsageStats,
)
from adminpass.domain.enums import AdminPasswordAction

KNOWN_ACTIONS = ", ".join(a.value for a in AdminPasswordAction)


class AdminPasswordPublic(BaseModel):
    """Public fields of an admin password record (admins only)."""

    id: str
    period: str
    password: str
    created_at: datetime
    expires_at: datetime
    is_active: bool
    usage_count: int
    last_used_at: datetime | None = None

    @classmethod
    def from_result(cls, record: AdminPasswordResult) -> "AdminPasswordPublic":
        return cls(
            id=record.id,
            period=record.period,
            password=record.password,
            created_at=record.created_at,
            expires_at=record.expires_at,
            is_active=record.is_active,
            usage_count=record.usage_count,
            last_used_at=record.last_used_at,
        )


class CurrentPasswordResponse(BaseModel):
    """GET ?action=current."""

    success: bool = True
    password: AdminPasswordPublic
    remaining_seconds: int = Field(..., description="Seconds until the password expires")

    @classmethod
    def from_result(cls, current: CurrentPassword) -> "CurrentPasswordResponse":
        return cls(
            password=AdminPasswordPublic.from_result(current.record),
            remaining_seconds=current.remaining_seconds,
        )


class EnsurePasswordResponse(BaseModel):
    """GET ?action=ensure."""

    success: bool = True
    created: bool = Field(..., description="False when this week's password already existed")
    message: str
    password: AdminPasswordPublic

    @classmethod
    def from_result(cls, result: EnsureResult) -> "EnsurePasswordResponse":
        message = (
            "Admin password generated"
            if result.created
            else "Admin password already exists for this period"
        )
        return cls(
            created=result.created,
            message=message,
            password=AdminPasswordPublic.from_result(result.record),
        )


class RegeneratePasswordResponse(BaseModel):
    """GET ?action=generate and PUT."""

    success: bool = True
    message: str = "Admin password regenerated"
    password: AdminPasswordPublic
    previous_id: str | None = None

    @classmethod
    def from_result(cls, result: RegenerateResult) -> "RegeneratePasswordResponse":
        return cls(
            password=AdminPasswordPublic.from_result(result.record),
            previous_id=result.previous_id,
        )


class CountBucketResponse(BaseModel):
    key: str
    count: int

    @classmethod
    def from_bucket(cls, bucket: CountBucket) -> "CountBucketResponse":
        return cls(key=bucket.key, count=bucket.count)


class PeriodUsageResponse(BaseModel):
    """One password period overlapping the stats window (no PIN)."""

    password_id: str
    period: str
    created_at: datetime
    expires_at: datetime
    is_active: bool
    usage_count: int

    @classmethod
    def from_period(cls, item: PeriodUsage) -> "PeriodUsageResponse":
        return cls(
            password_id=item.password_id,
            period=item.period,
            created_at=item.created_at,
            expires_at=item.expires_at,
            is_active=item.is_active,
            usage_count=item.usage_count,
        )


class UsageStatsResponse(BaseModel):
    """GET ?action=stats&days=N."""

    success: bool = True
    window_days: int
    window_start: datetime
    total_usage_count: int
    usage_by_action: dict[str, int]
    action_breakdown: list[CountBucketResponse]
    user_breakdown: list[CountBucketResponse]
    daily_usage: list[CountBucketResponse]
    periods_in_window: list[PeriodUsageResponse]

    @classmethod
    def from_stats(cls, stats: UsageStats) -> "UsageStatsResponse":
        return cls(
            window_days=stats.window_days,
            window_start=stats.window_start,
            total_usage_count=stats.total_usage_count,
            usage_by_action=stats.usage_by_action,
            action_breakdown=[CountBucketResponse.from_bucket(b) for b in stats.action_breakdown],
            user_breakdown=[CountBucketResponse.from_bucket(b) for b in stats.user_breakdown],
            daily_usage=[CountBucketResponse.from_bucket(b) for b in stats.daily_usage],
            periods_in_window=[
                PeriodUsageResponse.from_period(p) for p in stats.periods_in_window
            ],
        )


class UseAdminPasswordRequest(BaseModel):
    """POST body: the PIN plus the action it authorizes.

    Accepts camelCase (targetId, targetType) or snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(..., min_length=1, description="Admin PIN")
    action: str = Field(
        ..., min_length=1, max_length=100, description=f"Action being authorized, e.g. {KNOWN_ACTIONS}"
    )
    target_id: str | None = Field(None, alias="targetId", max_length=255)
    target_type: str | None = Field(None, alias="targetType", max_length=100)
    metadata: dict[str, Any] | None = None


class UseAdminPasswordResponse(BaseModel):
    success: bool = True
    message: str = "Admin password validated successfully"


class CronRunResponse(BaseModel):
    """Cron hook result. Never carries the PIN."""

    success: bool = True
    message: str
    created: bool
    period: str
    expires_at: datetime
    timestamp: datetime
