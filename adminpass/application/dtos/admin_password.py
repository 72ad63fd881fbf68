"""DTOs for the admin password use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AdminPasswordResult:
    """Admin password record read-model. Carries the hash for validation only;
    the API layer never serializes it."""

    id: str
    period: str
    password: str
    hashed_password: str = field(repr=False)
    created_at: datetime
    expires_at: datetime
    is_active: bool
    usage_count: int
    last_used_at: datetime | None = None
    deactivated_at: datetime | None = None

    def is_valid_at(self, now: datetime) -> bool:
        """Active and not yet expired."""
        return self.is_active and now < self.expires_at


@dataclass(frozen=True)
class AdminPasswordCreate:
    """Input for inserting a new active admin password."""

    period: str
    password: str
    hashed_password: str
    created_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class EnsureResult:
    """Result of ensure_active_password. created is False when an existing record was returned."""

    password: str
    record: AdminPasswordResult
    created: bool


@dataclass(frozen=True)
class RegenerateResult:
    """Result of force_regenerate_password."""

    password: str
    record: AdminPasswordResult
    previous_id: str | None = None


@dataclass(frozen=True)
class CurrentPassword:
    """Active password plus remaining validity (GET ?action=current)."""

    record: AdminPasswordResult
    remaining_seconds: int


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a candidate PIN. Never carries the PIN or its hash."""

    is_valid: bool
    password_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class UsageEntryCreate:
    """Input for appending one usage record."""

    password_id: str
    user_id: str
    action: str
    timestamp: datetime
    target_id: str | None = None
    target_type: str | None = None
    metadata: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class UsageEntryResult:
    """Single usage record (read-model)."""

    id: str
    password_id: str
    user_id: str
    action: str
    timestamp: datetime
    target_id: str | None
    target_type: str | None
    metadata: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None


@dataclass(frozen=True)
class PasswordEventCreate:
    """Input for appending one generation event."""

    password_id: str
    event_type: str
    period: str
    method: str
    timestamp: datetime
    actor_id: str | None = None


@dataclass(frozen=True)
class PeriodUsage:
    """One password period overlapping the stats window."""

    password_id: str
    period: str
    created_at: datetime
    expires_at: datetime
    is_active: bool
    usage_count: int


@dataclass(frozen=True)
class CountBucket:
    """(key, count) pair used in breakdowns."""

    key: str
    count: int


@dataclass(frozen=True)
class UsageStats:
    """Aggregated usage over the trailing window."""

    window_days: int
    window_start: datetime
    total_usage_count: int
    usage_by_action: dict[str, int]
    action_breakdown: list[CountBucket]
    user_breakdown: list[CountBucket]
    daily_usage: list[CountBucket]
    periods_in_window: list[PeriodUsage]
