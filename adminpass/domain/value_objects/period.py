"""Password period: the calendar bucket one admin password is valid for.

The policy is the ISO week: Monday 00:00 up to (not including) the next
Monday 00:00 in the business time zone. Keys look like "2024-W10" and sort
chronologically within a year.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

_PERIOD_KEY_RE = re.compile(r"^(\d{4})-W(\d{2})$")


@dataclass(frozen=True)
class PasswordPeriod:
    """One ISO week. starts_at and expires_at are UTC; expires_at is exclusive."""

    key: str
    starts_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        if not _PERIOD_KEY_RE.match(self.key):
            raise ValueError(f"Period key must look like YYYY-Www, got {self.key!r}")
        if self.expires_at <= self.starts_at:
            raise ValueError("Period must end after it starts")

    def contains(self, moment: datetime) -> bool:
        """Return True if moment falls inside [starts_at, expires_at)."""
        return self.starts_at <= moment < self.expires_at

    def remaining_seconds(self, now: datetime) -> int:
        """Whole seconds left until expiry (0 once expired)."""
        return max(0, int((self.expires_at - now).total_seconds()))

    @classmethod
    def from_key(cls, key: str, tz: tzinfo = UTC) -> "PasswordPeriod":
        """Build the period for an ISO week key such as "2024-W10"."""
        match = _PERIOD_KEY_RE.match(key)
        if not match:
            raise ValueError(f"Period key must look like YYYY-Www, got {key!r}")
        year, week = int(match.group(1)), int(match.group(2))
        try:
            monday = datetime.fromisocalendar(year, week, 1)
        except ValueError as e:
            raise ValueError(f"No ISO week {week} in {year}") from e
        return _period_starting(monday.replace(tzinfo=tz))


def _period_starting(local_monday: datetime) -> PasswordPeriod:
    iso_year, iso_week, _ = local_monday.isocalendar()
    next_monday = local_monday + timedelta(days=7)
    return PasswordPeriod(
        key=f"{iso_year}-W{iso_week:02d}",
        starts_at=local_monday.astimezone(UTC),
        expires_at=next_monday.astimezone(UTC),
    )


def weekly_period(now: datetime, tz: tzinfo = UTC) -> PasswordPeriod:
    """Return the ISO week containing now, evaluated in time zone tz."""
    local = now.astimezone(tz)
    monday = (local - timedelta(days=local.weekday())).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    return _period_starting(monday)
