"""Admin password lifecycle: ensure, rotate, validate, log usage, report.

One PIN is active per ISO week. The single-active invariant is enforced by the
store (partial unique index); this service turns a lost race into "use the
winner's record" for ensure and into a bounded retry for forced rotation.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Any

from adminpass.application.dtos.admin_password import (
    AdminPasswordCreate,
    CountBucket,
    CurrentPassword,
    EnsureResult,
    PasswordEventCreate,
    PeriodUsage,
    RegenerateResult,
    UsageEntryCreate,
    UsageStats,
    ValidationOutcome,
)
from adminpass.application.interfaces.repositories import (
    IAdminPasswordEventRepository,
    IAdminPasswordRepository,
    IAdminPasswordUsageRepository,
)
from adminpass.application.services.hash_service import PasswordHasher
from adminpass.application.services.password_generator import PinGenerator
from adminpass.domain.enums import GenerationMethod, PasswordEventType
from adminpass.domain.exceptions import (
    ActivePasswordConflictError,
    InvalidCredentialError,
    StorageError,
    ValidationError,
)
from adminpass.domain.value_objects.period import PasswordPeriod, weekly_period
from adminpass.shared.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)

MAX_STATS_WINDOW_DAYS = 365
NO_ACTIVE_PASSWORD = "No active admin password"
INVALID_PASSWORD = "Invalid or expired admin password"


def _breakdown(counter: Counter[str]) -> list[CountBucket]:
    """Buckets sorted by count (desc), then key."""
    return [
        CountBucket(key=key, count=count)
        for key, count in sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


class AdminPasswordService:
    """Issue, rotate, validate and audit the shared admin PIN."""

    def __init__(
        self,
        password_repo: IAdminPasswordRepository,
        usage_repo: IAdminPasswordUsageRepository,
        event_repo: IAdminPasswordEventRepository,
        *,
        hasher: PasswordHasher | None = None,
        generator: PinGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo = UTC,
        max_rotate_attempts: int = 3,
    ) -> None:
        self._passwords = password_repo
        self._usage = usage_repo
        self._events = event_repo
        self._hasher = hasher or PasswordHasher()
        self._generator = generator or PinGenerator()
        self._clock = clock
        self._tz = tz
        self._max_rotate_attempts = max_rotate_attempts

    def _now(self) -> datetime:
        now = ensure_utc(self._clock())
        assert now is not None
        return now

    def current_period(self) -> PasswordPeriod:
        """The ISO week containing the clock's current time."""
        return weekly_period(self._now(), self._tz)

    def _new_password(
        self, period: PasswordPeriod, now: datetime, avoid: str | None
    ) -> AdminPasswordCreate:
        pin = self._generator.generate(avoid=avoid)
        return AdminPasswordCreate(
            period=period.key,
            password=pin,
            hashed_password=self._hasher.hash(pin),
            created_at=now,
            expires_at=period.expires_at,
        )

    async def ensure_active_password(
        self,
        period: PasswordPeriod | None = None,
        *,
        method: GenerationMethod = GenerationMethod.API,
        actor_id: str | None = None,
    ) -> EnsureResult:
        """Return the period's active password, creating it if none exists.

        Idempotent within a period. When a concurrent caller creates the
        record first, its record is returned with created=False.

        Raises:
            ValidationError: period does not contain the current time.
            StorageError: The store failed (not retried here).
        """
        now = self._now()
        period = period or weekly_period(now, self._tz)
        if not period.contains(now):
            raise ValidationError(
                f"Can only ensure the current period, not {period.key}", field="period"
            )

        existing = await self._passwords.get_active_for_period(period.key, now)
        if existing is not None:
            return EnsureResult(password=existing.password, record=existing, created=False)

        data = self._new_password(period, now, avoid=None)
        try:
            record = await self._passwords.activate(data, replace_current=False)
        except ActivePasswordConflictError:
            winner = await self._passwords.get_active_for_period(
                period.key, now
            ) or await self._passwords.get_active(now)
            if winner is None:
                raise StorageError(
                    "Active admin password vanished after a write conflict",
                    operation="ensure_admin_password",
                ) from None
            return EnsureResult(password=winner.password, record=winner, created=False)

        await self._events.create(
            PasswordEventCreate(
                password_id=record.id,
                event_type=PasswordEventType.GENERATED.value,
                period=record.period,
                method=method.value,
                timestamp=now,
                actor_id=actor_id,
            )
        )
        logger.info(
            "Admin password generated for period %s (method=%s, expires=%s)",
            record.period,
            method.value,
            record.expires_at.isoformat(),
        )
        return EnsureResult(password=record.password, record=record, created=True)

    async def force_regenerate_password(
        self,
        *,
        method: GenerationMethod = GenerationMethod.API,
        actor_id: str | None = None,
    ) -> RegenerateResult:
        """Rotate now: deactivate the active password and issue a different one.

        Not idempotent. A concurrent writer that grabs the active slot between
        deactivation and insert causes a retry, so the last writer wins.

        Raises:
            StorageError: The store failed or every attempt lost a race.
        """
        for attempt in range(1, self._max_rotate_attempts + 1):
            now = self._now()
            period = weekly_period(now, self._tz)
            previous = await self._passwords.get_active(now)
            data = self._new_password(
                period, now, avoid=previous.password if previous else None
            )
            try:
                record = await self._passwords.activate(data, replace_current=True)
            except ActivePasswordConflictError:
                logger.warning(
                    "Admin password rotation lost a race (attempt %d/%d)",
                    attempt,
                    self._max_rotate_attempts,
                )
                continue

            await self._events.create(
                PasswordEventCreate(
                    password_id=record.id,
                    event_type=PasswordEventType.ROTATED.value,
                    period=record.period,
                    method=method.value,
                    timestamp=now,
                    actor_id=actor_id,
                )
            )
            logger.info(
                "Admin password rotated for period %s by %s (method=%s)",
                record.period,
                actor_id or "system",
                method.value,
            )
            return RegenerateResult(
                password=record.password,
                record=record,
                previous_id=previous.id if previous else None,
            )

        raise StorageError(
            f"Could not rotate admin password after {self._max_rotate_attempts} attempts",
            operation="force_regenerate_admin_password",
        )

    async def get_current(
        self,
        *,
        method: GenerationMethod = GenerationMethod.API,
        actor_id: str | None = None,
    ) -> CurrentPassword:
        """Ensure a password exists for this week and return it with its remaining validity."""
        now = self._now()
        period = weekly_period(now, self._tz)
        result = await self.ensure_active_password(period, method=method, actor_id=actor_id)
        return CurrentPassword(
            record=result.record, remaining_seconds=period.remaining_seconds(now)
        )

    async def validate(self, candidate: str) -> ValidationOutcome:
        """Check candidate against the active, unexpired password.

        The outcome carries only the matched record id, never the PIN or hash.
        """
        if not candidate or not self._generator.is_well_formed(candidate):
            return ValidationOutcome(
                is_valid=False,
                error=f"Admin password must be exactly {self._generator.length} digits",
            )
        now = self._now()
        active = await self._passwords.get_active(now)
        if active is None or not active.is_valid_at(now):
            return ValidationOutcome(is_valid=False, error=NO_ACTIVE_PASSWORD)
        if not self._hasher.matches(candidate, active.hashed_password):
            logger.warning("Admin password validation failed (period %s)", active.period)
            return ValidationOutcome(is_valid=False, error=INVALID_PASSWORD)
        return ValidationOutcome(is_valid=True, password_id=active.id)

    async def log_usage(
        self,
        password_id: str,
        user_id: str,
        action: str,
        target_id: str | None = None,
        target_type: str | None = None,
        metadata: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> bool:
        """Append a usage record. Best-effort: failures are logged and reported as False.

        Never raises, so the action the password authorized is never undone.
        """
        entry = UsageEntryCreate(
            password_id=password_id,
            user_id=user_id,
            action=action,
            timestamp=self._now(),
            target_id=target_id,
            target_type=target_type,
            metadata=metadata,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        try:
            await self._usage.create(entry)
        except Exception:
            logger.exception(
                "Failed to log admin password usage (action=%s, user=%s)", action, user_id
            )
            return False
        return True

    async def authorize_action(
        self,
        candidate: str,
        *,
        user_id: str,
        action: str,
        target_id: str | None = None,
        target_type: str | None = None,
        metadata: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ValidationOutcome:
        """Validate candidate for action, then log the usage (best-effort).

        Raises:
            InvalidCredentialError: candidate is wrong, malformed or expired.
        """
        outcome = await self.validate(candidate)
        if not outcome.is_valid:
            raise InvalidCredentialError(outcome.error or INVALID_PASSWORD)
        assert outcome.password_id is not None
        await self.log_usage(
            outcome.password_id,
            user_id,
            action,
            target_id=target_id,
            target_type=target_type,
            metadata=metadata,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return outcome

    async def get_stats(self, window_days: int) -> UsageStats:
        """Aggregate usage over the trailing window_days. Read-only.

        Raises:
            ValidationError: window_days outside 1..365.
        """
        if window_days < 1 or window_days > MAX_STATS_WINDOW_DAYS:
            raise ValidationError(
                f"days must be between 1 and {MAX_STATS_WINDOW_DAYS}", field="days"
            )
        now = self._now()
        window_start = now - timedelta(days=window_days)
        usages = await self._usage.list_since(window_start)
        records = await self._passwords.list_overlapping(window_start)

        by_action: Counter[str] = Counter(u.action for u in usages)
        by_user: Counter[str] = Counter(u.user_id for u in usages)
        by_day: Counter[str] = Counter(
            u.timestamp.astimezone(self._tz).date().isoformat() for u in usages
        )
        by_password: Counter[str] = Counter(u.password_id for u in usages)

        return UsageStats(
            window_days=window_days,
            window_start=window_start,
            total_usage_count=len(usages),
            usage_by_action=dict(by_action),
            action_breakdown=_breakdown(by_action),
            user_breakdown=_breakdown(by_user),
            daily_usage=[
                CountBucket(key=day, count=by_day[day]) for day in sorted(by_day)
            ],
            periods_in_window=[
                PeriodUsage(
                    password_id=r.id,
                    period=r.period,
                    created_at=r.created_at,
                    expires_at=r.expires_at,
                    is_active=r.is_valid_at(now),
                    usage_count=by_password.get(r.id, 0),
                )
                for r in records
            ],
        )
