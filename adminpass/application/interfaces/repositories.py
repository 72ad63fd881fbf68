"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from adminpass.application.dtos.admin_password import (
        AdminPasswordCreate,
        AdminPasswordResult,
        PasswordEventCreate,
        UsageEntryCreate,
        UsageEntryResult,
    )
    from adminpass.domain.enums import UserRole


class IAdminPasswordRepository(Protocol):
    """Protocol for admin password records."""

    async def get_by_id(self, password_id: str) -> AdminPasswordResult | None:
        """Return one record by id."""

    async def get_active(self, now: datetime) -> AdminPasswordResult | None:
        """Return the active record if it has not expired at now."""

    async def get_active_for_period(
        self, period: str, now: datetime
    ) -> AdminPasswordResult | None:
        """Return the active, unexpired record for period."""

    async def activate(
        self, data: AdminPasswordCreate, *, replace_current: bool
    ) -> AdminPasswordResult:
        """Atomically deactivate superseded rows and insert data as the active row.

        replace_current=False deactivates only rows from other periods or
        expired rows; replace_current=True deactivates every active row.
        Raises ActivePasswordConflictError when another active row survives
        (a concurrent writer won).
        """

    async def list_overlapping(self, start: datetime) -> list[AdminPasswordResult]:
        """Return records whose validity window ends after start (newest first)."""


class IAdminPasswordUsageRepository(Protocol):
    """Protocol for the append-only usage log."""

    async def create(self, entry: UsageEntryCreate) -> UsageEntryResult:
        """Append one usage record and bump the password's usage_count / last_used_at."""

    async def list_since(self, start: datetime) -> list[UsageEntryResult]:
        """Return usage records with timestamp >= start (oldest first)."""


class IAdminPasswordEventRepository(Protocol):
    """Protocol for the append-only generation event log."""

    async def create(self, entry: PasswordEventCreate) -> None:
        """Append one generation event."""


class IUserRoleRepository(Protocol):
    """Protocol for the user role lookup."""

    async def get_role(self, user_id: str) -> UserRole:
        """Return the user's role; unknown users are staff."""

    async def set_role(self, user_id: str, role: UserRole) -> None:
        """Create or update the user's role."""
