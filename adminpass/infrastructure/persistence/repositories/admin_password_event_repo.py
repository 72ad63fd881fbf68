"""Generation event log repository. Append-only."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adminpass.application.dtos.admin_password import PasswordEventCreate
from adminpass.infrastructure.persistence.errors import translate_storage_errors
from adminpass.infrastructure.persistence.models.admin_password import AdminPasswordEvent
from adminpass.shared.utils.generators import generate_cuid


class AdminPasswordEventRepository:
    """Append-only log of password generations and rotations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @translate_storage_errors("log_admin_password_event")
    async def create(self, entry: PasswordEventCreate) -> None:
        """Append one generation event."""
        self.db.add(
            AdminPasswordEvent(
                id=generate_cuid(),
                password_id=entry.password_id,
                event_type=entry.event_type,
                period=entry.period,
                method=entry.method,
                actor_id=entry.actor_id,
                timestamp=entry.timestamp,
            )
        )
        await self.db.flush()

    @translate_storage_errors("list_admin_password_events")
    async def list_for_password(self, password_id: str) -> list[AdminPasswordEvent]:
        """Return events for one password (oldest first)."""
        result = await self.db.execute(
            select(AdminPasswordEvent)
            .where(AdminPasswordEvent.password_id == password_id)
            .order_by(AdminPasswordEvent.timestamp.asc())
        )
        return list(result.scalars().all())
