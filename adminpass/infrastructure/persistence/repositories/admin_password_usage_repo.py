"""Admin password usage repository. Append-only; no update/delete."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from adminpass.application.dtos.admin_password import UsageEntryCreate, UsageEntryResult
from adminpass.infrastructure.persistence.errors import translate_storage_errors
from adminpass.infrastructure.persistence.models.admin_password import (
    AdminPassword,
    AdminPasswordUsage,
)
from adminpass.shared.utils.datetime import ensure_utc
from adminpass.shared.utils.generators import generate_cuid


def _orm_to_result(row: AdminPasswordUsage) -> UsageEntryResult:
    """Map ORM to application DTO."""
    return UsageEntryResult(
        id=row.id,
        password_id=row.password_id,
        user_id=row.user_id,
        action=row.action,
        timestamp=ensure_utc(row.timestamp),
        target_id=row.target_id,
        target_type=row.target_type,
        metadata=row.usage_metadata,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
    )


class AdminPasswordUsageRepository:
    """Append-only usage log."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @translate_storage_errors("log_admin_password_usage")
    async def create(self, entry: UsageEntryCreate) -> UsageEntryResult:
        """Append one usage record and bump the password's usage counter.

        Runs in its own savepoint: a failure here rolls back only the usage
        write, never the caller's surrounding transaction.
        """
        row = AdminPasswordUsage(
            id=generate_cuid(),
            password_id=entry.password_id,
            user_id=entry.user_id,
            action=entry.action,
            target_id=entry.target_id,
            target_type=entry.target_type,
            usage_metadata=entry.metadata,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            timestamp=entry.timestamp,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
            await self.db.execute(
                update(AdminPassword)
                .where(AdminPassword.id == entry.password_id)
                .values(
                    usage_count=AdminPassword.usage_count + 1,
                    last_used_at=entry.timestamp,
                )
                .execution_options(synchronize_session="fetch")
            )
        return _orm_to_result(row)

    @translate_storage_errors("list_admin_password_usage")
    async def list_since(self, start: datetime) -> list[UsageEntryResult]:
        """Return usage records with timestamp >= start (oldest first)."""
        result = await self.db.execute(
            select(AdminPasswordUsage)
            .where(AdminPasswordUsage.timestamp >= start)
            .order_by(AdminPasswordUsage.timestamp.asc())
        )
        return [_orm_to_result(r) for r in result.scalars().all()]
