"""Admin password repository: active-record lookup and atomic activation."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from adminpass.application.dtos.admin_password import AdminPasswordCreate, AdminPasswordResult
from adminpass.domain.exceptions import ActivePasswordConflictError
from adminpass.infrastructure.persistence.errors import translate_storage_errors
from adminpass.infrastructure.persistence.models.admin_password import AdminPassword
from adminpass.shared.utils.datetime import ensure_utc
from adminpass.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


def _orm_to_result(row: AdminPassword) -> AdminPasswordResult:
    """Map ORM to application DTO (UTC-normalized datetimes)."""
    return AdminPasswordResult(
        id=row.id,
        period=row.period,
        password=row.password,
        hashed_password=row.hashed_password,
        created_at=ensure_utc(row.created_at),
        expires_at=ensure_utc(row.expires_at),
        is_active=row.is_active,
        usage_count=row.usage_count,
        last_used_at=ensure_utc(row.last_used_at),
        deactivated_at=ensure_utc(row.deactivated_at),
    )


class AdminPasswordRepository:
    """Admin password records. Rows are deactivated, never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @translate_storage_errors("get_admin_password")
    async def get_by_id(self, password_id: str) -> AdminPasswordResult | None:
        """Return one record by id, or None."""
        result = await self.db.execute(
            select(AdminPassword).where(AdminPassword.id == password_id)
        )
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    @translate_storage_errors("get_active_admin_password")
    async def get_active(self, now: datetime) -> AdminPasswordResult | None:
        """Return the active record if it has not expired at now.

        A row whose is_active flag is stale (expires_at passed) is not returned.
        """
        result = await self.db.execute(
            select(AdminPassword)
            .where(AdminPassword.is_active.is_(True))
            .where(AdminPassword.expires_at > now)
            .order_by(AdminPassword.created_at.desc())
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    @translate_storage_errors("get_active_admin_password")
    async def get_active_for_period(
        self, period: str, now: datetime
    ) -> AdminPasswordResult | None:
        """Return the active, unexpired record for period, or None."""
        result = await self.db.execute(
            select(AdminPassword)
            .where(AdminPassword.period == period)
            .where(AdminPassword.is_active.is_(True))
            .where(AdminPassword.expires_at > now)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row else None

    @translate_storage_errors("activate_admin_password")
    async def activate(
        self, data: AdminPasswordCreate, *, replace_current: bool
    ) -> AdminPasswordResult:
        """Deactivate superseded rows and insert data as the active row, in one savepoint.

        With replace_current=False only rows from other periods or expired rows
        are deactivated, so a valid row written by a concurrent caller for the
        same period survives and the insert hits uq_admin_password_single_active.

        Raises:
            ActivePasswordConflictError: The unique index rejected the insert.
        """
        superseded = AdminPassword.is_active.is_(True)
        if not replace_current:
            superseded = and_(
                superseded,
                or_(
                    AdminPassword.period != data.period,
                    AdminPassword.expires_at <= data.created_at,
                ),
            )
        row = AdminPassword(
            id=generate_cuid(),
            period=data.period,
            password=data.password,
            hashed_password=data.hashed_password,
            created_at=data.created_at,
            updated_at=data.created_at,
            expires_at=data.expires_at,
            is_active=True,
            usage_count=0,
            last_used_at=None,
            deactivated_at=None,
        )
        try:
            async with self.db.begin_nested():
                await self.db.execute(
                    update(AdminPassword)
                    .where(superseded)
                    .values(is_active=False, deactivated_at=data.created_at)
                    .execution_options(synchronize_session="fetch")
                )
                self.db.add(row)
                await self.db.flush()
        except IntegrityError as e:
            logger.info(
                "Active admin password slot already taken (period %s); deferring to winner",
                data.period,
            )
            raise ActivePasswordConflictError(data.period) from e
        return _orm_to_result(row)

    @translate_storage_errors("list_admin_passwords")
    async def list_overlapping(self, start: datetime) -> list[AdminPasswordResult]:
        """Return records whose validity window ends after start (newest first)."""
        result = await self.db.execute(
            select(AdminPassword)
            .where(AdminPassword.expires_at > start)
            .order_by(AdminPassword.created_at.desc())
        )
        return [_orm_to_result(r) for r in result.scalars().all()]
