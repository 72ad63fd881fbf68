"""User role repository (role lookup for admin-only endpoints)."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adminpass.domain.enums import UserRole
from adminpass.infrastructure.persistence.errors import translate_storage_errors
from adminpass.infrastructure.persistence.models.user_role import UserRoleAssignment
from adminpass.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class UserRoleRepository:
    """Resolve and assign staff roles."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @translate_storage_errors("get_user_role")
    async def get_role(self, user_id: str) -> UserRole:
        """Return the user's role. Users without an assignment are staff (no row is created)."""
        result = await self.db.execute(
            select(UserRoleAssignment.role).where(UserRoleAssignment.user_id == user_id)
        )
        value = result.scalar_one_or_none()
        if value is None:
            return UserRole.STAFF
        try:
            return UserRole(value)
        except ValueError:
            logger.warning("Unknown role %r stored for user %s; treating as staff", value, user_id)
            return UserRole.STAFF

    @translate_storage_errors("set_user_role")
    async def set_role(self, user_id: str, role: UserRole) -> None:
        """Create or update the user's role."""
        result = await self.db.execute(
            select(UserRoleAssignment).where(UserRoleAssignment.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            self.db.add(UserRoleAssignment(id=generate_cuid(), user_id=user_id, role=role.value))
        else:
            row.role = role.value
        await self.db.flush()
