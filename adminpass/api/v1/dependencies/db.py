"""Repository and service providers (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from adminpass.application.use_cases.admin_password import AdminPasswordService
from adminpass.core.config import get_settings
from adminpass.infrastructure.persistence.database import get_db_transactional
from adminpass.infrastructure.persistence.repositories import (
    AdminPasswordEventRepository,
    AdminPasswordRepository,
    AdminPasswordUsageRepository,
    UserRoleRepository,
)


def build_admin_password_service(db: AsyncSession) -> AdminPasswordService:
    """AdminPasswordService on db, configured from settings. Shared with scripts."""
    settings = get_settings()
    return AdminPasswordService(
        AdminPasswordRepository(db),
        AdminPasswordUsageRepository(db),
        AdminPasswordEventRepository(db),
        tz=settings.business_timezone,
        max_rotate_attempts=settings.admin_password_max_rotate_attempts,
    )


def get_user_role_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRoleRepository:
    return UserRoleRepository(db)


def get_admin_password_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AdminPasswordService:
    """Build AdminPasswordService on the request's transactional session."""
    return build_admin_password_service(db)
