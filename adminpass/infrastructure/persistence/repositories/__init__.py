"""Persistence repositories. Re-exports for dependency injection."""

from adminpass.infrastructure.persistence.repositories.admin_password_event_repo import (
    AdminPasswordEventRepository,
)
from adminpass.infrastructure.persistence.repositories.admin_password_repo import (
    AdminPasswordRepository,
)
from adminpass.infrastructure.persistence.repositories.admin_password_usage_repo import (
    AdminPasswordUsageRepository,
)
from adminpass.infrastructure.persistence.repositories.user_role_repo import UserRoleRepository

__all__ = [
    "AdminPasswordEventRepository",
    "AdminPasswordRepository",
    "AdminPasswordUsageRepository",
    "UserRoleRepository",
]
