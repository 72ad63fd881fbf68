"""ORM models. Import from here so every table is registered on Base.metadata."""

from adminpass.infrastructure.persistence.models.admin_password import (
    AdminPassword,
    AdminPasswordEvent,
    AdminPasswordUsage,
)
from adminpass.infrastructure.persistence.models.user_role import UserRoleAssignment

__all__ = [
    "AdminPassword",
    "AdminPasswordEvent",
    "AdminPasswordUsage",
    "UserRoleAssignment",
]
