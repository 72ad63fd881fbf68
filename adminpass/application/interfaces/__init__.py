"""Repository ports (protocols) implemented by infrastructure."""

from adminpass.application.interfaces.repositories import (
    IAdminPasswordEventRepository,
    IAdminPasswordRepository,
    IAdminPasswordUsageRepository,
    IUserRoleRepository,
)

__all__ = [
    "IAdminPasswordEventRepository",
    "IAdminPasswordRepository",
    "IAdminPasswordUsageRepository",
    "IUserRoleRepository",
]
