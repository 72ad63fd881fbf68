"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from adminpass.api.v1.dependencies.auth import get_current_user, require_admin
from adminpass.api.v1.dependencies.db import (
    build_admin_password_service,
    get_admin_password_service,
    get_user_role_repo,
)

__all__ = [
    "build_admin_password_service",
    "get_admin_password_service",
    "get_current_user",
    "get_user_role_repo",
    "require_admin",
]
