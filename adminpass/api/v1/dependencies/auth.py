"""Caller identity: bearer JWT for the user id, user_role table for the role."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adminpass.api.v1.dependencies.db import get_user_role_repo
from adminpass.application.dtos.user import CurrentUser
from adminpass.application.interfaces.repositories import IUserRoleRepository
from adminpass.domain.enums import UserRole
from adminpass.domain.exceptions import ForbiddenError, UnauthorizedError
from adminpass.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    role_repo: Annotated[IUserRoleRepository, Depends(get_user_role_repo)],
) -> CurrentUser:
    """Return the caller from the bearer token; raise 401 if missing or invalid."""
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        raise UnauthorizedError() from e
    user_id = str(payload["sub"])
    return CurrentUser(id=user_id, role=await role_repo.get_role(user_id))


def require_admin(message: str = "Only administrators can manage admin passwords"):
    """Dependency factory: require an authenticated caller with the admin role."""

    async def _require(
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not user.is_admin:
            raise ForbiddenError(message, required_role=UserRole.ADMIN.value)
        return user

    return _require
