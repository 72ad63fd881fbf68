"""Admin password API: view, ensure, rotate, report and use the weekly PIN.

Every route requires an admin caller. PINs appear only in admin responses;
hashes never leave the service.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from adminpass.api.v1.dependencies import get_admin_password_service, require_admin
from adminpass.application.dtos.user import CurrentUser
from adminpass.application.use_cases.admin_password import AdminPasswordService
from adminpass.core.config import get_settings
from adminpass.core.limiter import limit_validate, limit_writes
from adminpass.domain.enums import GenerationMethod
from adminpass.domain.exceptions import ValidationError
from adminpass.schemas.admin_password import (
    CurrentPasswordResponse,
    EnsurePasswordResponse,
    RegeneratePasswordResponse,
    UseAdminPasswordRequest,
    UseAdminPasswordResponse,
    UsageStatsResponse,
)
from adminpass.shared.request_audit import get_audit_request_context

logger = logging.getLogger(__name__)

router = APIRouter()

GET_ACTIONS = ("current", "stats", "generate", "ensure")


@router.get("", response_model=None)
@limit_writes
async def get_admin_password(
    request: Request,
    service: Annotated[AdminPasswordService, Depends(get_admin_password_service)],
    user: Annotated[
        CurrentUser, Depends(require_admin("Only administrators can view admin passwords"))
    ],
    action: str | None = Query(None, description="current | stats | generate | ensure"),
    days: int | None = Query(None, description="Stats window in days (1-365)"),
) -> (
    CurrentPasswordResponse
    | UsageStatsResponse
    | RegeneratePasswordResponse
    | EnsurePasswordResponse
):
    """Dispatch on ?action=."""
    if action == "current":
        current = await service.get_current(method=GenerationMethod.API, actor_id=user.id)
        return CurrentPasswordResponse.from_result(current)
    if action == "stats":
        window = days if days is not None else get_settings().admin_password_stats_default_days
        return UsageStatsResponse.from_stats(await service.get_stats(window))
    if action == "generate":
        result = await service.force_regenerate_password(
            method=GenerationMethod.API, actor_id=user.id
        )
        return RegeneratePasswordResponse.from_result(result)
    if action == "ensure":
        ensured = await service.ensure_active_password(
            method=GenerationMethod.API, actor_id=user.id
        )
        return EnsurePasswordResponse.from_result(ensured)
    raise ValidationError(
        "Invalid action. Use 'current', 'stats', 'generate', or 'ensure'", field="action"
    )


@router.post("", response_model=UseAdminPasswordResponse)
@limit_validate
async def use_admin_password(
    request: Request,
    body: UseAdminPasswordRequest,
    service: Annotated[AdminPasswordService, Depends(get_admin_password_service)],
    user: Annotated[
        CurrentUser, Depends(require_admin("Only administrators can use admin passwords"))
    ],
) -> UseAdminPasswordResponse:
    """Validate the PIN for body.action and record the usage. 401 when the PIN is rejected."""
    ip_address, user_agent = get_audit_request_context(request)
    await service.authorize_action(
        body.password,
        user_id=user.id,
        action=body.action,
        target_id=body.target_id,
        target_type=body.target_type,
        metadata=body.metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    return UseAdminPasswordResponse()


@router.put("", response_model=RegeneratePasswordResponse)
@limit_writes
async def regenerate_admin_password(
    request: Request,
    service: Annotated[AdminPasswordService, Depends(get_admin_password_service)],
    user: Annotated[
        CurrentUser, Depends(require_admin("Only administrators can generate admin passwords"))
    ],
) -> RegeneratePasswordResponse:
    """Force a new PIN now, even if one exists for this week."""
    result = await service.force_regenerate_password(
        method=GenerationMethod.API, actor_id=user.id
    )
    ip_address, _ = get_audit_request_context(request)
    logger.info("Admin password regenerated by %s from %s", user.id, ip_address)
    return RegeneratePasswordResponse.from_result(result)
