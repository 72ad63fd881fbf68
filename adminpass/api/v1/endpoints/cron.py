"""Cron hook: ensure this week's admin password exists.

Called by an external scheduler with ?token=<CRON_SECRET_TOKEN>. POST is
accepted for webhook-style schedulers.
"""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from adminpass.api.v1.dependencies import get_admin_password_service
from adminpass.application.use_cases.admin_password import AdminPasswordService
from adminpass.core.config import get_settings
from adminpass.core.limiter import limit_writes
from adminpass.domain.enums import GenerationMethod
from adminpass.domain.exceptions import ConfigurationError, UnauthorizedError
from adminpass.schemas.admin_password import CronRunResponse
from adminpass.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


def verify_cron_token(token: str | None = Query(None)) -> None:
    """Constant-time check of ?token= against CRON_SECRET_TOKEN.

    Raises:
        ConfigurationError: CRON_SECRET_TOKEN is not set.
        UnauthorizedError: token missing or wrong.
    """
    expected = get_settings().cron_secret_token
    if expected is None or not expected.get_secret_value():
        raise ConfigurationError("CRON_SECRET_TOKEN")
    if not token or not hmac.compare_digest(
        token.encode(), expected.get_secret_value().encode()
    ):
        raise UnauthorizedError()


@router.api_route("/daily-password", methods=["GET", "POST"], response_model=CronRunResponse)
@limit_writes
async def run_daily_password(
    request: Request,
    _: Annotated[None, Depends(verify_cron_token)],
    service: Annotated[AdminPasswordService, Depends(get_admin_password_service)],
) -> CronRunResponse:
    """Ensure the current period has an active password (idempotent)."""
    result = await service.ensure_active_password(method=GenerationMethod.CRON)
    message = (
        "Admin password generated"
        if result.created
        else "Admin password already exists for this period"
    )
    logger.info("Cron run: %s (period %s)", message, result.record.period)
    return CronRunResponse(
        message=message,
        created=result.created,
        period=result.record.period,
        expires_at=result.record.expires_at,
        timestamp=utc_now(),
    )
