"""Application lifespan: startup and shutdown.

Wiring only: logging on startup, DB engine dispose on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from adminpass.core.config import get_settings
from adminpass.infrastructure.persistence.database import dispose_engine
from adminpass.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, yield, then dispose the database engine."""
    setup_logging()
    settings = get_settings()
    logger.info(
        "%s %s starting (business timezone %s)",
        settings.app_name,
        settings.app_version,
        settings.admin_password_timezone,
    )

    yield

    await dispose_engine()
