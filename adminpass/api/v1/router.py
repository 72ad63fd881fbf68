"""API v1 router aggregation.

All routes use dependencies from adminpass.api.v1.dependencies (no manual
repo/service construction).
"""

from fastapi import APIRouter

from adminpass.api.v1.endpoints import admin_password, cron, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    admin_password.router, prefix="/admin/password", tags=["admin-password"]
)
api_router.include_router(cron.router, prefix="/cron", tags=["cron"])
