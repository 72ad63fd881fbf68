"""Application use cases: one entry point per workflow."""

from adminpass.application.use_cases.admin_password import AdminPasswordService

__all__ = ["AdminPasswordService"]
