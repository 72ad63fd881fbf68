"""Security: JWT creation and verification for admin callers."""

from adminpass.infrastructure.security.jwt import create_access_token, verify_token

__all__ = ["create_access_token", "verify_token"]
