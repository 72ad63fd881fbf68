"""JWT token creation and verification for admin callers.

The token subject (sub) is the user id; roles are not carried in the token
but resolved from the user_role table on each request.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from adminpass.core.config import get_settings
from adminpass.domain.exceptions import ConfigurationError
from adminpass.shared.utils.datetime import utc_now


def _secret() -> str:
    secret = get_settings().secret_key.get_secret_value()
    if not secret:
        raise ConfigurationError("SECRET_KEY")
    return secret


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token for subject.

    Args:
        subject: User id placed in the sub claim.
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.
        extra_claims: Additional claims to encode.

    Returns:
        Encoded JWT string.

    Raises:
        ConfigurationError: SECRET_KEY is not set.
    """
    settings = get_settings()
    to_encode: dict[str, Any] = dict(extra_claims or {})
    to_encode["sub"] = subject
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = utc_now() + ttl
    encoded = jwt.encode(to_encode, _secret(), algorithm=settings.algorithm)
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ConfigurationError: SECRET_KEY is not set.
        ValueError: Token is invalid, expired, or missing exp / sub.
    """
    settings = get_settings()
    secret = _secret()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
