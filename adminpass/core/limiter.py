"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. create_app() toggles limiter.enabled from
RATE_LIMIT_ENABLED.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Per client IP. Validation is the PIN-guessing surface.
VALIDATE_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "30/minute"

limit_validate = limiter.limit(VALIDATE_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
