"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Admin write routes only. The event trigger route is never limited:
# producers share hosts and a rejected event would be lost.
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
