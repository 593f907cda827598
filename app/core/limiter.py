"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
SEARCH_LIMIT = "60/minute"
SUGGESTION_LIMIT = "120/minute"

limit_search = limiter.limit(SEARCH_LIMIT)
limit_suggestions = limiter.limit(SUGGESTION_LIMIT)
