"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# Multiple limits: all must be satisfied (whichever is hit first applies).
# Point RATE_LIMIT_STORAGE_URI at redis:// when running more than one API pod.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.rate_limit_default,
    storage_uri=settings.rate_limit_storage_uri,
)
