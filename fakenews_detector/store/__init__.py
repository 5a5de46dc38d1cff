"""Process-wide shared state: result cache and request rate limiter."""

from .result_cache import CacheEntry, ResultCache
from .rate_limit import RateLimitEntry, RateLimiter, RateLimitResult, get_client_id

__all__ = [
    "CacheEntry",
    "ResultCache",
    "RateLimitEntry",
    "RateLimiter",
    "RateLimitResult",
    "get_client_id",
]
