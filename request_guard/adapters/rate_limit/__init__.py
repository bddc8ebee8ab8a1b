"""Rate limiting adapters.

The HTTP layer depends on ``AbstractRateLimiter`` only, so the in-memory
fixed-window limiter can be replaced by a shared store without touching
call sites.
"""

from request_guard.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitEntry,
    RateLimitResult,
)
from request_guard.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from request_guard.adapters.rate_limit.sweeper import PeriodicSweeper

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "PeriodicSweeper",
    "RateLimitEntry",
    "RateLimitResult",
]
