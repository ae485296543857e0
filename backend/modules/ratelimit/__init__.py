"""
Rate limit module.

Fixed-window, in-process request counting.

Public API:
- IRateLimiter / FixedWindowRateLimiter: check, enforce, reset, sweep
- RateLimitSweeper: periodic background sweep
- RateLimitPolicy, RateLimitDecision, DEFAULT_POLICIES
- RateLimitExceededError
"""

from .interfaces import IRateLimiter
from .limiter import FixedWindowRateLimiter, epoch_ms
from .models import DEFAULT_POLICIES, RateLimitDecision, RateLimitEntry, RateLimitPolicy
from .sweeper import RateLimitSweeper
from .exceptions import RateLimitExceededError

__all__ = [
    "IRateLimiter",
    "FixedWindowRateLimiter",
    "RateLimitSweeper",
    "RateLimitPolicy",
    "RateLimitDecision",
    "RateLimitEntry",
    "DEFAULT_POLICIES",
    "RateLimitExceededError",
    "epoch_ms",
]
