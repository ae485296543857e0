"""
Rate limit module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import RateLimitDecision, RateLimitPolicy


@runtime_checkable
class IRateLimiter(Protocol):
    """Allow/deny decisions for request keys (IP address, uid, ...)."""

    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        """Count a request for key and decide whether it is allowed."""
        ...

    def enforce(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        """
        Like check(), but raise when denied.

        Raises:
            RateLimitError: If the key has used up its window
        """
        ...

    def reset(self, key: str) -> None:
        """Forget the key's current window."""
        ...

    def sweep(self, now: Optional[int] = None) -> int:
        """Drop entries whose window closed more than the grace period ago."""
        ...

    def __len__(self) -> int:
        """Number of tracked keys."""
        ...
