"""
Fixed-window rate limiter.

State lives in a process-local dict guarded by one lock. It is lost on
restart and not shared between processes or instances: each instance
enforces its own limit. Cross-process limiting needs a shared store and is
not attempted here.
"""

import logging
import threading
import time
from typing import Callable, Optional

from .interfaces import IRateLimiter
from .models import RateLimitDecision, RateLimitEntry, RateLimitPolicy
from .exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


def epoch_ms() -> int:
    return int(time.time() * 1000)


class FixedWindowRateLimiter(IRateLimiter):
    """
    In-memory fixed-window counter keyed by an arbitrary string.

    The first request for a key, or the first after its window closed,
    replaces the entry with ``count=1``. Later requests increment while
    ``count < requests`` and are denied after that, without counting.

    Every read-modify-write of the map happens under ``self._lock``, so
    concurrent checks of one key never both see room for the last request.

    ``grace_ms`` has no default here; the app passes
    ``Settings.effective_rate_limit_grace_ms`` (the sweep interval unless
    overridden).
    """

    def __init__(
        self,
        grace_ms: int,
        clock: Callable[[], int] = epoch_ms,
    ):
        if grace_ms < 0:
            raise ValueError("grace_ms must be >= 0")
        self._clock = clock
        self._grace_ms = grace_ms
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    @property
    def grace_ms(self) -> int:
        return self._grace_ms

    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)

            if entry is None or now > entry.reset_at:
                entry = RateLimitEntry(count=1, reset_at=now + policy.window_ms)
                self._entries[key] = entry
                allowed = True
            elif entry.count < policy.requests:
                entry.count += 1
                allowed = True
            else:
                allowed = False

            return RateLimitDecision(
                allowed=allowed,
                key=key,
                count=entry.count,
                limit=policy.requests,
                reset_at=entry.reset_at,
                now=now,
            )

    def enforce(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        decision = self.check(key, policy)
        if not decision.allowed:
            raise RateLimitExceededError(decision)
        return decision

    def reset(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def sweep(self, now: Optional[int] = None) -> int:
        """
        Remove entries whose window closed more than ``grace_ms`` ago.

        Returns:
            Number of entries removed
        """
        with self._lock:
            if now is None:
                now = self._clock()
            expired = [
                key
                for key, entry in self._entries.items()
                if now > entry.reset_at + self._grace_ms
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug(f"Swept {len(expired)} expired rate limit entries")
        return len(expired)

    def get_entry(self, key: str) -> Optional[RateLimitEntry]:
        """Copy of the key's entry, for inspection in tests and admin tools."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
