"""
Background sweep for the rate limiter.

Runs limiter.sweep() on a fixed interval as an asyncio task owned by the
application lifespan, independent of request handling.
"""

import asyncio
import logging
from typing import Optional

from .interfaces import IRateLimiter

logger = logging.getLogger(__name__)


class RateLimitSweeper:
    """Periodic sweep task. start() and stop() are idempotent."""

    def __init__(self, limiter: IRateLimiter, interval_ms: int):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self._limiter = limiter
        self._interval = interval_ms / 1000
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="rate-limit-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._limiter.sweep()
            except Exception:
                logger.exception("Rate limit sweep failed")
