"""
Rate limit module data models.

All timestamps are epoch milliseconds.
"""

import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RateLimitPolicy(BaseModel):
    """At most ``requests`` calls per fixed window of ``window_ms``."""

    model_config = ConfigDict(frozen=True)

    requests: int = Field(..., gt=0, description="Requests allowed per window")
    window_ms: int = Field(..., gt=0, description="Window length in milliseconds")


@dataclass
class RateLimitEntry:
    """Counter for one key. Mutated only under the limiter's lock."""

    count: int
    reset_at: int


class RateLimitDecision(BaseModel):
    """Outcome of a single check."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    key: str
    count: int = Field(..., ge=0, description="Requests counted in the current window")
    limit: int
    reset_at: int = Field(..., description="When the current window closes (epoch ms)")
    now: int = Field(..., description="Clock reading used for the decision (epoch ms)")

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)

    @property
    def retry_after_seconds(self) -> Optional[int]:
        """Whole seconds until the window reopens; None when allowed."""
        if self.allowed:
            return None
        return max(1, math.ceil((self.reset_at - self.now) / 1000))


MINUTE_MS = 60_000

# Per-endpoint policies
DEFAULT_POLICIES: dict[str, RateLimitPolicy] = {
    "gpt": RateLimitPolicy(requests=30, window_ms=MINUTE_MS),
    "gpt_stream": RateLimitPolicy(requests=20, window_ms=MINUTE_MS),
    "preferences": RateLimitPolicy(requests=100, window_ms=MINUTE_MS),
    "focus": RateLimitPolicy(requests=20, window_ms=MINUTE_MS),
    "default": RateLimitPolicy(requests=60, window_ms=MINUTE_MS),
}
