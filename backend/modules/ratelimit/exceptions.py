"""
Rate limit module exceptions.
"""

from shared.exceptions import RateLimitError

from .models import RateLimitDecision


class RateLimitExceededError(RateLimitError):
    """
    Raised when a key has used up its window.

    Carries the decision so the API layer can set Retry-After.
    """

    def __init__(self, decision: RateLimitDecision):
        super().__init__(
            "Too many requests",
            code="RATE_LIMITED",
            details={
                "reset_at": decision.reset_at,
                "retry_after": decision.retry_after_seconds,
                "limit": decision.limit,
            },
        )
        self.decision = decision

    @property
    def retry_after_seconds(self) -> int:
        return self.decision.retry_after_seconds or 1
