"""
Rate limit dependencies.

Routes opt in with ``dependencies=[Depends(rate_limit("gpt", by="ip"))]``.
Keys are namespaced by policy so one caller's budgets on different
endpoints stay independent.
"""

from fastapi import Depends, Request

from shared.logging import log_security_event
from shared.models import Identity
from modules.ratelimit.interfaces import IRateLimiter
from modules.ratelimit.models import RateLimitDecision, RateLimitPolicy
from modules.ratelimit.exceptions import RateLimitExceededError

from ..dependencies import get_rate_limit_policies, get_rate_limiter
from .auth import client_ip, get_current_identity

KEY_SOURCES = ("ip", "uid")


def _enforce(
    limiter: IRateLimiter,
    policy: RateLimitPolicy,
    key: str,
    request: Request,
) -> RateLimitDecision:
    try:
        return limiter.enforce(key, policy)
    except RateLimitExceededError as e:
        log_security_event(
            "rate_limit",
            key=key,
            path=request.url.path,
            retry_after=e.retry_after_seconds,
        )
        raise


def rate_limit(policy_name: str = "default", by: str = "ip"):
    """
    Dependency factory for a named rate limit policy.

    Args:
        policy_name: Key into the container's policies; unknown names use "default"
        by: "ip" (checked before the session is resolved) or "uid"
            (checked after, so it implies authentication)
    """
    if by not in KEY_SOURCES:
        raise ValueError(f"rate_limit key source must be one of {KEY_SOURCES}, got {by!r}")

    def _policy(policies: dict[str, RateLimitPolicy]) -> RateLimitPolicy:
        return policies.get(policy_name) or policies["default"]

    if by == "ip":

        async def by_ip(
            request: Request,
            limiter: IRateLimiter = Depends(get_rate_limiter),
            policies: dict[str, RateLimitPolicy] = Depends(get_rate_limit_policies),
        ) -> RateLimitDecision:
            key = f"{policy_name}:ip:{client_ip(request)}"
            return _enforce(limiter, _policy(policies), key, request)

        return by_ip

    async def by_uid(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        limiter: IRateLimiter = Depends(get_rate_limiter),
        policies: dict[str, RateLimitPolicy] = Depends(get_rate_limit_policies),
    ) -> RateLimitDecision:
        key = f"{policy_name}:uid:{identity.uid}"
        return _enforce(limiter, _policy(policies), key, request)

    return by_uid
