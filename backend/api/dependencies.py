"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests install a container built from fakes with set_container() instead of
patching module globals.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.sessions.interfaces import ISessionResolver, ISessionVerifier
    from modules.entitlements.interfaces import IEntitlementEvaluator, IProfileStore
    from modules.entitlements.models import ProfileRecord
    from modules.ratelimit.interfaces import IRateLimiter
    from modules.ratelimit.models import RateLimitPolicy


class DeferredProfileStore:
    """
    IProfileStore that looks up the container's store on every call.

    Services built at dependency-resolution time hold this instead of the
    real store, so a request that never reads a profile (no session cookie,
    public page) never opens the Supabase client.
    """

    def __init__(self, container: "ServiceContainer") -> None:
        self._container = container

    def get(self, uid: str) -> "Optional[ProfileRecord]":
        return self._container.profile_store.get(uid)

    def get_tokens_valid_after(self, uid: str) -> Optional[datetime]:
        return self._container.profile_store.get_tokens_valid_after(uid)

    def accept_terms(self, uid: str, version: str) -> datetime:
        return self._container.profile_store.accept_terms(uid, version)


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Any of them can be supplied up front, which is
    how tests swap in in-memory fakes.
    """

    def __init__(
        self,
        profile_store: "IProfileStore | None" = None,
        session_verifier: "ISessionVerifier | None" = None,
        rate_limiter: "IRateLimiter | None" = None,
        policies: "dict[str, RateLimitPolicy] | None" = None,
    ) -> None:
        self._profile_store = profile_store
        self._session_verifier = session_verifier
        self._rate_limiter = rate_limiter
        self._policies = policies
        self._session_resolver: "ISessionResolver | None" = None
        self._entitlement_evaluator: "IEntitlementEvaluator | None" = None
        self._deferred_store = DeferredProfileStore(self)

    @property
    def profile_store(self) -> "IProfileStore":
        """
        Get the profile store (Supabase users table).

        Creating it opens the Supabase client; request-time services use
        ``deferred_profile_store`` instead.
        """
        if self._profile_store is None:
            from modules.entitlements.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_store = ProfileRepository(
                get_supabase_client(),
                table=get_settings().users_table,
            )
        return self._profile_store

    @property
    def deferred_profile_store(self) -> "IProfileStore":
        """Profile store whose Supabase client is only opened on first call."""
        return self._deferred_store

    @property
    def session_verifier(self) -> "ISessionVerifier":
        """Get the session-token verifier."""
        if self._session_verifier is None:
            from modules.sessions.verifier import JWTSessionVerifier
            settings = get_settings()
            self._session_verifier = JWTSessionVerifier(
                secret=settings.session_jwt_secret,
                audience=settings.session_jwt_audience,
                revocations=self.deferred_profile_store,
            )
        return self._session_verifier

    @property
    def sessions(self) -> "ISessionResolver":
        """Get the session resolver."""
        if self._session_resolver is None:
            from modules.sessions.service import SessionResolver
            self._session_resolver = SessionResolver(self.session_verifier)
        return self._session_resolver

    @property
    def entitlements(self) -> "IEntitlementEvaluator":
        """Get the entitlement evaluator."""
        if self._entitlement_evaluator is None:
            from modules.entitlements.service import EntitlementEvaluator
            self._entitlement_evaluator = EntitlementEvaluator(self.deferred_profile_store)
        return self._entitlement_evaluator

    @property
    def rate_limiter(self) -> "IRateLimiter":
        """Get the process-wide rate limiter."""
        if self._rate_limiter is None:
            from modules.ratelimit.limiter import FixedWindowRateLimiter
            self._rate_limiter = FixedWindowRateLimiter(
                grace_ms=get_settings().effective_rate_limit_grace_ms,
            )
        return self._rate_limiter

    @property
    def policies(self) -> "dict[str, RateLimitPolicy]":
        """Named rate limit policies; ``default`` comes from settings."""
        if self._policies is None:
            from modules.ratelimit.models import DEFAULT_POLICIES, RateLimitPolicy
            settings = get_settings()
            self._policies = {
                **DEFAULT_POLICIES,
                "default": RateLimitPolicy(
                    requests=settings.rate_limit_requests,
                    window_ms=settings.rate_limit_window_ms,
                ),
            }
        return self._policies


# Module-level container singleton
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a specific container (used by tests)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances, including an empty rate limiter.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_resolver() -> "ISessionResolver":
    """FastAPI dependency for the session resolver."""
    return get_container().sessions


def get_entitlement_evaluator() -> "IEntitlementEvaluator":
    """FastAPI dependency for the entitlement evaluator."""
    return get_container().entitlements


def get_profile_store() -> "IProfileStore":
    """FastAPI dependency for the profile store."""
    return get_container().deferred_profile_store


def get_rate_limiter() -> "IRateLimiter":
    """FastAPI dependency for the rate limiter."""
    return get_container().rate_limiter


def get_rate_limit_policies() -> "dict[str, RateLimitPolicy]":
    """FastAPI dependency for the named rate limit policies."""
    return get_container().policies
