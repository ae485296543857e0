"""
Session authentication and entitlement dependencies.

Reads the session cookie, resolves it through the session resolver and
exposes role/tier gates as FastAPI dependencies. Failures are raised as the
module exceptions and turned into 401/403 by the app's exception handlers.
"""

from typing import Optional

from fastapi import Depends, Request

from shared.config import get_settings
from shared.exceptions import AuthenticationError, AuthorizationError
from shared.logging import log_security_event
from shared.models import Identity
from modules.sessions.interfaces import ISessionResolver
from modules.entitlements.interfaces import IEntitlementEvaluator
from modules.entitlements.models import Entitlements, Tier

from ..dependencies import get_entitlement_evaluator, get_session_resolver


def client_ip(request: Request) -> str:
    """Network origin of the request, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the configured cookie, or None when absent."""
    return request.cookies.get(get_settings().session_cookie_name)


async def resolve_identity(request: Request, resolver: ISessionResolver) -> Identity:
    """Resolve the request's session, logging failures as security events."""
    try:
        return await resolver.resolve(get_session_token(request))
    except AuthenticationError as e:
        log_security_event(
            "auth_failure",
            ip=client_ip(request),
            path=request.url.path,
            code=e.code,
        )
        raise


async def get_current_identity(
    request: Request,
    resolver: ISessionResolver = Depends(get_session_resolver),
) -> Identity:
    """
    Dependency that requires a valid session.

    Usage:
        @router.get("/protected")
        async def protected_route(identity: Identity = Depends(get_current_identity)):
            return {"uid": identity.uid}
    """
    return await resolve_identity(request, resolver)


def _log_forbidden(request: Request, identity: Identity, error: AuthorizationError) -> None:
    log_security_event(
        "forbidden",
        uid=identity.uid,
        path=request.url.path,
        code=error.code,
    )


def require_role(role_key: str):
    """
    Dependency factory for a role gate.

    Usage:
        @router.get("/labs/{lab_id}")
        async def lab(entitlements: Entitlements = Depends(require_role("explorer"))):
            ...
    """

    async def dependency(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
    ) -> Entitlements:
        try:
            return await evaluator.require_role(identity, role_key)
        except AuthorizationError as e:
            _log_forbidden(request, identity, e)
            raise

    return dependency


def require_tier(min_tier: Tier):
    """Dependency factory for a minimum-tier gate."""

    async def dependency(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
    ) -> Entitlements:
        try:
            return await evaluator.require_tier_at_least(identity, min_tier)
        except AuthorizationError as e:
            _log_forbidden(request, identity, e)
            raise

    return dependency


def require_founder():
    """Dependency factory for founder-only features."""

    async def dependency(
        request: Request,
        identity: Identity = Depends(get_current_identity),
        evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
    ) -> Entitlements:
        try:
            return await evaluator.require_founder(identity)
        except AuthorizationError as e:
            _log_forbidden(request, identity, e)
            raise

    return dependency

