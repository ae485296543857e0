"""
Access-check endpoints.

The web app calls these before rendering a gated page or lab so that all
gating decisions are made server-side by the entitlement evaluator.
"""

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from shared.exceptions import AuthorizationError
from shared.logging import log_security_event
from modules.sessions.interfaces import ISessionResolver
from modules.entitlements.interfaces import IEntitlementEvaluator
from modules.entitlements.gates import is_public_path, normalize_path, required_tier_for
from modules.entitlements.models import Entitlements, RoleKey, Tier
from ..dependencies import get_entitlement_evaluator, get_session_resolver
from ..middleware.auth import require_founder, require_role, require_tier, resolve_identity
from ..middleware.rate_limit import rate_limit

router = APIRouter()


class PageAccessResponse(BaseModel):
    path: str
    public: bool
    required_tier: Tier
    allowed: bool
    tier: Tier | None = None


class FeatureAccessResponse(BaseModel):
    feature: str
    allowed: bool
    tier: Tier
    is_founder: bool


@router.get(
    "/access",
    response_model=PageAccessResponse,
    dependencies=[Depends(rate_limit("default", by="ip"))],
)
async def check_page_access(
    request: Request,
    path: str = Query(..., min_length=1, max_length=512, description="Page path to check"),
    resolver: ISessionResolver = Depends(get_session_resolver),
    evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
) -> PageAccessResponse:
    """
    Check whether the caller may open a page.

    Public pages need no session. Every other page needs a valid session
    (401 otherwise) and a tier meeting the page's gate (403 otherwise).
    """
    path = normalize_path(path)
    required = required_tier_for(path)

    if is_public_path(path):
        return PageAccessResponse(path=path, public=True, required_tier=required, allowed=True)

    identity = await resolve_identity(request, resolver)
    try:
        entitlements = await evaluator.require_tier_at_least(identity, required)
    except AuthorizationError as e:
        log_security_event("forbidden", uid=identity.uid, path=path, code=e.code)
        raise

    return PageAccessResponse(
        path=path,
        public=False,
        required_tier=required,
        allowed=True,
        tier=entitlements.tier,
    )


@router.get("/labs/{lab_id}/access", response_model=FeatureAccessResponse)
async def check_lab_access(
    lab_id: str,
    entitlements: Entitlements = Depends(require_role(RoleKey.EXPLORER.value)),
) -> FeatureAccessResponse:
    """Labs are open to explorers."""
    return FeatureAccessResponse(
        feature=f"labs/{lab_id}",
        allowed=True,
        tier=entitlements.tier,
        is_founder=entitlements.is_founder,
    )


@router.get("/deepen/access", response_model=FeatureAccessResponse)
async def check_deepen_access(
    entitlements: Entitlements = Depends(require_tier(Tier.DEEPENING)),
) -> FeatureAccessResponse:
    """Deepening content needs the DEEPENING tier (founders included)."""
    return FeatureAccessResponse(
        feature="deepen",
        allowed=True,
        tier=entitlements.tier,
        is_founder=entitlements.is_founder,
    )


@router.get("/deepen/admin/access", response_model=FeatureAccessResponse)
async def check_deepen_admin_access(
    entitlements: Entitlements = Depends(require_founder()),
) -> FeatureAccessResponse:
    """Intake administration is founder-only."""
    return FeatureAccessResponse(
        feature="deepen/admin",
        allowed=True,
        tier=entitlements.tier,
        is_founder=entitlements.is_founder,
    )
