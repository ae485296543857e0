"""
User-related endpoints.

Both endpoints get tier and roles from the entitlement evaluator; neither
reads the raw tier fields of the profile.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.exceptions import NotFoundError
from shared.models import Identity
from modules.entitlements.interfaces import IEntitlementEvaluator
from modules.entitlements.models import Tier
from ..dependencies import get_entitlement_evaluator
from ..middleware.auth import get_current_identity

router = APIRouter()

DEFAULT_STAGE = "Orientation"


class UserResponse(BaseModel):
    """Profile summary for the dashboard."""

    uid: str
    email: str
    display_name: str
    archetype_primary: str
    archetype_secondary: str
    stage: str
    tier: Tier
    is_founder: bool


class MeResponse(BaseModel):
    """The caller's entitlements and onboarding state."""

    uid: str
    tier: Tier
    gating_tier: Tier
    roles: list[str]
    is_founder: bool
    accepted_terms_at: Optional[datetime] = None
    accepted_terms_version: Optional[str] = None


@router.get("/user", response_model=UserResponse)
async def get_user(
    identity: Identity = Depends(get_current_identity),
    evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
) -> UserResponse:
    """
    Get the current user's profile summary.

    Founders are reported with the DEEPENING tier used for feature gating;
    ``is_founder`` carries the underlying flag.
    """
    record, entitlements = await evaluator.evaluate_with_profile(identity)
    if record is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND", details={"uid": identity.uid})

    return UserResponse(
        uid=identity.uid,
        email=record.email or identity.email or "",
        display_name=record.display_name or "",
        archetype_primary=record.archetype_primary or "",
        archetype_secondary=record.archetype_secondary or "",
        stage=record.stage or DEFAULT_STAGE,
        tier=entitlements.gating_tier,
        is_founder=entitlements.is_founder,
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    evaluator: IEntitlementEvaluator = Depends(get_entitlement_evaluator),
) -> MeResponse:
    """
    Get the caller's tier, roles and terms acceptance.

    Works without a profile document (default FREE / visitor).
    """
    record, entitlements = await evaluator.evaluate_with_profile(identity)
    return MeResponse(
        uid=identity.uid,
        tier=entitlements.tier,
        gating_tier=entitlements.gating_tier,
        roles=sorted(entitlements.roles),
        is_founder=entitlements.is_founder,
        accepted_terms_at=record.accepted_terms_at if record else None,
        accepted_terms_version=record.accepted_terms_version if record else None,
    )
