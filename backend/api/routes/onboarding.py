"""
Onboarding endpoints.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from shared.models import Identity
from modules.entitlements.interfaces import IProfileStore
from ..dependencies import get_profile_store
from ..middleware.auth import get_current_identity
from ..middleware.rate_limit import rate_limit

router = APIRouter()

DEFAULT_TERMS_VERSION = "v1"


class AcceptTermsRequest(BaseModel):
    """Body of POST /accept. Accepts the camelCase key the web client sends."""

    model_config = ConfigDict(populate_by_name=True)

    accepted_terms_version: str = Field(
        default=DEFAULT_TERMS_VERSION,
        alias="acceptedTermsVersion",
        min_length=1,
        max_length=32,
    )


class AcceptTermsResponse(BaseModel):
    ok: bool
    accepted_terms_at: datetime
    accepted_terms_version: str


@router.post(
    "/accept",
    response_model=AcceptTermsResponse,
    dependencies=[Depends(rate_limit("default", by="uid"))],
)
async def accept_terms(
    body: Optional[AcceptTermsRequest] = None,
    identity: Identity = Depends(get_current_identity),
    store: IProfileStore = Depends(get_profile_store),
) -> AcceptTermsResponse:
    """
    Record that the caller accepted the terms.

    The body is optional; the version defaults to "v1".
    """
    version = body.accepted_terms_version if body else DEFAULT_TERMS_VERSION
    accepted_at = store.accept_terms(identity.uid, version)
    return AcceptTermsResponse(
        ok=True,
        accepted_terms_at=accepted_at,
        accepted_terms_version=version,
    )
