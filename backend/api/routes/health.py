"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import supabase_configured
from modules.ratelimit.interfaces import IRateLimiter
from ..dependencies import get_rate_limiter

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    session_verification: str
    document_store: str
    rate_limit_entries: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    limiter: IRateLimiter = Depends(get_rate_limiter),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether session verification and the document store are configured.
    """
    settings = get_settings()
    verification = "configured" if settings.session_jwt_secret else "missing_secret"
    store = "configured" if supabase_configured(settings) else "missing_credentials"
    ready = verification == "configured" and store == "configured"
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        session_verification=verification,
        document_store=store,
        rate_limit_entries=len(limiter),
    )
