"""
Error response models.

Standardized error responses for the API, matching IPurposeError.to_dict().
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Machine-readable error code")
    kind: str = Field(..., description="Error family: UNAUTHENTICATED, FORBIDDEN, RATE_LIMITED, ...")
    message: str = Field(..., description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict)


# OpenAPI documentation for the reserved status codes
GUARDED_ROUTE_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing, invalid, expired or revoked session"},
    403: {"model": ErrorResponse, "description": "Role or tier requirement not met"},
    429: {"model": ErrorResponse, "description": "Rate limited; see Retry-After"},
    503: {"model": ErrorResponse, "description": "Profile store unavailable"},
}
