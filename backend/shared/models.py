"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    The authenticated caller.

    Built fresh on every request from a verified session token and handed
    to route handlers via dependency injection. Never cached across requests.
    """

    uid: str = Field(..., description="Stable user ID (primary key of the users table)")
    email: Optional[str] = Field(None, description="Email claim, if the token carries one")
    email_verified: bool = Field(default=False, description="Whether email is verified (informational)")
    claims: dict[str, Any] = Field(default_factory=dict, description="Custom claims from the token")
    issued_at: Optional[datetime] = Field(None, description="When the session token was issued")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
