"""
Session module data models.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.models import Identity

# Claims with a fixed meaning; anything else is treated as a custom claim
REGISTERED_CLAIMS = frozenset(
    {
        "sub",
        "aud",
        "exp",
        "iat",
        "nbf",
        "iss",
        "jti",
        "email",
        "email_verified",
        "email_confirmed_at",
    }
)


class VerifiedSession(BaseModel):
    """
    Result of a successful session-token verification.

    Produced by an ISessionVerifier and consumed only by the resolver.
    """

    uid: str = Field(..., min_length=1, description="Subject of the session")
    email: Optional[str] = Field(None, description="Email claim")
    email_verified: bool = Field(default=False)
    issued_at: datetime = Field(..., description="Token issue time (UTC)")
    claims: dict[str, Any] = Field(default_factory=dict, description="Custom claims")

    model_config = {"frozen": True}

    @classmethod
    def from_claims(cls, payload: dict[str, Any]) -> "VerifiedSession":
        """Build a session from a decoded JWT payload."""
        email_verified = bool(payload.get("email_verified")) or (
            payload.get("email_confirmed_at") is not None
        )
        return cls(
            uid=payload["sub"],
            email=payload.get("email"),
            email_verified=email_verified,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            claims={k: v for k, v in payload.items() if k not in REGISTERED_CLAIMS},
        )

    def to_identity(self) -> Identity:
        return Identity(
            uid=self.uid,
            email=self.email,
            email_verified=self.email_verified,
            claims=self.claims,
            issued_at=self.issued_at,
        )
