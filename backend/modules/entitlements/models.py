"""
Entitlements module data models.

ProfileRecord is the explicit shape of a row in the users table. Every field
is optional and tolerant of junk: a value of the wrong type is read as
absent rather than failing the request.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Tier(str, Enum):
    """
    Ordered entitlement level.

    Comparison operators follow the product ordering, not string order.
    FOUNDER is an override that gates like DEEPENING.
    """

    FREE = "FREE"
    STARTER = "STARTER"
    AI_BLUEPRINT = "AI_BLUEPRINT"
    ACCELERATOR = "ACCELERATOR"
    DEEPENING = "DEEPENING"
    FOUNDER = "FOUNDER"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank


_TIER_ORDER = [
    Tier.FREE,
    Tier.STARTER,
    Tier.AI_BLUEPRINT,
    Tier.ACCELERATOR,
    Tier.DEEPENING,
    Tier.FOUNDER,
]


class RoleKey(str, Enum):
    """Known role keys. Records may carry others; they are kept as plain strings."""

    VISITOR = "visitor"
    EXPLORER = "explorer"


class Membership(BaseModel):
    """The nested ``membership`` object of a profile row."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tier: Optional[str] = None

    @field_validator("tier", mode="before")
    @classmethod
    def _string_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ProfileRecord(BaseModel):
    """
    Persisted per-user document, keyed by uid.

    Owned by the document store; this backend reads it and writes only
    the accept-terms fields.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="User ID")

    # Entitlement fields (redundant legacy fields, see policy.derive_tier)
    role_keys: frozenset[str] = Field(default_factory=frozenset)
    membership: Optional[Membership] = None
    entitlement_tier: Optional[str] = None
    tier: Optional[str] = None
    is_founder: Optional[bool] = None
    role: Optional[str] = None

    # Onboarding / session state
    accepted_terms_at: Optional[datetime] = None
    accepted_terms_version: Optional[str] = None
    tokens_valid_after: Optional[datetime] = None

    # Display fields
    email: Optional[str] = None
    display_name: Optional[str] = None
    archetype_primary: Optional[str] = None
    archetype_secondary: Optional[str] = None
    stage: Optional[str] = None

    @field_validator("role_keys", mode="before")
    @classmethod
    def _role_keys(cls, value: Any) -> frozenset[str]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return frozenset()
        return frozenset(v for v in value if isinstance(v, str) and v)

    @field_validator("membership", mode="before")
    @classmethod
    def _membership(cls, value: Any) -> Optional[dict]:
        return value if isinstance(value, dict) else None

    @field_validator(
        "entitlement_tier",
        "tier",
        "role",
        "accepted_terms_version",
        "email",
        "display_name",
        "archetype_primary",
        "archetype_secondary",
        "stage",
        mode="before",
    )
    @classmethod
    def _string_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("is_founder", mode="before")
    @classmethod
    def _strict_bool(cls, value: Any) -> Optional[bool]:
        return value if isinstance(value, bool) else None

    @field_validator("accepted_terms_at", "tokens_valid_after", mode="before")
    @classmethod
    def _timestamp_or_none(cls, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not value:
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None


class Entitlements(BaseModel):
    """
    Derived entitlements of an identity.

    ``tier`` keeps FOUNDER as its own value; ``gating_tier`` is the
    DEEPENING remap used where FOUNDER must look like DEEPENING.
    """

    model_config = ConfigDict(frozen=True)

    tier: Tier = Field(default=Tier.FREE)
    roles: frozenset[str] = Field(default_factory=lambda: frozenset({RoleKey.VISITOR.value}))
    is_founder: bool = Field(default=False)

    @property
    def gating_tier(self) -> Tier:
        if self.is_founder or self.tier is Tier.FOUNDER:
            return Tier.DEEPENING
        return self.tier

    def has_role(self, role_key: str) -> bool:
        return self.is_founder or role_key in self.roles
