"""
Tier and role derivation.

This is the single place that turns a ProfileRecord into entitlements.
Route handlers and services must call these functions instead of reading
the raw tier fields themselves. Every function here is pure.
"""

from typing import Any, Optional

from .models import Entitlements, ProfileRecord, RoleKey, Tier

FOUNDER_MARKER = "founder"

# Product and legacy spellings found in stored tier fields
TIER_ALIASES: dict[str, Tier] = {
    "BASIC_PAID": Tier.STARTER,
    "STARTER_PACK": Tier.STARTER,
    "STARTERPACK": Tier.STARTER,
    "AIBLUEPRINT": Tier.AI_BLUEPRINT,
    "DEEPEN": Tier.DEEPENING,
    "DEEPEN_MEMBERSHIP": Tier.DEEPENING,
}

DEFAULT_ROLES = frozenset({RoleKey.VISITOR.value})


def parse_tier(value: Any) -> Optional[Tier]:
    """
    Parse a stored tier string.

    Case, surrounding whitespace, hyphens and spaces are normalised.
    FOUNDER is not accepted here: founder status only comes from the
    founder flags (see is_founder_record).

    Returns:
        The Tier, or None when the value is not a recognised tier
    """
    if not isinstance(value, str):
        return None
    key = value.strip().upper().replace("-", "_").replace(" ", "_")
    if not key or key == Tier.FOUNDER.value:
        return None
    if key in Tier.__members__:
        return Tier[key]
    return TIER_ALIASES.get(key)


def _is_founder_marker(value: Optional[str]) -> bool:
    # Exact match only; no case or whitespace folding
    return value == FOUNDER_MARKER


def is_founder_record(record: ProfileRecord) -> bool:
    """Whether the record carries any of the founder override flags."""
    return (
        record.is_founder is True
        or _is_founder_marker(record.role)
        or _is_founder_marker(record.entitlement_tier)
    )


def derive_tier(record: ProfileRecord) -> Tier:
    """
    Derive the tier of a profile record.

    Precedence, first match wins:
        1. founder flags -> FOUNDER
        2. membership.tier
        3. entitlement_tier
        4. tier
        5. FREE
    """
    if is_founder_record(record):
        return Tier.FOUNDER

    candidates = (
        record.membership.tier if record.membership else None,
        record.entitlement_tier,
        record.tier,
    )
    for candidate in candidates:
        parsed = parse_tier(candidate)
        if parsed is not None:
            return parsed

    return Tier.FREE


def derive_roles(record: ProfileRecord) -> frozenset[str]:
    """Every identity is a visitor; stored role keys add to that."""
    return DEFAULT_ROLES | record.role_keys


def evaluate_record(record: Optional[ProfileRecord]) -> Entitlements:
    """Entitlements for a record; an absent record gets FREE / visitor."""
    if record is None:
        return Entitlements(tier=Tier.FREE, roles=DEFAULT_ROLES, is_founder=False)

    return Entitlements(
        tier=derive_tier(record),
        roles=derive_roles(record),
        is_founder=is_founder_record(record),
    )


def tier_satisfies(tier: Tier, minimum: Tier) -> bool:
    """DEEPENING and FOUNDER pass every gate; other tiers compare by rank."""
    if tier in (Tier.DEEPENING, Tier.FOUNDER):
        return True
    return tier >= minimum
