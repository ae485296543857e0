"""
Entitlements module.

Derives tier and roles from the persisted profile and enforces gates.

Public API:
- IEntitlementEvaluator / EntitlementEvaluator: evaluate, require_role, require_tier_at_least
- IProfileStore / ProfileRepository: users-table access
- Tier, RoleKey, ProfileRecord, Entitlements
- derive_tier, evaluate_record, tier_satisfies: the one tier derivation
- required_tier_for, is_public_path: page gating table
"""

from .interfaces import IEntitlementEvaluator, IProfileStore
from .models import Entitlements, Membership, ProfileRecord, RoleKey, Tier
from .policy import derive_tier, derive_roles, evaluate_record, is_founder_record, parse_tier, tier_satisfies
from .gates import is_public_path, required_tier_for
from .repository import ProfileRepository
from .service import EntitlementEvaluator
from .exceptions import (
    FounderRequiredError,
    InsufficientTierError,
    MissingRoleError,
    ProfileStoreUnavailableError,
)

__all__ = [
    # Interfaces
    "IEntitlementEvaluator",
    "IProfileStore",
    # Implementations
    "EntitlementEvaluator",
    "ProfileRepository",
    # Models
    "Entitlements",
    "Membership",
    "ProfileRecord",
    "RoleKey",
    "Tier",
    # Policy
    "derive_tier",
    "derive_roles",
    "evaluate_record",
    "is_founder_record",
    "parse_tier",
    "tier_satisfies",
    "is_public_path",
    "required_tier_for",
    # Exceptions
    "FounderRequiredError",
    "InsufficientTierError",
    "MissingRoleError",
    "ProfileStoreUnavailableError",
]
