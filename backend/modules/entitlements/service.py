"""
Entitlement evaluator implementation.

Reads the caller's profile once per call and applies the derivation in
policy.py. Performs no writes and holds no per-request state.
"""

import logging
from typing import Optional

from shared.models import Identity

from .interfaces import IEntitlementEvaluator, IProfileStore
from .models import Entitlements, ProfileRecord, Tier
from .policy import evaluate_record, tier_satisfies
from .exceptions import FounderRequiredError, InsufficientTierError, MissingRoleError

logger = logging.getLogger(__name__)


class EntitlementEvaluator(IEntitlementEvaluator):
    """
    Implementation of the entitlement evaluator.

    Store failures propagate as ProfileStoreUnavailableError; an absent
    profile is not a failure.
    """

    def __init__(self, store: IProfileStore):
        self._store = store

    async def evaluate(self, identity: Identity) -> Entitlements:
        _, entitlements = await self.evaluate_with_profile(identity)
        return entitlements

    async def evaluate_with_profile(
        self, identity: Identity
    ) -> tuple[Optional[ProfileRecord], Entitlements]:
        """Evaluate and also return the record that was read, for display fields."""
        record = self._store.get(identity.uid)
        if record is None:
            logger.debug(f"No profile for {identity.uid}, using default entitlements")
        return record, evaluate_record(record)

    async def require_role(self, identity: Identity, role_key: str) -> Entitlements:
        """Founders pass every role gate."""
        entitlements = await self.evaluate(identity)
        if not entitlements.has_role(role_key):
            raise MissingRoleError(role_key, identity.uid)
        return entitlements

    async def require_tier_at_least(self, identity: Identity, min_tier: Tier) -> Entitlements:
        entitlements = await self.evaluate(identity)
        if not tier_satisfies(entitlements.tier, min_tier):
            raise InsufficientTierError(min_tier.value, entitlements.tier.value, identity.uid)
        return entitlements

    async def require_founder(self, identity: Identity) -> Entitlements:
        entitlements = await self.evaluate(identity)
        if not entitlements.is_founder:
            raise FounderRequiredError(identity.uid)
        return entitlements
