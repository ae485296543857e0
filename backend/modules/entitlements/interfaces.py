"""
Entitlements module interfaces.

Route handlers depend on IEntitlementEvaluator; the evaluator reads
profiles through IProfileStore.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from shared.models import Identity

from .models import Entitlements, ProfileRecord, Tier


@runtime_checkable
class IProfileStore(Protocol):
    """Keyed access to the users collection."""

    def get(self, uid: str) -> Optional[ProfileRecord]:
        """
        Get a user's profile record.

        Returns:
            ProfileRecord if the document exists, None otherwise

        Raises:
            ExternalServiceError: If the store cannot be reached
        """
        ...

    def get_tokens_valid_after(self, uid: str) -> Optional[datetime]:
        """Return the user's session revocation timestamp, if any."""
        ...

    def accept_terms(self, uid: str, version: str) -> datetime:
        """
        Record that the user accepted the terms.

        Returns:
            The acceptance timestamp that was stored
        """
        ...


@runtime_checkable
class IEntitlementEvaluator(Protocol):
    """Interface for entitlement evaluation and gating."""

    async def evaluate(self, identity: Identity) -> Entitlements:
        """
        Derive the identity's tier, roles and founder flag.

        An absent profile yields FREE / {visitor}; it is not an error.
        """
        ...

    async def evaluate_with_profile(
        self, identity: Identity
    ) -> tuple[Optional[ProfileRecord], Entitlements]:
        """Same as evaluate(), also returning the profile record that was read."""
        ...

    async def require_role(self, identity: Identity, role_key: str) -> Entitlements:
        """
        Raises:
            AuthorizationError: If the identity lacks role_key
        """
        ...

    async def require_tier_at_least(self, identity: Identity, min_tier: Tier) -> Entitlements:
        """
        Raises:
            AuthorizationError: If the identity's tier is below min_tier
        """
        ...

    async def require_founder(self, identity: Identity) -> Entitlements:
        """
        Raises:
            AuthorizationError: If the identity is not a founder
        """
        ...
