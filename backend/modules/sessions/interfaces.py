"""
Session module interfaces.

Route handlers depend on ISessionResolver; the resolver depends on an
ISessionVerifier, which is the only piece that knows the token format.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from shared.models import Identity

from .models import VerifiedSession


@runtime_checkable
class ISessionVerifier(Protocol):
    """External identity verification service."""

    async def verify(self, token: str, check_revoked: bool = True) -> VerifiedSession:
        """
        Verify a session token.

        Args:
            token: Raw session token from the cookie
            check_revoked: Reject sessions revoked after issue

        Returns:
            VerifiedSession for the token's subject

        Raises:
            AuthenticationError: If the token is invalid, expired or revoked
        """
        ...


@runtime_checkable
class IRevocationLookup(Protocol):
    """Source of per-user revocation timestamps."""

    def get_tokens_valid_after(self, uid: str) -> Optional[datetime]:
        """
        Return the instant before which the user's sessions are revoked.

        Returns None when the user has never had sessions revoked.
        """
        ...


@runtime_checkable
class ISessionResolver(Protocol):
    """Interface for turning a session token into an Identity."""

    async def resolve(self, raw_token: Optional[str]) -> Identity:
        """
        Resolve a raw session token to an authenticated identity.

        Args:
            raw_token: Token from the session cookie, or None when absent

        Returns:
            Identity of the caller

        Raises:
            AuthenticationError: On any failure; never returns a partial identity
        """
        ...
