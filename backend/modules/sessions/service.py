"""
Session resolver implementation.

Turns the raw session cookie into an Identity with exactly one call to the
identity verifier. There are no retries and no anonymous fallback: every
failure surfaces as an AuthenticationError.
"""

import logging
from typing import Optional

from shared.exceptions import AuthenticationError
from shared.models import Identity

from .interfaces import ISessionResolver, ISessionVerifier
from .exceptions import MissingSessionError, VerifierUnavailableError

logger = logging.getLogger(__name__)


class SessionResolver(ISessionResolver):
    """
    Implementation of the session resolver.

    Stateless; safe to share between concurrent requests.
    """

    def __init__(self, verifier: ISessionVerifier):
        self._verifier = verifier

    async def resolve(self, raw_token: Optional[str]) -> Identity:
        """
        Resolve a raw session token to an Identity.

        An absent or blank token fails before the verifier is called.
        """
        if raw_token is None or not raw_token.strip():
            raise MissingSessionError()

        try:
            session = await self._verifier.verify(raw_token, check_revoked=True)
        except AuthenticationError:
            raise
        except Exception as e:
            logger.warning(f"Session verifier failed: {type(e).__name__}")
            raise VerifierUnavailableError(reason=type(e).__name__) from e

        return session.to_identity()
