"""
JWT session verifier.

Session cookies carry an HS256-signed JWT. Verification checks signature,
audience and expiry with PyJWT, then (when asked) compares the token's issue
time against the user's revocation timestamp from the profile store.
"""

import logging
from datetime import timezone
from typing import Optional

import jwt
import pydantic

from .interfaces import IRevocationLookup
from .models import VerifiedSession
from .exceptions import (
    ExpiredSessionError,
    InvalidSessionError,
    RevokedSessionError,
    VerifierUnavailableError,
)

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class JWTSessionVerifier:
    """
    ISessionVerifier backed by PyJWT.

    A missing secret or a missing revocation source makes every verification
    fail with VerifierUnavailableError rather than accept unchecked tokens.
    """

    def __init__(
        self,
        secret: str,
        audience: str = "authenticated",
        revocations: Optional[IRevocationLookup] = None,
        leeway: int = 0,
    ):
        self._secret = secret
        self._audience = audience
        self._revocations = revocations
        self._leeway = leeway

    async def verify(self, token: str, check_revoked: bool = True) -> VerifiedSession:
        if not self._secret:
            raise VerifierUnavailableError("Server session verification not configured")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=["HS256"],
                audience=self._audience,
                leeway=self._leeway,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredSessionError()
        except jwt.InvalidTokenError as e:
            raise InvalidSessionError(f"Invalid session: {e}")

        try:
            session = VerifiedSession.from_claims(payload)
        except (pydantic.ValidationError, TypeError, ValueError, OverflowError) as e:
            raise InvalidSessionError(f"Invalid session claims: {e}")

        if check_revoked:
            self._check_revocation(session)

        return session

    def _check_revocation(self, session: VerifiedSession) -> None:
        if self._revocations is None:
            raise VerifierUnavailableError("Revocation check not configured")

        valid_after = self._revocations.get_tokens_valid_after(session.uid)
        if valid_after is None:
            return

        if valid_after.tzinfo is None:
            valid_after = valid_after.replace(tzinfo=timezone.utc)

        # JWT iat has whole-second precision
        if int(session.issued_at.timestamp()) < int(valid_after.timestamp()):
            logger.info(f"Rejected revoked session for {session.uid}")
            raise RevokedSessionError(session.uid)
