"""
Session module exceptions.

Every failure to turn a session token into an identity is an
AuthenticationError, which the API layer maps to 401.
"""

from typing import Optional

from shared.exceptions import AuthenticationError


class MissingSessionError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_SESSION")


class InvalidSessionError(AuthenticationError):
    """Raised when a session token is malformed or fails signature checks."""

    def __init__(self, message: str = "Invalid session"):
        super().__init__(message, code="INVALID_SESSION")


class ExpiredSessionError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Session has expired"):
        super().__init__(message, code="SESSION_EXPIRED")


class RevokedSessionError(AuthenticationError):
    """Raised when a session was issued before the user's revocation time."""

    def __init__(self, uid: str):
        super().__init__(
            "Session has been revoked",
            code="SESSION_REVOKED",
            details={"uid": uid},
        )


class VerifierUnavailableError(AuthenticationError):
    """
    Raised when the session could not be verified at all.

    The caller is treated as unauthenticated (fail closed); the request
    is never let through on a verifier outage.
    """

    def __init__(self, message: str = "Session verification unavailable", reason: Optional[str] = None):
        super().__init__(
            message,
            code="VERIFIER_UNAVAILABLE",
            details={"reason": reason} if reason else {},
        )
