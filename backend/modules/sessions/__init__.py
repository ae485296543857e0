"""
Sessions module.

Resolves the session cookie into an authenticated Identity.

Public API:
- ISessionResolver / SessionResolver: token -> Identity
- ISessionVerifier / JWTSessionVerifier: external verification
- IRevocationLookup: per-user revocation timestamps
- Session exceptions (all AuthenticationError)
"""

from .interfaces import ISessionResolver, ISessionVerifier, IRevocationLookup
from .models import VerifiedSession
from .service import SessionResolver
from .verifier import JWTSessionVerifier
from .exceptions import (
    MissingSessionError,
    InvalidSessionError,
    ExpiredSessionError,
    RevokedSessionError,
    VerifierUnavailableError,
)

__all__ = [
    # Interfaces
    "ISessionResolver",
    "ISessionVerifier",
    "IRevocationLookup",
    # Implementations
    "SessionResolver",
    "JWTSessionVerifier",
    # Models
    "VerifiedSession",
    # Exceptions
    "MissingSessionError",
    "InvalidSessionError",
    "ExpiredSessionError",
    "RevokedSessionError",
    "VerifierUnavailableError",
]
