"""
Base exception classes for the iPurpose backend.

Each module defines its own exceptions on top of these bases. Every base
carries an error ``kind``; the API layer maps each kind to exactly one HTTP
status code:

- UNAUTHENTICATED       (AuthenticationError)  -> 401
- FORBIDDEN             (AuthorizationError)   -> 403
- RATE_LIMITED          (RateLimitError)       -> 429
- UPSTREAM_UNAVAILABLE  (ExternalServiceError) -> 503
"""

from typing import Optional, Any


class IPurposeError(Exception):
    """
    Base exception for all iPurpose errors.

    ``kind`` is the broad failure class shared by a family of errors;
    ``code`` names the specific failure and defaults to the kind.
    """

    kind = "INTERNAL"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.kind
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "kind": self.kind,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(IPurposeError):
    kind = "NOT_FOUND"


class ValidationError(IPurposeError):
    kind = "INVALID_REQUEST"


class AuthenticationError(IPurposeError):
    """No valid session: missing, invalid, expired, revoked or unverifiable."""

    kind = "UNAUTHENTICATED"


class AuthorizationError(IPurposeError):
    """Valid session, but the caller lacks a required role or tier."""

    kind = "FORBIDDEN"


class RateLimitError(IPurposeError):
    """Too many requests in the current window."""

    kind = "RATE_LIMITED"


class ExternalServiceError(IPurposeError):
    """A backing service (document store, client config) could not be used."""

    kind = "UPSTREAM_UNAVAILABLE"

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
