"""
Entitlements module exceptions.

These exceptions are raised by the entitlements module and caught by the
API error handlers: authorization failures become 403, store outages 503.
"""

from shared.exceptions import AuthorizationError, ExternalServiceError


class MissingRoleError(AuthorizationError):
    """Raised when an identity lacks a required role key."""

    def __init__(self, required_role: str, uid: str):
        super().__init__(
            f"Missing required role: {required_role}",
            code="MISSING_ROLE",
            details={"required_role": required_role, "uid": uid},
        )


class InsufficientTierError(AuthorizationError):
    """Raised when an identity's tier is below a gate."""

    def __init__(self, required_tier: str, tier: str, uid: str):
        super().__init__(
            f"This feature requires {required_tier} tier. You have {tier} tier.",
            code="INSUFFICIENT_TIER",
            details={"required_tier": required_tier, "tier": tier, "uid": uid},
        )


class FounderRequiredError(AuthorizationError):
    """Raised when a founder-only feature is requested by a non-founder."""

    def __init__(self, uid: str):
        super().__init__(
            "Founder access required",
            code="FOUNDER_REQUIRED",
            details={"uid": uid},
        )


class ProfileStoreUnavailableError(ExternalServiceError):
    """Raised when the profile document store cannot be reached."""

    def __init__(self, message: str = "Profile store unavailable"):
        super().__init__(message, service="profile_store", code="UPSTREAM_UNAVAILABLE")
