"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
session tokens, an in-memory profile store, a controllable clock and an app
wired to those fakes through the service container.
"""

from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.entitlements.exceptions import ProfileStoreUnavailableError
from modules.entitlements.models import ProfileRecord
from modules.ratelimit.limiter import FixedWindowRateLimiter
from modules.ratelimit.models import DEFAULT_POLICIES, RateLimitPolicy
from modules.sessions.verifier import JWTSessionVerifier
from shared.config import get_settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_AUDIENCE = "authenticated"
SESSION_COOKIE = get_settings().session_cookie_name


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    issued_at: Optional[datetime] = None,
    audience: str = TEST_AUDIENCE,
    secret: str = TEST_JWT_SECRET,
    **claims: Any,
) -> str:
    """
    Create a session JWT for testing.

    Args:
        user_id: Subject of the token
        email: Email claim
        expired: If True, creates an expired token
        email_verified: Value of the email_verified claim
        issued_at: Override the iat claim
        audience: Audience claim
        secret: Signing secret
        **claims: Extra custom claims

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    iat = issued_at or (now - timedelta(hours=2) if expired else now)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_verified": email_verified,
        "aud": audience,
        "exp": int(exp.timestamp()),
        "iat": int(iat.timestamp()),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class InMemoryProfileStore:
    """
    IProfileStore backed by a dict of raw rows, recording every call.

    Method names added to ``failing`` raise ProfileStoreUnavailableError.
    """

    def __init__(self, rows: Optional[dict[str, dict[str, Any]]] = None):
        self.rows: dict[str, dict[str, Any]] = rows or {}
        self.calls: list[tuple[str, str]] = []
        self.failing: set[str] = set()

    def _record(self, method: str, uid: str) -> None:
        self.calls.append((method, uid))
        if method in self.failing:
            raise ProfileStoreUnavailableError()

    def put(self, uid: str, **fields: Any) -> None:
        self.rows[uid] = {"id": uid, **fields}

    def get(self, uid: str) -> Optional[ProfileRecord]:
        self._record("get", uid)
        row = self.rows.get(uid)
        return ProfileRecord.model_validate(row) if row is not None else None

    def get_tokens_valid_after(self, uid: str) -> Optional[datetime]:
        self._record("get_tokens_valid_after", uid)
        row = self.rows.get(uid)
        if row is None:
            return None
        return ProfileRecord.model_validate(row).tokens_valid_after

    def accept_terms(self, uid: str, version: str) -> datetime:
        self._record("accept_terms", uid)
        accepted_at = datetime.now(timezone.utc)
        row = self.rows.setdefault(uid, {"id": uid})
        row["accepted_terms_at"] = accepted_at
        row["accepted_terms_version"] = version
        return accepted_at

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)


class ManualClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rate_limiter(clock: ManualClock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(clock=clock, grace_ms=60_000)


@pytest.fixture
def policies() -> dict[str, RateLimitPolicy]:
    """Production policies with a small default so tests can exhaust it."""
    return {**DEFAULT_POLICIES, "default": RateLimitPolicy(requests=3, window_ms=1000)}


@pytest.fixture
def container(profile_store, rate_limiter, policies) -> ServiceContainer:
    """Service container wired to in-memory fakes and installed globally."""
    container = ServiceContainer(
        profile_store=profile_store,
        session_verifier=JWTSessionVerifier(
            secret=TEST_JWT_SECRET,
            audience=TEST_AUDIENCE,
            revocations=profile_store,
        ),
        rate_limiter=rate_limiter,
        policies=policies,
    )
    set_container(container)
    return container


@pytest.fixture
def app(container):
    """Create a fresh app for each test."""
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def session_token(test_user_id: str) -> str:
    """Create a valid session token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def session_cookies(session_token: str) -> dict[str, str]:
    """Cookies carrying a valid session."""
    return {SESSION_COOKIE: session_token}
