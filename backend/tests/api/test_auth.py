"""Tests for session authentication at the HTTP boundary."""

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from api.dependencies import get_session_resolver
from modules.sessions.service import SessionResolver
from shared.logging import SECURITY_LOGGER
from tests.conftest import SESSION_COOKIE, create_test_token


class TestSessionRequired:
    def test_missing_cookie_returns_401(self, client, profile_store):
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_SESSION"
        # Rejected before any document-store read
        assert profile_store.calls == []

    def test_blank_cookie_returns_401(self, client):
        client.cookies.set(SESSION_COOKIE, "")
        response = client.get("/api/me")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, client):
        client.cookies.set(SESSION_COOKIE, "not-a-jwt")
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"

    def test_expired_token_returns_401(self, client):
        client.cookies.set(SESSION_COOKIE, create_test_token(expired=True))
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "SESSION_EXPIRED"

    def test_revoked_token_returns_401(self, client, profile_store, test_user_id):
        issued = datetime.now(timezone.utc) - timedelta(minutes=30)
        profile_store.put(test_user_id, tokens_valid_after=datetime.now(timezone.utc).isoformat())
        client.cookies.set(SESSION_COOKIE, create_test_token(user_id=test_user_id, issued_at=issued))

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "SESSION_REVOKED"

    def test_verifier_outage_returns_401(self, app, client):
        """A verifier failure never lets the request through."""
        verifier = AsyncMock()
        verifier.verify.side_effect = ConnectionError("down")
        app.dependency_overrides[get_session_resolver] = lambda: SessionResolver(verifier)
        client.cookies.set(SESSION_COOKIE, create_test_token())

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "VERIFIER_UNAVAILABLE"

    def test_revocation_lookup_outage_returns_401(self, client, profile_store, session_cookies):
        profile_store.failing.add("get_tokens_valid_after")
        client.cookies.update(session_cookies)

        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "VERIFIER_UNAVAILABLE"
        assert profile_store.count("get") == 0

    def test_failure_is_logged_without_token(self, client, caplog):
        token = create_test_token(expired=True)
        client.cookies.set(SESSION_COOKIE, token)

        with caplog.at_level(logging.WARNING, logger=SECURITY_LOGGER):
            client.get("/api/me")

        records = [r for r in caplog.records if r.name == SECURITY_LOGGER]
        assert len(records) == 1
        assert records[0].security["type"] == "auth_failure"
        assert records[0].security["code"] == "SESSION_EXPIRED"
        assert token not in caplog.text


class TestLogout:
    def test_clears_cookie_and_redirects(self, client, session_token):
        client.cookies.set(SESSION_COOKIE, session_token)

        response = client.post("/api/auth/logout", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/login"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{SESSION_COOKIE}=")
        assert "Max-Age=0" in set_cookie
        assert "HttpOnly" in set_cookie

    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout", follow_redirects=False)
        assert response.status_code == 302
