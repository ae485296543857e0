"""Tests for /api/user and /api/me."""

import pytest

from tests.conftest import SESSION_COOKIE, create_test_token


@pytest.fixture
def authed_client(client, session_cookies):
    client.cookies.update(session_cookies)
    return client


class TestGetUser:
    def test_requires_session(self, client):
        assert client.get("/api/user").status_code == 401

    def test_missing_profile_is_404(self, authed_client, test_user_id):
        response = authed_client.get("/api/user")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "USER_NOT_FOUND"
        assert body["details"] == {"uid": test_user_id}

    def test_returns_profile_summary(self, authed_client, profile_store, test_user_id):
        profile_store.put(
            test_user_id,
            display_name="Ada",
            archetype_primary="Visionary",
            archetype_secondary="Builder",
            membership={"tier": "ACCELERATOR"},
        )

        response = authed_client.get("/api/user")

        assert response.status_code == 200
        assert response.json() == {
            "uid": test_user_id,
            "email": "test@example.com",
            "display_name": "Ada",
            "archetype_primary": "Visionary",
            "archetype_secondary": "Builder",
            "stage": "Orientation",
            "tier": "ACCELERATOR",
            "is_founder": False,
        }

    def test_founder_reported_as_deepening(self, authed_client, profile_store, test_user_id):
        profile_store.put(test_user_id, is_founder=True, tier="STARTER")

        data = authed_client.get("/api/user").json()

        assert data["tier"] == "DEEPENING"
        assert data["is_founder"] is True

    def test_store_outage_is_503(self, authed_client, profile_store):
        profile_store.failing.add("get")

        response = authed_client.get("/api/user")

        assert response.status_code == 503
        assert response.json()["error"] == "UPSTREAM_UNAVAILABLE"


class TestGetMe:
    def test_defaults_without_profile(self, authed_client, test_user_id):
        response = authed_client.get("/api/me")

        assert response.status_code == 200
        assert response.json() == {
            "uid": test_user_id,
            "tier": "FREE",
            "gating_tier": "FREE",
            "roles": ["visitor"],
            "is_founder": False,
            "accepted_terms_at": None,
            "accepted_terms_version": None,
        }

    def test_roles_and_tier(self, authed_client, profile_store, test_user_id):
        profile_store.put(test_user_id, role_keys=["explorer"], entitlement_tier="starter")

        data = authed_client.get("/api/me").json()

        assert data["tier"] == "STARTER"
        assert data["roles"] == ["explorer", "visitor"]

    def test_founder(self, authed_client, profile_store, test_user_id):
        profile_store.put(test_user_id, role="founder")

        data = authed_client.get("/api/me").json()

        assert data["tier"] == "FOUNDER"
        assert data["gating_tier"] == "DEEPENING"
        assert data["is_founder"] is True

    def test_one_profile_read_per_request(self, authed_client, profile_store, test_user_id):
        profile_store.put(test_user_id, tier="STARTER")

        authed_client.get("/api/me")

        assert profile_store.count("get") == 1
        assert profile_store.count("get_tokens_valid_after") == 1

    def test_identity_from_token_subject(self, client, profile_store):
        """The uid always comes from the verified token, never from the request."""
        client.cookies.set(SESSION_COOKIE, create_test_token(user_id="someone-else"))

        data = client.get("/api/me", params={"uid": "test-user-123"}).json()

        assert data["uid"] == "someone-else"
        assert profile_store.calls[-1] == ("get", "someone-else")
