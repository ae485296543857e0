"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "iPurpose API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"
        assert settings.environment == "development"
        assert settings.users_table == "users"
        assert settings.session_cookie_name == "ipurpose_session"
        assert settings.session_jwt_audience == "authenticated"

    def test_rate_limit_defaults(self):
        """Default policy is 60 requests per minute, swept every minute."""
        settings = Settings(_env_file=None)
        assert settings.rate_limit_requests == 60
        assert settings.rate_limit_window_ms == 60_000
        assert settings.rate_limit_sweep_interval_ms == 60_000

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_session_config_from_env(self):
        """Session settings should load from environment variables."""
        with patch.dict(os.environ, {
            "SESSION_JWT_SECRET": "env-secret",
            "SESSION_COOKIE_NAME": "__session",
            "SESSION_COOKIE_SECURE": "false",
        }):
            settings = Settings(_env_file=None)
            assert settings.session_jwt_secret == "env-secret"
            assert settings.session_cookie_name == "__session"
            assert settings.session_cookie_secure is False

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "USERS_TABLE": "profiles",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.users_table == "profiles"

    def test_is_production(self):
        assert Settings(_env_file=None, environment="Production").is_production is True
        assert Settings(_env_file=None, environment="development").is_production is False

    def test_grace_defaults_to_sweep_interval(self):
        settings = Settings(_env_file=None, rate_limit_sweep_interval_ms=30_000)
        assert settings.effective_rate_limit_grace_ms == 30_000

    def test_explicit_grace(self):
        settings = Settings(_env_file=None, rate_limit_grace_ms=0)
        assert settings.effective_rate_limit_grace_ms == 0


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        # Clear the cache first
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        # Clear the cache first
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
