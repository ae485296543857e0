"""
Centralized configuration for the iPurpose backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, SESSION_*, RATE_LIMIT_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "iPurpose API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (document store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    users_table: str = "users"

    # Session tokens
    session_jwt_secret: str = ""
    session_jwt_audience: str = "authenticated"
    session_cookie_name: str = "ipurpose_session"
    session_cookie_secure: bool = True

    # Rate limiting
    rate_limit_requests: int = 60
    rate_limit_window_ms: int = 60_000
    rate_limit_sweep_interval_ms: int = 60_000
    rate_limit_grace_ms: Optional[int] = None  # defaults to the sweep interval

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def effective_rate_limit_grace_ms(self) -> int:
        """Grace period before a closed window is swept."""
        if self.rate_limit_grace_ms is None:
            return self.rate_limit_sweep_interval_ms
        return self.rate_limit_grace_ms


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
