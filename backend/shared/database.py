"""
Supabase client for the profile document store.

Only the service-role client exists: the backend reads and writes the users
table on behalf of the verified session owner, never with a user's token.
"""

from typing import Optional

from supabase import Client, create_client

from .config import Settings, get_settings
from .exceptions import ExternalServiceError

_client: Optional[Client] = None


def supabase_configured(settings: Optional[Settings] = None) -> bool:
    """Whether both the Supabase URL and service role key are set."""
    settings = settings or get_settings()
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def get_supabase_client() -> Client:
    """
    Get the process-wide service-role client, creating it on first use.

    Raises:
        ExternalServiceError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not supabase_configured(settings):
            raise ExternalServiceError(
                "Supabase configuration missing: set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY",
                service="supabase",
            )
        _client = create_client(settings.supabase_url, settings.supabase_service_role_key)

    return _client


def reset_client_cache() -> None:
    """Drop the cached client so the next call rebuilds it from settings."""
    global _client
    _client = None
