"""
Database client factory for Supabase.

The backend only needs a service-role client: the question log writes
rows on behalf of anonymous visitors.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def is_supabase_configured() -> bool:
    """Return True if both the Supabase URL and service role key are set."""
    settings = get_settings()
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If Supabase is not configured
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not is_supabase_configured():
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
