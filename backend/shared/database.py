"""
Database client factory for Supabase.

The async service-role client is created once during application startup
(see api.app lifespan) and handed to repositories through the service
container. Row Level Security is bypassed; the service layer performs all
ownership checks.
"""

from typing import Optional
from supabase import AsyncClient, acreate_client

from .config import get_settings

# Module-level client cache
_service_client: Optional[AsyncClient] = None


async def init_supabase_client() -> AsyncClient:
    """
    Create (or return the already created) service-role Supabase client.

    Returns:
        Async Supabase client configured with the service role key

    Raises:
        RuntimeError: If Supabase configuration is missing
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_client() -> AsyncClient:
    """
    Get the Supabase client created at startup.

    Raises:
        RuntimeError: If init_supabase_client() has not been awaited yet
    """
    if _service_client is None:
        raise RuntimeError(
            "Supabase client is not initialized. "
            "Await init_supabase_client() during application startup."
        )
    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
