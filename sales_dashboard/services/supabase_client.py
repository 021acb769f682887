"""Supabase client singleton."""

from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client

from ..config import get_settings
from ..errors import ConfigurationError


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Return a cached Supabase client instance."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        raise ConfigurationError("Missing Supabase credentials (SUPABASE_URL / SUPABASE_KEY)")
    return create_client(settings.supabase_url, settings.supabase_key)
