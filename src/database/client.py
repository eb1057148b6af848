"""
Yahtzee Engine - Supabase Client

Cached factories for the Supabase client and the snapshot store built on it.
"""

from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import get_settings
from src.database.snapshot_store import SnapshotStore


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set to persist matches.")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


@lru_cache(maxsize=1)
def get_snapshot_store() -> SnapshotStore:
    """Snapshot store configured from the environment."""
    return SnapshotStore.from_settings(get_supabase_client(), get_settings())
