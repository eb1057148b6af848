"""
Yahtzee Engine Database Layer.

Supabase integration for saving and resuming match snapshots.
"""

from src.database.client import get_snapshot_store, get_supabase_client
from src.database.models import MatchSnapshot, PlayerRecord, parse_snapshot
from src.database.snapshot_store import SnapshotStore

__all__ = [
    "get_snapshot_store",
    "get_supabase_client",
    "MatchSnapshot",
    "PlayerRecord",
    "parse_snapshot",
    "SnapshotStore",
]
