"""
Yahtzee Engine - Snapshot Store

Saves, loads and clears match snapshots in a Supabase table, one row per
session. A missing or corrupt row always reads as "no saved session" so a
host can start a fresh match instead of crashing.
"""

from __future__ import annotations

import logging
from typing import Sequence

from supabase import Client

from src.config.settings import Settings
from src.database.models import MatchSnapshot, parse_snapshot
from src.engine.base import CLASSIC, RuleSet
from src.engine.dice import DiceSource
from src.engine.errors import InvalidArgument
from src.engine.events import EventListener, EventPayload, MatchEvent
from src.engine.match import Match

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Manages persisted match snapshots in Supabase."""

    def __init__(
        self,
        client: Client,
        table_name: str = "match_snapshots",
        *,
        rules: RuleSet = CLASSIC,
        strict: bool = False,
    ) -> None:
        self.client = client
        self.table = client.table(table_name)
        self.rules = rules
        self.strict = strict

    @classmethod
    def from_settings(cls, client: Client, settings: Settings) -> SnapshotStore:
        """Store using the configured table, rule variant and transition mode."""
        return cls(
            client,
            settings.snapshot_table,
            rules=settings.rules,
            strict=settings.strict_transitions,
        )

    def save(self, session_id: str, match: Match) -> MatchSnapshot:
        """Insert or replace the snapshot for a session."""
        snapshot = MatchSnapshot.model_validate(match.to_snapshot())
        (
            self.table
            .upsert({"session_id": session_id, "state": snapshot.to_engine_dict()})
            .execute()
        )
        logger.debug("Saved session %s at round %d", session_id, snapshot.current_round)
        return snapshot

    def load_snapshot(self, session_id: str) -> MatchSnapshot | None:
        """Fetch and validate the stored snapshot, None if absent or malformed."""
        try:
            data = (
                self.table
                .select("state")
                .eq("session_id", session_id)
                .execute()
            )
        except Exception:
            logger.exception("Failed to read saved session %s", session_id)
            return None

        if not data.data:
            return None
        return parse_snapshot(data.data[0].get("state"))

    def load(self, session_id: str, *, dice_source: DiceSource | None = None) -> Match | None:
        """
        Resume the saved match for a session under this store's rules.

        Returns:
            The restored Match, or None to start fresh
        """
        snapshot = self.load_snapshot(session_id)
        if snapshot is None:
            return None
        try:
            return Match.from_snapshot(
                snapshot.to_engine_dict(),
                rules=self.rules,
                dice_source=dice_source,
                strict=self.strict,
            )
        except InvalidArgument as exc:
            logger.warning("Discarding inconsistent session %s: %s", session_id, exc)
            return None

    def start(
        self,
        session_id: str,
        player_names: Sequence[str],
        *,
        dice_source: DiceSource | None = None,
    ) -> Match:
        """Begin a new match for a session, checkpointed from the first state."""
        match = Match(
            player_names, rules=self.rules, dice_source=dice_source, strict=self.strict
        )
        self.attach(match, session_id)
        self._checkpoint(session_id, match)
        return match

    def clear(self, session_id: str) -> None:
        """Delete the saved snapshot for a session."""
        self.table.delete().eq("session_id", session_id).execute()

    def attach(self, match: Match, session_id: str) -> EventListener:
        """
        Checkpoint a match after every change.

        The session is cleared once the match finishes. A committed score
        is saved with the turn advance that follows it. Write failures are
        logged and never reach the caller of the match operation. Any
        listener the match already had keeps receiving events.

        Returns:
            The listener installed on the match
        """
        previous = match.listener

        def _on_event(payload: EventPayload) -> None:
            if payload.event is MatchEvent.MATCH_FINISHED:
                self._discard(session_id)
            elif payload.event is not MatchEvent.SCORE_COMMITTED:
                self._checkpoint(session_id, match)
            if previous is not None:
                previous(payload)

        match.listener = _on_event
        return _on_event

    def _checkpoint(self, session_id: str, match: Match) -> None:
        try:
            self.save(session_id, match)
        except Exception:
            logger.exception("Failed to save session %s", session_id)

    def _discard(self, session_id: str) -> None:
        try:
            self.clear(session_id)
        except Exception:
            logger.exception("Failed to clear session %s", session_id)
