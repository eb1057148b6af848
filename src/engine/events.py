"""
Yahtzee Engine - Match Events

Event types and payloads a match emits to its listener after every
successful mutation. Hosts use them to re-render and to checkpoint.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class MatchEvent(Enum):
    """Events that can occur during a match."""

    MATCH_STARTED = auto()
    MATCH_RESTORED = auto()
    DICE_ROLLED = auto()
    DICE_HELD = auto()
    SCORE_COMMITTED = auto()
    TURN_ADVANCED = auto()
    ROUND_ADVANCED = auto()
    MATCH_FINISHED = auto()


@dataclass
class EventPayload:
    """Wrapper for match event data."""

    event: MatchEvent
    player_index: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[EventPayload], None]
