"""
Yahtzee Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles category scoring, turn and round progression, and standings.
"""

from src.engine.base import (
    CLASSIC,
    STRICT,
    Category,
    RuleSet,
    Section,
    TurnPhase,
    get_rule_set,
)
from src.engine.errors import EngineError, IllegalTransition, InvalidArgument, InvalidState
from src.engine.events import EventPayload, MatchEvent
from src.engine.match import Match, TurnView
from src.engine.scorer import Scorer
from src.engine.standings import Standing

__all__ = [
    # Rules
    "CLASSIC",
    "STRICT",
    "RuleSet",
    "get_rule_set",
    # Enums
    "Category",
    "Section",
    "TurnPhase",
    "MatchEvent",
    # Data Classes
    "EventPayload",
    "Standing",
    "TurnView",
    # Errors
    "EngineError",
    "IllegalTransition",
    "InvalidArgument",
    "InvalidState",
    # Engine
    "Match",
    "Scorer",
]
