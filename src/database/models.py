"""
Yahtzee Engine - Snapshot Models

Pydantic models for the persisted match snapshot. Field aliases are the
camelCase keys of the stored JSON and are part of the persistence contract.
"""

import logging
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from src.engine.base import CLASSIC, TOTAL_ROUNDS, Category
from src.engine.validators import MAX_NAME_LENGTH

logger = logging.getLogger(__name__)

_CATEGORY_KEYS = frozenset(category.value for category in Category)


class PlayerRecord(BaseModel):
    """One player's name and filled scores."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    scores: dict[str, StrictInt] = Field(default_factory=dict)

    @field_validator("scores")
    @classmethod
    def _known_categories(cls, value: dict[str, int]) -> dict[str, int]:
        unknown = set(value) - _CATEGORY_KEYS
        if unknown:
            raise ValueError(f"Unknown category keys: {sorted(unknown)}")
        if any(score < 0 for score in value.values()):
            raise ValueError("Scores cannot be negative.")
        return value


class MatchSnapshot(BaseModel):
    """Mirrors ``Match.to_snapshot()``."""

    players: list[PlayerRecord] = Field(min_length=1)
    current_player_index: StrictInt = Field(alias="currentPlayerIndex", ge=0)
    current_round: StrictInt = Field(alias="currentRound", ge=1, le=TOTAL_ROUNDS + 1)
    dice: list[StrictInt] = Field(min_length=CLASSIC.dice_count, max_length=CLASSIC.dice_count)
    held_dice: list[StrictBool] = Field(
        alias="heldDice", min_length=CLASSIC.dice_count, max_length=CLASSIC.dice_count
    )
    rolls_left: StrictInt = Field(alias="rollsLeft", ge=0, le=CLASSIC.max_rolls)
    has_rolled: StrictBool = Field(alias="hasRolled")

    model_config = {"populate_by_name": True}

    @field_validator("dice")
    @classmethod
    def _die_faces(cls, value: list[int]) -> list[int]:
        for die in value:
            if not 0 <= die <= CLASSIC.faces:
                raise ValueError(f"Die value {die} must be between 0 and {CLASSIC.faces}.")
        return value

    @model_validator(mode="after")
    def _index_in_roster(self) -> "MatchSnapshot":
        if self.current_player_index >= len(self.players):
            raise ValueError(
                f"currentPlayerIndex {self.current_player_index} is out of range "
                f"for {len(self.players)} player(s)."
            )
        return self

    def to_engine_dict(self) -> dict[str, Any]:
        """Plain dict in the shape ``Match.from_snapshot`` accepts."""
        return self.model_dump(by_alias=True)


def parse_snapshot(raw: Any) -> MatchSnapshot | None:
    """
    Validate a stored snapshot (dict or JSON text).

    Returns:
        The snapshot, or None when it is missing or malformed
    """
    if raw is None:
        return None
    try:
        if isinstance(raw, (str, bytes)):
            return MatchSnapshot.model_validate_json(raw)
        return MatchSnapshot.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Discarding malformed snapshot: %d error(s)", exc.error_count())
        return None
