"""
Yahtzee Engine - Scorecards and Players

A scorecard keeps an explicit ``None`` for every category that has not been
played, so a legitimate zero is never confused with an empty box. Filled
boxes are write-once.
"""

from dataclasses import dataclass, field
from typing import Mapping

from src.engine.base import CLASSIC, UPPER_CATEGORIES, Category, RuleSet
from src.engine.errors import InvalidArgument, InvalidState
from src.engine.validators import validate_category


def _empty_boxes() -> dict[Category, int | None]:
    return {category: None for category in Category}


@dataclass
class Scorecard:
    """
    One player's per-category scores.

    Attributes:
        boxes: Score per category, None while unplayed
    """
    boxes: dict[Category, int | None] = field(default_factory=_empty_boxes)

    def __post_init__(self) -> None:
        missing = set(Category) - set(self.boxes)
        for category in missing:
            self.boxes[category] = None
        self.boxes = {category: self.boxes[category] for category in Category}

    @classmethod
    def from_scores(cls, scores: Mapping[Category | str, int]) -> "Scorecard":
        """Build a scorecard from filled boxes keyed by Category or persisted key."""
        boxes = _empty_boxes()
        for key, value in scores.items():
            category = validate_category(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgument(
                    f"Score for {category.value} must be a non-negative integer, got {value!r}."
                )
            boxes[category] = value
        return cls(boxes=boxes)

    def get(self, category: Category) -> int | None:
        return self.boxes[category]

    def is_filled(self, category: Category) -> bool:
        return self.boxes[category] is not None

    def record(self, category: Category, score: int) -> None:
        """
        Write a score into an empty box.

        Raises:
            InvalidState: If the box already holds a score
        """
        if self.is_filled(category):
            raise InvalidState(
                f"Category {category.value} is already scored ({self.boxes[category]})."
            )
        self.boxes[category] = score

    @property
    def open_categories(self) -> tuple[Category, ...]:
        return tuple(c for c, score in self.boxes.items() if score is None)

    @property
    def filled_count(self) -> int:
        return sum(1 for score in self.boxes.values() if score is not None)

    @property
    def is_complete(self) -> bool:
        return self.filled_count == len(Category)

    @property
    def upper_subtotal(self) -> int:
        """Sum of the filled upper-section boxes."""
        return sum(self.boxes[c] or 0 for c in UPPER_CATEGORIES)

    def bonus(self, rules: RuleSet = CLASSIC) -> int:
        """Upper bonus, awarded once when the subtotal reaches the threshold."""
        return rules.bonus_points if self.upper_subtotal >= rules.bonus_threshold else 0

    def total(self, rules: RuleSet = CLASSIC) -> int:
        """Sum of all filled boxes plus the upper bonus."""
        filled = sum(score for score in self.boxes.values() if score is not None)
        return filled + self.bonus(rules)

    def to_dict(self) -> dict[str, int]:
        """Filled boxes keyed by persisted category key."""
        return {c.value: score for c, score in self.boxes.items() if score is not None}


@dataclass
class Player:
    """A named seat at the table with its scorecard."""
    name: str
    scorecard: Scorecard = field(default_factory=Scorecard)

    def to_dict(self) -> dict:
        return {"name": self.name, "scores": self.scorecard.to_dict()}
