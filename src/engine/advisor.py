"""
Yahtzee Engine - Advisor

Best-effort hints for the player whose turn it is. Advisors only read a
TurnView; they never touch the match, and the engine never depends on
their output.
"""

from dataclasses import dataclass
from typing import ClassVar, Protocol

from src.engine.base import Category
from src.engine.match import TurnView
from src.engine.scorer import face_counts


@dataclass(frozen=True)
class Suggestion:
    """
    A hint for the current turn.

    Attributes:
        message: Text to show the player
        category: Category the hint points at, if any
        keep_face: Face value the hint suggests holding, if any
    """
    message: str
    category: Category | None = None
    keep_face: int | None = None


class Advisor(Protocol):
    def suggest(self, view: TurnView) -> Suggestion:
        ...


class HeuristicAdvisor:
    """
    Fixed priority ladder over the current score table.

    1. Yahtzee, large straight, a four of a kind worth 20+, full house
    2. With rerolls left: keep the most frequent face
    3. Without rerolls: the open category worth the most points
    """

    MIN_FOUR_KIND: ClassVar[int] = 20

    def suggest(self, view: TurnView) -> Suggestion:
        possible = view.possible_scores
        if possible is None:
            return Suggestion("Roll the dice to start your turn.")

        if possible[Category.YAHTZEE] > 0:
            return Suggestion("YAHTZEE! Take it now!", Category.YAHTZEE)
        if possible[Category.LARGE_STRAIGHT] > 0:
            return Suggestion("Large straight! Great score.", Category.LARGE_STRAIGHT)
        if possible[Category.FOUR_KIND] >= self.MIN_FOUR_KIND:
            return Suggestion("Four of a kind! Good score.", Category.FOUR_KIND)
        if possible[Category.FULL_HOUSE] > 0:
            return Suggestion("A safe full house.", Category.FULL_HOUSE)

        if view.rolls_left > 0:
            counts = face_counts(view.dice)
            # Ties go to the lowest face.
            face, frequency = max(counts.items(), key=lambda item: (item[1], -item[0]))
            if frequency == 4:
                return Suggestion(f"Keep the {face}s and go for a Yahtzee!", keep_face=face)
            if frequency == 3:
                return Suggestion(
                    f"Keep the {face}s for a four of a kind or a Yahtzee.", keep_face=face
                )
            return Suggestion("Look for a better combination...")

        best: Category | None = None
        for category in view.open_categories:
            if best is None or possible[category] > possible[best]:
                best = category
        if best is None:
            return Suggestion("Pick the lesser evil...")
        return Suggestion(f"Take {best.label} for {possible[best]} points.", best)
