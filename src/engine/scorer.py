"""
Yahtzee Engine - Scorer

Maps a hand of dice to the score every category would yield. The scorer
holds no state and never looks at game history, so it can be called as
often as a preview needs.

Scoring rules:
- Ones..Sixes: count of that face x face value
- 3/4 of a Kind: sum of all dice when some face appears 3/4+ times
- Full House: fixed score for a 3+2 split (five of a kind too, in the
  classic variant)
- Small/Large Straight: fixed score for a run of 4 / all dice
- Yahtzee: fixed score when every die shows the same face
- Chance: sum of all dice
"""

from collections import Counter
from typing import ClassVar, Sequence

from src.engine.base import CLASSIC, UPPER_CATEGORIES, Category, RuleSet
from src.engine.validators import UNSET_DIE, validate_hand


def face_counts(hand: Sequence[int], faces: int = 6) -> Counter:
    """Frequency of each face 1..faces; unset dice are not counted."""
    counts: Counter = Counter({face: 0 for face in range(1, faces + 1)})
    counts.update(value for value in hand if value != UNSET_DIE)
    return counts


def longest_run(hand: Sequence[int]) -> int:
    """
    Length of the longest run of consecutive distinct faces.

    Example: (2, 3, 3, 4, 6) -> 3 (the run 2-3-4)
    """
    uniques = sorted({value for value in hand if value != UNSET_DIE})
    if not uniques:
        return 0

    best = current = 1
    for previous, value in zip(uniques, uniques[1:]):
        current = current + 1 if value == previous + 1 else 1
        best = max(best, current)
    return best


class Scorer:
    """Stateless scorer for Yahtzee hands."""

    CATEGORIES: ClassVar[tuple[Category, ...]] = tuple(Category)

    @classmethod
    def compute_possible_scores(
        cls,
        hand: Sequence[int],
        rules: RuleSet = CLASSIC,
    ) -> dict[Category, int]:
        """
        Calculate the score each category would yield for a hand.

        Args:
            hand: Exactly ``rules.dice_count`` values in 0..faces (0 = unset)
            rules: Rule variant supplying the fixed scores and thresholds

        Returns:
            Mapping covering all 13 categories, in category order

        Raises:
            InvalidArgument: If the hand has the wrong length or bad values
        """
        values = validate_hand(hand, rules.dice_count, rules.faces)
        counts = face_counts(values, rules.faces)
        total = sum(values)
        highest = max(counts.values())

        possible: dict[Category, int] = {}

        # Upper section
        for category in UPPER_CATEGORIES:
            possible[category] = counts[category.face] * category.face

        # Lower section
        is_yahtzee = highest == rules.dice_count
        frequencies = set(counts.values())
        is_full_house = {3, 2} <= frequencies or (is_yahtzee and rules.yahtzee_is_full_house)
        run = longest_run(values)

        possible[Category.THREE_KIND] = total if highest >= 3 else 0
        possible[Category.FOUR_KIND] = total if highest >= 4 else 0
        possible[Category.FULL_HOUSE] = rules.full_house_points if is_full_house else 0
        possible[Category.SMALL_STRAIGHT] = (
            rules.small_straight_points if run >= rules.small_straight_run else 0
        )
        possible[Category.LARGE_STRAIGHT] = (
            rules.large_straight_points if run >= rules.dice_count else 0
        )
        possible[Category.YAHTZEE] = rules.yahtzee_points if is_yahtzee else 0
        possible[Category.CHANCE] = total

        return {category: possible[category] for category in cls.CATEGORIES}

    @classmethod
    def score_category(
        cls,
        hand: Sequence[int],
        category: Category,
        rules: RuleSet = CLASSIC,
    ) -> int:
        """Score a single category for a hand."""
        return cls.compute_possible_scores(hand, rules)[category]
