"""
Yahtzee Engine - Base Types

Categories, rule variants and turn phases shared by the scorer and the
match state machine. Rule sets are frozen dataclasses so a single instance
can be shared by any number of matches.
"""

from dataclasses import dataclass
from enum import Enum, auto

from src.engine.errors import InvalidArgument


class Section(Enum):
    """Scorecard section a category belongs to."""
    UPPER = "upper"
    LOWER = "lower"


class Category(Enum):
    """
    The 13 scoring categories, in display and evaluation order.

    Values are the stable keys used in persisted snapshots and must not be
    renamed without a migration.
    """
    ONES = "ones"
    TWOS = "twos"
    THREES = "threes"
    FOURS = "fours"
    FIVES = "fives"
    SIXES = "sixes"
    THREE_KIND = "threeKind"
    FOUR_KIND = "fourKind"
    FULL_HOUSE = "fullHouse"
    SMALL_STRAIGHT = "smallStraight"
    LARGE_STRAIGHT = "largeStraight"
    YAHTZEE = "yahtzee"
    CHANCE = "chance"

    @property
    def section(self) -> Section:
        return Section.UPPER if self in UPPER_CATEGORIES else Section.LOWER

    @property
    def face(self) -> int | None:
        """Face value counted by an upper category, None for lower ones."""
        return _UPPER_FACES.get(self)

    @property
    def label(self) -> str:
        """Human-readable name."""
        return _LABELS[self]

    @classmethod
    def from_key(cls, key: str) -> "Category":
        """Look up a category by its persisted key."""
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgument(f"Unknown category key {key!r}.") from None


UPPER_CATEGORIES: tuple[Category, ...] = (
    Category.ONES,
    Category.TWOS,
    Category.THREES,
    Category.FOURS,
    Category.FIVES,
    Category.SIXES,
)

LOWER_CATEGORIES: tuple[Category, ...] = (
    Category.THREE_KIND,
    Category.FOUR_KIND,
    Category.FULL_HOUSE,
    Category.SMALL_STRAIGHT,
    Category.LARGE_STRAIGHT,
    Category.YAHTZEE,
    Category.CHANCE,
)

_UPPER_FACES: dict[Category, int] = {
    category: face for face, category in enumerate(UPPER_CATEGORIES, start=1)
}

_LABELS: dict[Category, str] = {
    Category.ONES: "Ones",
    Category.TWOS: "Twos",
    Category.THREES: "Threes",
    Category.FOURS: "Fours",
    Category.FIVES: "Fives",
    Category.SIXES: "Sixes",
    Category.THREE_KIND: "3 of a Kind",
    Category.FOUR_KIND: "4 of a Kind",
    Category.FULL_HOUSE: "Full House",
    Category.SMALL_STRAIGHT: "Small Straight",
    Category.LARGE_STRAIGHT: "Large Straight",
    Category.YAHTZEE: "Yahtzee",
    Category.CHANCE: "Chance",
}

# One round per category.
TOTAL_ROUNDS = len(Category)


class TurnPhase(Enum):
    """Where the match is within the current turn."""
    AWAITING_ROLL = auto()           # no roll yet, dice are meaningless
    ROLLED_AWAITING_CHOICE = auto()  # may commit or reroll
    FINISHED = auto()                # every round played


@dataclass(frozen=True)
class RuleSet:
    """
    A named, versioned set of scoring constants.

    Attributes:
        name: Variant name used in configuration
        dice_count: Dice per hand (N)
        faces: Faces per die
        max_rolls: Rolls allowed per turn
        bonus_threshold: Upper subtotal needed for the bonus
        bonus_points: Upper bonus value
        full_house_points: Fixed Full House score
        small_straight_points: Fixed Small Straight score
        large_straight_points: Fixed Large Straight score
        yahtzee_points: Fixed Yahtzee score
        small_straight_run: Distinct consecutive faces needed for a Small Straight
        yahtzee_is_full_house: Whether five of a kind also scores Full House
    """
    name: str
    dice_count: int = 5
    faces: int = 6
    max_rolls: int = 3
    bonus_threshold: int = 63
    bonus_points: int = 35
    full_house_points: int = 25
    small_straight_points: int = 30
    large_straight_points: int = 40
    yahtzee_points: int = 50
    small_straight_run: int = 4
    yahtzee_is_full_house: bool = True

    def __post_init__(self) -> None:
        """Validate rule constants."""
        if self.dice_count < 1:
            raise ValueError("A rule set needs at least one die.")
        if self.max_rolls < 1:
            raise ValueError("A rule set needs at least one roll per turn.")
        if not 1 <= self.small_straight_run <= self.dice_count:
            raise ValueError(
                f"Small straight run must be between 1 and {self.dice_count}, "
                f"got {self.small_straight_run}."
            )


CLASSIC = RuleSet(name="classic")
STRICT = RuleSet(name="strict", yahtzee_is_full_house=False)

RULE_SETS: dict[str, RuleSet] = {rules.name: rules for rules in (CLASSIC, STRICT)}


def get_rule_set(name: str) -> RuleSet:
    """Resolve a rule variant by name (case-insensitive)."""
    try:
        return RULE_SETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown rule variant {name!r}. Must be one of {sorted(RULE_SETS)}."
        ) from None
