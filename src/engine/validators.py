"""
Yahtzee Engine - Input Validation Utilities

Provides validation functions for engine inputs. All validators either
return normalized data or raise a descriptive InvalidArgument.
"""

from typing import Sequence

from src.engine.base import Category
from src.engine.errors import InvalidArgument

# Face value of a die that has not been rolled yet this turn.
UNSET_DIE = 0

MAX_PLAYERS = 6
MAX_NAME_LENGTH = 30


def validate_hand(
    values: Sequence[int],
    dice_count: int,
    faces: int = 6,
    allow_unset: bool = True,
) -> tuple[int, ...]:
    """
    Validate and normalize a hand of dice.

    Args:
        values: Sequence of die values
        dice_count: Exact number of dice required
        faces: Highest legal face value
        allow_unset: Whether the unset sentinel (0) is accepted

    Returns:
        Validated values as a tuple

    Raises:
        InvalidArgument: If the length or any value is wrong
    """
    values_tuple = tuple(values)

    if len(values_tuple) != dice_count:
        raise InvalidArgument(
            f"Hand must contain exactly {dice_count} dice, got {len(values_tuple)}."
        )

    low = UNSET_DIE if allow_unset else 1
    for i, value in enumerate(values_tuple):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(
                f"Die value at index {i} must be an integer, got {type(value).__name__}."
            )
        if not (low <= value <= faces):
            raise InvalidArgument(
                f"Die value at index {i} is {value}, must be between {low} and {faces}."
            )

    return values_tuple


def validate_held_mask(mask: Sequence[bool], dice_count: int) -> tuple[bool, ...]:
    """
    Validate a held mask (one boolean per die).

    Raises:
        InvalidArgument: If the mask has the wrong length or non-boolean entries
    """
    mask_tuple = tuple(mask)

    if len(mask_tuple) != dice_count:
        raise InvalidArgument(
            f"Held mask must contain exactly {dice_count} flags, got {len(mask_tuple)}."
        )
    for i, flag in enumerate(mask_tuple):
        if not isinstance(flag, bool):
            raise InvalidArgument(
                f"Held flag at index {i} must be a bool, got {type(flag).__name__}."
            )

    return mask_tuple


def validate_die_index(index: int, dice_count: int) -> int:
    """
    Validate the position of a die within the hand.

    Raises:
        InvalidArgument: If the index is not an int in [0, dice_count)
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidArgument(f"Die index must be an integer, got {type(index).__name__}.")

    if not (0 <= index < dice_count):
        raise InvalidArgument(
            f"Die index {index} is out of range. Must be between 0 and {dice_count - 1}."
        )

    return index


def validate_category(category: Category | str) -> Category:
    """
    Accept a Category or its persisted key.

    Raises:
        InvalidArgument: If the key is unknown
    """
    if isinstance(category, Category):
        return category
    if isinstance(category, str):
        return Category.from_key(category)
    raise InvalidArgument(
        f"Category must be a Category or key string, got {type(category).__name__}."
    )


def validate_player_names(names: Sequence[str]) -> tuple[str, ...]:
    """
    Validate the roster for a new match.

    Names are stripped of surrounding whitespace and may be at most
    MAX_NAME_LENGTH characters long.

    Raises:
        InvalidArgument: If the roster is empty or too large, or a name is
            blank or too long
    """
    if isinstance(names, str):
        raise InvalidArgument("Player names must be a sequence of strings, not a string.")

    cleaned = []
    for i, name in enumerate(names):
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument(f"Player name at index {i} must be a non-empty string.")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise InvalidArgument(
                f"Player name at index {i} is longer than {MAX_NAME_LENGTH} characters."
            )
        cleaned.append(name.strip())

    if not (1 <= len(cleaned) <= MAX_PLAYERS):
        raise InvalidArgument(
            f"Player count must be between 1 and {MAX_PLAYERS}, got {len(cleaned)}."
        )

    return tuple(cleaned)
