"""
Yahtzee Engine - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.engine.base import Category
from src.engine.dice import ScriptedDiceSource
from src.engine.match import Match


# =============================================================================
# HAND TEST DATA
# =============================================================================

@pytest.fixture
def scored_hands() -> dict[str, tuple[tuple[int, ...], dict[Category, int]]]:
    """
    Common hands with the lower-section scores they should produce.

    Returns:
        Dict mapping name to (dice_values, expected lower scores)
    """
    return {
        "full_house": ((2, 2, 2, 5, 5), {
            Category.THREE_KIND: 16,
            Category.FOUR_KIND: 0,
            Category.FULL_HOUSE: 25,
            Category.SMALL_STRAIGHT: 0,
            Category.LARGE_STRAIGHT: 0,
            Category.YAHTZEE: 0,
            Category.CHANCE: 16,
        }),
        "low_large_straight": ((1, 2, 3, 4, 5), {
            Category.THREE_KIND: 0,
            Category.FOUR_KIND: 0,
            Category.FULL_HOUSE: 0,
            Category.SMALL_STRAIGHT: 30,
            Category.LARGE_STRAIGHT: 40,
            Category.YAHTZEE: 0,
            Category.CHANCE: 15,
        }),
        "small_straight_with_pair": ((3, 4, 5, 6, 3), {
            Category.THREE_KIND: 0,
            Category.FOUR_KIND: 0,
            Category.FULL_HOUSE: 0,
            Category.SMALL_STRAIGHT: 30,
            Category.LARGE_STRAIGHT: 0,
            Category.YAHTZEE: 0,
            Category.CHANCE: 21,
        }),
        "four_of_a_kind": ((6, 6, 1, 6, 6), {
            Category.THREE_KIND: 25,
            Category.FOUR_KIND: 25,
            Category.FULL_HOUSE: 0,
            Category.SMALL_STRAIGHT: 0,
            Category.LARGE_STRAIGHT: 0,
            Category.YAHTZEE: 0,
            Category.CHANCE: 25,
        }),
        "yahtzee": ((4, 4, 4, 4, 4), {
            Category.THREE_KIND: 20,
            Category.FOUR_KIND: 20,
            Category.FULL_HOUSE: 25,
            Category.SMALL_STRAIGHT: 0,
            Category.LARGE_STRAIGHT: 0,
            Category.YAHTZEE: 50,
            Category.CHANCE: 20,
        }),
        "nothing": ((1, 3, 5, 6, 2), {
            Category.THREE_KIND: 0,
            Category.FOUR_KIND: 0,
            Category.FULL_HOUSE: 0,
            Category.SMALL_STRAIGHT: 0,
            Category.LARGE_STRAIGHT: 0,
            Category.YAHTZEE: 0,
            Category.CHANCE: 17,
        }),
    }


# =============================================================================
# MATCH FIXTURES
# =============================================================================

@pytest.fixture
def scripted_dice() -> ScriptedDiceSource:
    """Empty scripted source; tests extend it with the faces they need."""
    return ScriptedDiceSource([])


@pytest.fixture
def two_player_match(scripted_dice: ScriptedDiceSource) -> Match:
    """Fresh match for Alice and Bob driven by the scripted source."""
    return Match(["Alice", "Bob"], dice_source=scripted_dice)

