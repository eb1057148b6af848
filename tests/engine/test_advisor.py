"""
Yahtzee Engine - Advisor Tests
"""

import pytest

from src.engine.advisor import HeuristicAdvisor, Suggestion
from src.engine.base import Category
from src.engine.dice import ScriptedDiceSource
from src.engine.match import Match


@pytest.fixture
def advisor() -> HeuristicAdvisor:
    return HeuristicAdvisor()


def _rolled_match(*hands: tuple[int, ...]) -> Match:
    """Single-player match with each hand rolled in turn (held dice kept)."""
    dice = ScriptedDiceSource([])
    match = Match(["Alice"], dice_source=dice)
    for hand in hands:
        dice.extend(hand)
        match.roll()
    return match


class TestHeuristicAdvisor:
    def test_before_roll(self, advisor):
        match = Match(["Alice"])
        assert advisor.suggest(match.turn_view()) == Suggestion("Roll the dice to start your turn.")

    @pytest.mark.parametrize("hand,category", [
        ((5, 5, 5, 5, 5), Category.YAHTZEE),
        ((2, 3, 4, 5, 6), Category.LARGE_STRAIGHT),
        ((6, 6, 6, 6, 1), Category.FOUR_KIND),
        ((3, 3, 2, 2, 2), Category.FULL_HOUSE),
    ])
    def test_strong_hands(self, advisor, hand, category):
        suggestion = advisor.suggest(_rolled_match(hand).turn_view())
        assert suggestion.category is category

    def test_low_four_of_a_kind_is_not_pushed(self, advisor):
        suggestion = advisor.suggest(_rolled_match((1, 1, 1, 1, 6)).turn_view())
        assert suggestion.category is None
        assert suggestion.keep_face == 1
        assert "Yahtzee" in suggestion.message

    def test_keep_three_of_a_kind(self, advisor):
        suggestion = advisor.suggest(_rolled_match((4, 4, 4, 1, 6)).turn_view())
        assert suggestion.keep_face == 4
        assert "four of a kind" in suggestion.message

    def test_nothing_with_rerolls(self, advisor):
        suggestion = advisor.suggest(_rolled_match((1, 3, 5, 6, 2)).turn_view())
        assert suggestion == Suggestion("Look for a better combination...")

    def test_best_open_category_without_rerolls(self, advisor):
        match = _rolled_match((1, 3, 5, 6, 2), (1, 3, 5, 6, 2), (1, 3, 5, 6, 2))
        suggestion = advisor.suggest(match.turn_view())
        assert suggestion.category is Category.CHANCE
        assert suggestion.message == "Take Chance for 17 points."

    def test_skips_filled_categories(self, advisor):
        dice = ScriptedDiceSource([1, 3, 5, 6, 2])
        match = Match(["Alice"], dice_source=dice)
        match.roll()
        match.commit_score(Category.CHANCE)

        dice.extend([1, 3, 5, 6, 2] * 3)
        for _ in range(3):
            match.roll()
        suggestion = advisor.suggest(match.turn_view())
        assert suggestion.category is Category.SIXES

    def test_does_not_mutate_match(self, advisor):
        match = _rolled_match((4, 4, 4, 1, 6))
        before = match.to_snapshot()
        advisor.suggest(match.turn_view())
        assert match.to_snapshot() == before
