"""
Yahtzee Engine - Scorer Tests

Tests for possible-score tables, straight detection and rule variants.
"""

import itertools

import pytest

from src.engine.base import CLASSIC, LOWER_CATEGORIES, STRICT, UPPER_CATEGORIES, Category
from src.engine.errors import InvalidArgument
from src.engine.scorer import Scorer, face_counts, longest_run


# === Helpers ===


class TestFaceCounts:
    def test_counts_each_face(self):
        counts = face_counts((2, 2, 5, 6, 2))
        assert counts[2] == 3
        assert counts[5] == 1
        assert counts[1] == 0

    def test_unset_dice_ignored(self):
        counts = face_counts((0, 0, 3, 0, 0))
        assert counts[3] == 1
        assert 0 not in counts


class TestLongestRun:
    @pytest.mark.parametrize("hand,expected", [
        ((1, 2, 3, 4, 5), 5),
        ((2, 3, 3, 4, 6), 3),
        ((6, 5, 4, 3, 1), 4),
        ((1, 1, 1, 1, 1), 1),
        ((1, 3, 5, 2, 6), 3),
        ((0, 0, 0, 0, 0), 0),
    ])
    def test_longest_run(self, hand, expected):
        assert longest_run(hand) == expected


# === Possible scores ===


class TestComputePossibleScores:
    """Tests for Scorer.compute_possible_scores()."""

    def test_covers_all_categories_in_order(self):
        scores = Scorer.compute_possible_scores((1, 2, 3, 4, 5))
        assert list(scores) == list(Category)

    @pytest.mark.parametrize("name", [
        "full_house", "low_large_straight", "small_straight_with_pair",
        "four_of_a_kind", "yahtzee", "nothing",
    ])
    def test_lower_section(self, scored_hands, name):
        hand, expected = scored_hands[name]
        scores = Scorer.compute_possible_scores(hand)
        for category in LOWER_CATEGORIES:
            assert scores[category] == expected[category], category

    def test_upper_section_counts(self):
        scores = Scorer.compute_possible_scores((2, 2, 5, 6, 2))
        assert scores[Category.ONES] == 0
        assert scores[Category.TWOS] == 6
        assert scores[Category.FIVES] == 5
        assert scores[Category.SIXES] == 6

    def test_upper_equals_count_times_face_for_all_hands(self):
        for hand in itertools.product(range(1, 7), repeat=5):
            scores = Scorer.compute_possible_scores(hand)
            for category in UPPER_CATEGORIES:
                assert scores[category] == hand.count(category.face) * category.face

    def test_yahtzee_iff_all_dice_equal(self):
        for hand in itertools.product(range(1, 7), repeat=5):
            scores = Scorer.compute_possible_scores(hand)
            expected = 50 if len(set(hand)) == 1 else 0
            assert scores[Category.YAHTZEE] == expected

    def test_order_independent(self):
        base = Scorer.compute_possible_scores((3, 3, 4, 5, 6))
        for permutation in itertools.permutations((3, 3, 4, 5, 6)):
            assert Scorer.compute_possible_scores(permutation) == base

    def test_high_large_straight(self):
        scores = Scorer.compute_possible_scores((6, 2, 4, 3, 5))
        assert scores[Category.LARGE_STRAIGHT] == 40
        assert scores[Category.SMALL_STRAIGHT] == 30

    def test_three_run_is_not_small_straight(self):
        scores = Scorer.compute_possible_scores((1, 2, 3, 5, 5))
        assert scores[Category.SMALL_STRAIGHT] == 0

    def test_unset_hand_scores_zero(self):
        scores = Scorer.compute_possible_scores((0, 0, 0, 0, 0))
        assert all(score == 0 for score in scores.values())

    def test_deterministic(self):
        hand = (5, 5, 5, 2, 2)
        assert Scorer.compute_possible_scores(hand) == Scorer.compute_possible_scores(hand)

    def test_accepts_list(self):
        assert Scorer.compute_possible_scores([1, 1, 1, 2, 2])[Category.FULL_HOUSE] == 25

    def test_wrong_length_raises(self):
        with pytest.raises(InvalidArgument, match="exactly 5 dice"):
            Scorer.compute_possible_scores((1, 2, 3))

    def test_bad_value_raises(self):
        with pytest.raises(InvalidArgument):
            Scorer.compute_possible_scores((1, 2, 3, 4, 9))


class TestRuleVariants:
    def test_classic_yahtzee_counts_as_full_house(self):
        assert Scorer.score_category((3, 3, 3, 3, 3), Category.FULL_HOUSE, CLASSIC) == 25

    def test_strict_yahtzee_is_not_full_house(self):
        scores = Scorer.compute_possible_scores((3, 3, 3, 3, 3), STRICT)
        assert scores[Category.FULL_HOUSE] == 0
        assert scores[Category.YAHTZEE] == 50

    def test_strict_regular_full_house(self):
        assert Scorer.score_category((1, 1, 6, 6, 6), Category.FULL_HOUSE, STRICT) == 25
