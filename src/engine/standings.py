"""
Yahtzee Engine - Standings

Totals with upper-bonus accounting and winner selection. Ties keep player
order, so the first player to reach the top total is the winner.
"""

from dataclasses import dataclass
from typing import Sequence

from src.engine.base import CLASSIC, RuleSet
from src.engine.scorecard import Player


@dataclass(frozen=True)
class Standing:
    """
    A player's position in the final (or live) ranking.

    Attributes:
        seat: Index of the player in turn order
        name: Player name
        upper_subtotal: Sum of upper-section scores
        bonus: Upper bonus awarded (0 or the rule set's bonus)
        total: All filled scores plus bonus
    """
    seat: int
    name: str
    upper_subtotal: int
    bonus: int
    total: int


def compute_standings(
    players: Sequence[Player],
    rules: RuleSet = CLASSIC,
) -> list[Standing]:
    """
    Rank players by total, highest first.

    The sort is stable: equal totals stay in seat order.
    """
    standings = [
        Standing(
            seat=seat,
            name=player.name,
            upper_subtotal=player.scorecard.upper_subtotal,
            bonus=player.scorecard.bonus(rules),
            total=player.scorecard.total(rules),
        )
        for seat, player in enumerate(players)
    ]
    return sorted(standings, key=lambda s: s.total, reverse=True)


def pick_winner(standings: Sequence[Standing]) -> Standing | None:
    """
    First standing with the strictly greatest total, in seat order.

    Returns:
        The winning Standing, or None when there are no players
    """
    winner: Standing | None = None
    for standing in sorted(standings, key=lambda s: s.seat):
        if winner is None or standing.total > winner.total:
            winner = standing
    return winner
