"""
Yahtzee Engine - Match State Machine

A Match owns the roster, whose turn it is, the current hand, the held mask
and the rerolls left. Callers own Match instances explicitly; nothing here
is process-wide, so any number of matches can run side by side.

Turn lifecycle:
    AWAITING_ROLL -> roll() -> ROLLED_AWAITING_CHOICE -> commit_score()
    -> next player's AWAITING_ROLL ... -> FINISHED after the last round

Operations are synchronous and not re-entrant: a caller must not start a
second mutation before the first returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from src.engine.base import CLASSIC, TOTAL_ROUNDS, Category, RuleSet, TurnPhase
from src.engine.dice import DiceSource, RandomDiceSource
from src.engine.errors import IllegalTransition, InvalidArgument, InvalidState
from src.engine.events import EventListener, EventPayload, MatchEvent
from src.engine.scorecard import Player, Scorecard
from src.engine.scorer import Scorer
from src.engine.standings import Standing, compute_standings, pick_winner
from src.engine.validators import (
    UNSET_DIE,
    validate_category,
    validate_die_index,
    validate_hand,
    validate_held_mask,
    validate_player_names,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnView:
    """
    Read-only picture of the current turn.

    Attributes:
        player_name: Player whose turn it is
        round_number: Current round (1-indexed)
        dice: Current hand (zeros before the first roll)
        held: Held mask
        rolls_left: Rerolls remaining this turn
        has_rolled: Whether the hand has been rolled this turn
        open_categories: Categories the player has not filled yet
        possible_scores: Score table for the hand, None before the first roll
    """
    player_name: str
    round_number: int
    dice: tuple[int, ...]
    held: tuple[bool, ...]
    rolls_left: int
    has_rolled: bool
    open_categories: tuple[Category, ...]
    possible_scores: Mapping[Category, int] | None


class Match:
    """Turn and round state machine for one multi-player game."""

    def __init__(
        self,
        player_names: Sequence[str],
        *,
        rules: RuleSet = CLASSIC,
        dice_source: DiceSource | None = None,
        strict: bool = False,
        listener: EventListener | None = None,
    ) -> None:
        """
        Start a new match at round 1 with the first player to act.

        Args:
            player_names: Names in turn order (1-6 players)
            rules: Rule variant to score with
            dice_source: Source of die faces, random by default
            strict: Raise IllegalTransition instead of ignoring a
                disallowed roll or hold
            listener: Callback receiving an EventPayload after each change

        Raises:
            InvalidArgument: If the roster is empty or has a blank name
        """
        names = validate_player_names(player_names)
        self._configure(rules, dice_source, strict, listener)

        self._players = [Player(name=name) for name in names]
        self._current_player_index = 0
        self._current_round = 1
        self.start_turn()

        logger.info("Match started with %d player(s): %s", len(names), ", ".join(names))
        self._emit(MatchEvent.MATCH_STARTED, players=list(names))

    def _configure(
        self,
        rules: RuleSet,
        dice_source: DiceSource | None,
        strict: bool,
        listener: EventListener | None,
    ) -> None:
        self.rules = rules
        self.strict = strict
        self.listener = listener
        self._dice_source = dice_source if dice_source is not None else RandomDiceSource()

    # -- Read access ------------------------------------------------------

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def current_player_index(self) -> int:
        return self._current_player_index

    @property
    def current_player(self) -> Player:
        return self._players[self._current_player_index]

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def dice(self) -> tuple[int, ...]:
        return tuple(self._dice)

    @property
    def held(self) -> tuple[bool, ...]:
        return tuple(self._held)

    @property
    def rolls_left(self) -> int:
        return self._rolls_left

    @property
    def has_rolled(self) -> bool:
        return self._has_rolled

    @property
    def phase(self) -> TurnPhase:
        if self.is_finished():
            return TurnPhase.FINISHED
        if self._has_rolled:
            return TurnPhase.ROLLED_AWAITING_CHOICE
        return TurnPhase.AWAITING_ROLL

    def is_finished(self) -> bool:
        return self._current_round > TOTAL_ROUNDS

    def possible_scores(self) -> dict[Category, int] | None:
        """Score table for the current hand, or None until it has been rolled."""
        if self.is_finished() or not self._has_rolled:
            return None
        return Scorer.compute_possible_scores(self._dice, self.rules)

    def open_categories(self) -> tuple[Category, ...]:
        """Categories the current player can still score."""
        if self.is_finished():
            return ()
        return self.current_player.scorecard.open_categories

    def turn_view(self) -> TurnView:
        """
        Frozen view of the current turn for advisors and renderers.

        Raises:
            InvalidState: If the match is finished
        """
        self._ensure_active()
        return TurnView(
            player_name=self.current_player.name,
            round_number=self._current_round,
            dice=self.dice,
            held=self.held,
            rolls_left=self._rolls_left,
            has_rolled=self._has_rolled,
            open_categories=self.open_categories(),
            possible_scores=self.possible_scores(),
        )

    # -- Turn operations ------------------------------------------------

    def start_turn(self) -> None:
        """Reset the turn-scoped state for the current player."""
        self._ensure_active()
        self._dice = [UNSET_DIE] * self.rules.dice_count
        self._held = [False] * self.rules.dice_count
        self._rolls_left = self.rules.max_rolls
        self._has_rolled = False

    def roll(self, force_all: bool = False) -> bool:
        """
        Roll every die that is not held.

        With ``force_all`` every die is rolled regardless of the held mask
        and no reroll is consumed.

        Returns:
            True if the dice were rolled, False if the roll was ignored
            because no rerolls are left

        Raises:
            InvalidState: If the match is finished
            IllegalTransition: In strict mode, instead of returning False
        """
        self._ensure_active()
        if self._rolls_left <= 0 and not force_all:
            return self._reject("No rerolls left this turn.")

        faces = self.rules.faces
        new_dice = [
            self._dice_source.roll_die(faces) if force_all or not held else value
            for value, held in zip(self._dice, self._held)
        ]

        self._dice = new_dice
        if not force_all:
            self._rolls_left -= 1
        self._has_rolled = True

        logger.debug(
            "%s rolled %s (%d reroll(s) left)",
            self.current_player.name, new_dice, self._rolls_left,
        )
        self._emit(MatchEvent.DICE_ROLLED, dice=list(new_dice), rolls_left=self._rolls_left)
        return True

    def toggle_hold(self, index: int) -> bool:
        """
        Flip the held flag of one die.

        Holding is only meaningful once the hand has been rolled this turn.

        Returns:
            True if the flag was flipped, False if ignored before the first roll

        Raises:
            InvalidArgument: If the index is out of range
            InvalidState: If the match is finished
            IllegalTransition: In strict mode, instead of returning False
        """
        self._ensure_active()
        validate_die_index(index, self.rules.dice_count)
        if self._rolls_left >= self.rules.max_rolls:
            return self._reject("Cannot hold dice before the first roll.")

        self._held[index] = not self._held[index]
        self._emit(MatchEvent.DICE_HELD, index=index, held=self._held[index])
        return True

    def commit_score(self, category: Category | str, score: int | None = None) -> int:
        """
        Score the current hand in a category and pass the turn.

        The score is always recomputed from the current hand. A caller that
        supplies the score it displayed gets an error if the two disagree.

        Args:
            category: Category or its persisted key
            score: Optional expected score to check against

        Returns:
            The score written to the scorecard

        Raises:
            InvalidArgument: If the category key is unknown
            InvalidState: If the match is finished, the hand has not been
                rolled, the category is filled or the score disagrees
        """
        self._ensure_active()
        category = validate_category(category)
        player = self.current_player

        if not self._has_rolled:
            raise InvalidState("Roll the dice before committing a score.")
        if player.scorecard.filled_count >= self._current_round:
            raise InvalidState(f"{player.name} has already scored this turn.")
        if player.scorecard.is_filled(category):
            raise InvalidState(
                f"{player.name} has already scored {category.value} "
                f"({player.scorecard.get(category)})."
            )

        actual = Scorer.compute_possible_scores(self._dice, self.rules)[category]
        if score is not None and score != actual:
            raise InvalidState(
                f"Score {score} for {category.value} does not match the hand "
                f"{self._dice}, which scores {actual}."
            )

        player.scorecard.record(category, actual)
        logger.info(
            "Round %d: %s scored %d in %s", self._current_round, player.name, actual, category.value
        )
        committed = self._payload(MatchEvent.SCORE_COMMITTED, category=category.value, score=actual)

        # Listeners only run once the turn has passed.
        self._dispatch([committed, *self._advance()])
        return actual

    def end_turn(self) -> None:
        """
        Pass the turn to the next player, advancing the round on wrap-around.

        Raises:
            InvalidState: If the match is finished or the current player has
                not scored this turn
        """
        self._ensure_active()
        if self.current_player.scorecard.filled_count < self._current_round:
            raise InvalidState(
                f"{self.current_player.name} must score a category before the turn ends."
            )
        self._dispatch(self._advance())

    def _advance(self) -> list[EventPayload]:
        """Move to the next seat and return the events to publish."""
        self._current_player_index = (self._current_player_index + 1) % len(self._players)
        if self._current_player_index == 0:
            self._current_round += 1

        if self.is_finished():
            return [self._finish()]

        self.start_turn()
        logger.info(
            "Round %d: %s to play", self._current_round, self.current_player.name
        )
        events = []
        if self._current_player_index == 0:
            events.append(self._payload(MatchEvent.ROUND_ADVANCED, round=self._current_round))
        events.append(self._payload(MatchEvent.TURN_ADVANCED, round=self._current_round))
        return events

    def _finish(self) -> EventPayload:
        self._dice = [UNSET_DIE] * self.rules.dice_count
        self._held = [False] * self.rules.dice_count
        self._rolls_left = 0
        self._has_rolled = False

        standings = self.compute_standings()
        winner = pick_winner(standings)
        logger.info("Match finished; winner %s with %d", winner.name, winner.total)
        return self._payload(
            MatchEvent.MATCH_FINISHED,
            winner=winner.name,
            standings=[(s.name, s.total) for s in standings],
        )

    # -- Standings ------------------------------------------------------

    def compute_standings(self) -> list[Standing]:
        """Players ranked by total (filled scores plus upper bonus), highest first."""
        return compute_standings(self._players, self.rules)

    def winner(self) -> Standing:
        """
        The first player in turn order with the highest total.

        Raises:
            InvalidState: If the match is not finished yet
        """
        if not self.is_finished():
            raise InvalidState("The match is still in progress.")
        return pick_winner(self.compute_standings())

    # -- Snapshots ------------------------------------------------------

    def to_snapshot(self) -> dict[str, Any]:
        """Plain, JSON-serializable copy of the entire match state."""
        return {
            "players": [player.to_dict() for player in self._players],
            "currentPlayerIndex": self._current_player_index,
            "currentRound": self._current_round,
            "dice": list(self._dice),
            "heldDice": list(self._held),
            "rollsLeft": self._rolls_left,
            "hasRolled": self._has_rolled,
        }

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Mapping[str, Any],
        *,
        rules: RuleSet = CLASSIC,
        dice_source: DiceSource | None = None,
        strict: bool = False,
        listener: EventListener | None = None,
    ) -> Match:
        """
        Resume a match from a snapshot produced by ``to_snapshot``.

        The snapshot is validated in full before anything is applied.

        Raises:
            InvalidArgument: If the snapshot is malformed or inconsistent
        """
        try:
            raw_players = snapshot["players"]
            current_player_index = snapshot["currentPlayerIndex"]
            current_round = snapshot["currentRound"]
            dice = snapshot["dice"]
            held = snapshot["heldDice"]
            rolls_left = snapshot["rollsLeft"]
            has_rolled = snapshot["hasRolled"]
        except (KeyError, TypeError) as exc:
            raise InvalidArgument(f"Snapshot is missing field {exc}.") from exc

        if not isinstance(raw_players, list) or not raw_players:
            raise InvalidArgument("Snapshot must contain at least one player.")
        try:
            names = validate_player_names([p["name"] for p in raw_players])
            scorecards = [Scorecard.from_scores(p.get("scores") or {}) for p in raw_players]
        except (KeyError, TypeError, AttributeError) as exc:
            raise InvalidArgument(f"Snapshot has a malformed player entry: {exc}.") from exc

        for field_name, value in (
            ("currentPlayerIndex", current_player_index),
            ("currentRound", current_round),
            ("rollsLeft", rolls_left),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"Snapshot field {field_name} must be an integer.")
        if not isinstance(has_rolled, bool):
            raise InvalidArgument("Snapshot field hasRolled must be a bool.")
        if not 0 <= current_player_index < len(names):
            raise InvalidArgument(
                f"Snapshot player index {current_player_index} is out of range."
            )
        if not 1 <= current_round <= TOTAL_ROUNDS + 1:
            raise InvalidArgument(
                f"Snapshot round {current_round} must be between 1 and {TOTAL_ROUNDS + 1}."
            )
        if not 0 <= rolls_left <= rules.max_rolls:
            raise InvalidArgument(
                f"Snapshot rollsLeft {rolls_left} must be between 0 and {rules.max_rolls}."
            )
        dice = validate_hand(dice, rules.dice_count, rules.faces)
        held = validate_held_mask(held, rules.dice_count)

        # A forced first roll leaves rollsLeft at the maximum, so only the
        # hand itself tells a rolled turn from a fresh one.
        if has_rolled:
            if UNSET_DIE in dice:
                raise InvalidArgument("Snapshot hasRolled is set but the hand has unrolled dice.")
        else:
            if any(value != UNSET_DIE for value in dice) or any(held):
                raise InvalidArgument("Snapshot hand must be unset and unheld before a roll.")
            fresh_rolls = 0 if current_round > TOTAL_ROUNDS else rules.max_rolls
            if rolls_left != fresh_rolls:
                raise InvalidArgument(
                    f"Snapshot rollsLeft {rolls_left} before a roll, expected {fresh_rolls}."
                )

        # Every player ahead of the current seat has played this round already.
        for seat, scorecard in enumerate(scorecards):
            if current_round > TOTAL_ROUNDS:
                expected = TOTAL_ROUNDS
            else:
                expected = current_round if seat < current_player_index else current_round - 1
            if scorecard.filled_count != expected:
                raise InvalidArgument(
                    f"Snapshot player {names[seat]!r} has {scorecard.filled_count} "
                    f"scored categories, expected {expected} in round {current_round}."
                )

        match = cls.__new__(cls)
        match._configure(rules, dice_source, strict, listener)
        match._players = [Player(name=n, scorecard=s) for n, s in zip(names, scorecards)]
        match._current_player_index = current_player_index
        match._current_round = current_round
        match._dice = list(dice)
        match._held = list(held)
        match._rolls_left = rolls_left
        match._has_rolled = has_rolled

        logger.info(
            "Match restored at round %d, %s to play",
            current_round, names[current_player_index],
        )
        match._emit(MatchEvent.MATCH_RESTORED, round=current_round)
        return match

    # -- Internals ------------------------------------------------------

    def _ensure_active(self) -> None:
        if self.is_finished():
            raise InvalidState("The match is already finished.")

    def _reject(self, reason: str) -> bool:
        if self.strict:
            raise IllegalTransition(reason)
        logger.debug("Ignored transition for %s: %s", self.current_player.name, reason)
        return False

    def _payload(self, event: MatchEvent, **data: Any) -> EventPayload:
        player_index = None if self.is_finished() else self._current_player_index
        return EventPayload(event=event, player_index=player_index, data=data)

    def _dispatch(self, payloads: list[EventPayload]) -> None:
        if self.listener is None:
            return
        for payload in payloads:
            self.listener(payload)

    def _emit(self, event: MatchEvent, **data: Any) -> None:
        self._dispatch([self._payload(event, **data)])
