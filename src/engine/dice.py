"""
Yahtzee Engine - Dice Sources

A dice source is the only thing that produces die values. Matches receive
one at construction; tests and replays pass a scripted source instead of
the random one.
"""

import random
from typing import Iterable, Protocol

from src.engine.errors import InvalidArgument, InvalidState


class DiceSource(Protocol):
    """Anything that can produce uniform die faces."""

    def roll_die(self, faces: int = 6) -> int:
        ...


class RandomDiceSource:
    """Uniform random faces from a private, optionally seeded generator."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def roll_die(self, faces: int = 6) -> int:
        return self._rng.randint(1, faces)


class ScriptedDiceSource:
    """
    Replays a fixed sequence of faces, in order.

    Raises InvalidState once the script runs out.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def extend(self, values: Iterable[int]) -> None:
        self._values.extend(values)

    def roll_die(self, faces: int = 6) -> int:
        if self._position >= len(self._values):
            raise InvalidState("Scripted dice source is exhausted.")
        value = self._values[self._position]
        if not (1 <= value <= faces):
            raise InvalidArgument(f"Scripted die value {value} is not between 1 and {faces}.")
        self._position += 1
        return value
