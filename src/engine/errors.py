"""
Yahtzee Engine - Exceptions
"""


class EngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidArgument(EngineError, ValueError):
    """A caller passed a malformed value (bad index, hand, key or name)."""


class InvalidState(EngineError):
    """The operation is not valid in the match's current state."""


class IllegalTransition(EngineError):
    """
    A turn transition that is disallowed right now.

    Raised only by matches created with ``strict=True``; otherwise the
    transition is ignored and the operation returns False.
    """
