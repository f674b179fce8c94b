"""
Exception types raised by the minefield engine.
"""
from typing import Optional


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine count cannot form a playable board."""


class IllegalAction(MinefieldError):
    """
    A reveal or flag was attempted where the rules do not allow it.

    The game swallows these and treats the action as a no-op; they only
    escape when a board is driven directly.

    Attributes:
        index: Cell the action targeted, if any.
        reason: Short human-readable explanation.
    """

    def __init__(self, reason: str, index: Optional[int] = None) -> None:
        self.index = index
        self.reason = reason
        if index is None:
            super().__init__(reason)
        else:
            super().__init__(f"cell {index}: {reason}")
