"""
Turn Controller - Whose move it is.

The active player flips exactly once per accepted placement or discard.
A rejected move never touches the turn.
"""

from __future__ import annotations
from enum import Enum


class Turn(Enum):
    """The two seats at the table."""
    PLAYER_ONE = 0
    PLAYER_TWO = 1

    @property
    def other(self) -> Turn:
        return Turn.PLAYER_TWO if self is Turn.PLAYER_ONE else Turn.PLAYER_ONE


class TurnController:
    """Holds the active player and gates mutating calls on it."""

    def __init__(self, first: Turn):
        self._active = first
        self.moves_accepted = 0

    @property
    def active(self) -> Turn:
        return self._active

    def is_active(self, player: Turn) -> bool:
        return player is self._active

    def flip(self) -> Turn:
        """Pass the turn to the other player and return the new active one."""
        self._active = self._active.other
        self.moves_accepted += 1
        return self._active
