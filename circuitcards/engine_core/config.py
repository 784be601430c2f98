"""
Game Config - Tunable constants of a game instance.

The reference game uses six base columns, five-card hands and a
48-card draw pile (8 copies of each gate variant).
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """
    Construction parameters for a Game.

    restrict_sides limits each player to building on their own half of
    the board (player one below the base row, player two above it).
    The bare engine leaves it off; the session layer turns it on.
    """
    columns: int = 6
    hand_size: int = 5
    copies_per_gate: int = 8
    restrict_sides: bool = False

    def __post_init__(self):
        if self.columns < 2:
            raise ValueError("columns must be >= 2")
        if self.hand_size < 1:
            raise ValueError("hand_size must be >= 1")
        if self.copies_per_gate < 1:
            raise ValueError("copies_per_gate must be >= 1")

    @property
    def apex_level(self) -> int:
        """Depth of the single slot at the tip of each half."""
        return self.columns - 1


DEFAULT_CONFIG = GameConfig()
