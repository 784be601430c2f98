"""
Game Snapshots - Immutable read-only copies of a game.

Snapshots are what leaves the engine:
- Serializable: plain tuples of Card values
- Safe: mutating a snapshot never touches the game
- Viewable: each player gets the board as seen from their seat

Player two sits on the opposite side of the table, so their view is
the mirror image of the canonical one: top and bottom chains swap,
state cards read the other way up, and the can-place flag inverts.
"""

from __future__ import annotations
from dataclasses import dataclass

from .cards import Card
from .turn import Turn


@dataclass(frozen=True)
class ColumnSnapshot:
    """One base column and its two chains."""
    base: Card
    top: tuple[Card, ...] = ()
    bottom: tuple[Card, ...] = ()

    def mirrored(self) -> ColumnSnapshot:
        return ColumnSnapshot(base=self.base.flipped(), top=self.bottom, bottom=self.top)


@dataclass(frozen=True)
class PlayerView:
    """What one player is shown: the board from their seat and their hand."""
    viewer: Turn
    columns: tuple[ColumnSnapshot, ...]
    hand: tuple[Card, ...]
    can_place: bool


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete canonical state at a point in time.

    Canonical orientation is player one's view.
    """
    columns: tuple[ColumnSnapshot, ...]
    hands: dict[Turn, tuple[Card, ...]]
    active_player: Turn
    draw_pile_size: int

    def hand(self, player: Turn) -> tuple[Card, ...]:
        return self.hands[player]

    def mirrored_columns(self) -> tuple[ColumnSnapshot, ...]:
        return tuple(col.mirrored() for col in self.columns)

    def view_for(self, viewer: Turn) -> PlayerView:
        """Board and hand as the given player sees them."""
        can_place = self.active_player is Turn.PLAYER_ONE
        columns = self.columns
        if viewer is Turn.PLAYER_TWO:
            columns = self.mirrored_columns()
            can_place = not can_place

        return PlayerView(
            viewer=viewer,
            columns=columns,
            hand=self.hands[viewer],
            can_place=can_place,
        )
