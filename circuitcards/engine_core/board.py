"""
Board Lattice - The pyramid of gate merges.

The board is a row of N base columns. Each column carries a state card
and two append-only chains, one growing toward the top of the table and
one toward the bottom.

Slot addressing (x, y):
- y == 0 is the base row, x is the column
- y > 0 is link y of the top chain rooted at column x + y
- y < 0 is link |y| of the bottom chain rooted at column x - y

Valid slots form a triangle on each side: |y| < N and 0 <= x < N - |y|.
A slot at level |y| merges (x, y -/+ 1) and (x + 1, y -/+ 1), the two
slots one level closer to the base row.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .cards import Card, Side


@dataclass
class BaseColumn:
    """A base state card and the two chains rooted on it."""
    base: Card
    top: list[Card] = field(default_factory=list)
    bottom: list[Card] = field(default_factory=list)

    def chain(self, side: Side) -> list[Card]:
        return self.top if side is Side.TOP else self.bottom


class BoardLattice:
    """
    Slot queries and the single chain mutator.

    Validation of moves lives in the legality module; place() here
    trusts its caller.
    """

    def __init__(self, bases: list[Card]):
        if len(bases) < 2:
            raise ValueError("board needs at least two base columns")
        for base in bases:
            if not base.is_state:
                raise ValueError(f"base cards must be state cards, got {base}")
        self._columns = [BaseColumn(base=base) for base in bases]

    @property
    def size(self) -> int:
        """Number of base columns (N)."""
        return len(self._columns)

    @property
    def columns(self) -> list[BaseColumn]:
        return self._columns

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) lies inside the triangle."""
        level = abs(y)
        return x >= 0 and level < self.size and x < self.size - level

    def chain_for(self, x: int, y: int) -> list[Card] | None:
        """The chain a non-base slot lives in, or None for the base row."""
        side = Side.of(y)
        if side is None:
            return None
        return self._columns[x + abs(y)].chain(side)

    def get(self, x: int, y: int) -> Card:
        """Card at (x, y); EMPTY outside the board or past the chain end."""
        if not self.in_bounds(x, y):
            return Card.EMPTY
        if y == 0:
            return self._columns[x].base

        chain = self.chain_for(x, y)
        depth = abs(y)
        if len(chain) < depth:
            return Card.EMPTY
        return chain[depth - 1]

    def is_open_slot(self, x: int, y: int) -> bool:
        """True iff (x, y) is exactly the next link of its chain."""
        if y == 0 or not self.in_bounds(x, y):
            return False
        return len(self.chain_for(x, y)) == abs(y) - 1

    def place(self, x: int, y: int, gate: Card):
        """Append gate to the chain holding (x, y). No validation."""
        self.chain_for(x, y).append(gate)

    def gate_count(self) -> int:
        """Number of gate cards placed on both halves."""
        return sum(len(col.top) + len(col.bottom) for col in self._columns)

    def slots(self, side: Side) -> list[tuple[int, int]]:
        """Every addressable slot on one half, nearest the base row first."""
        sign = 1 if side is Side.TOP else -1
        return [
            (x, sign * level)
            for level in range(1, self.size)
            for x in range(self.size - level)
        ]
