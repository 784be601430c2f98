"""
Legality & Propagation - Which gates may go where.

A slot accepts a gate when:
1. It is the next open link of its chain
2. Neither of the two parent slots it merges is itself still open
3. The gate's output polarity equals what its family computes from
   the two parent values

The apex of each half is further filtered by the orientation of the
base card at the opposite edge of the board.
"""

from __future__ import annotations
from dataclasses import dataclass

from .board import BoardLattice
from .cards import Card, GateFamily, Side


# Candidate gates keyed by the number of true inputs
_CANDIDATES: dict[int, frozenset[Card]] = {
    2: frozenset({Card.AND_TRUE, Card.OR_TRUE, Card.XOR_FALSE}),
    1: frozenset({Card.AND_FALSE, Card.OR_TRUE, Card.XOR_TRUE}),
    0: frozenset({Card.AND_FALSE, Card.OR_FALSE, Card.XOR_FALSE}),
}

NO_GATES: frozenset[Card] = frozenset()


def propagate(family: GateFamily, left: bool, right: bool) -> bool:
    """Output of a gate family for two inputs."""
    if family is GateFamily.AND:
        return left and right
    if family is GateFamily.OR:
        return left or right
    return left != right


def parent_row(y: int) -> int:
    """Row one step closer to the base row."""
    return y - 1 if y > 0 else y + 1


@dataclass
class LegalityEngine:
    """Read-only rules evaluated against a board."""
    board: BoardLattice

    def parents(self, x: int, y: int) -> tuple[tuple[int, int], tuple[int, int]]:
        """The two slots merged by (x, y)."""
        py = parent_row(y)
        return (x, py), (x + 1, py)

    def parents_pending(self, x: int, y: int) -> bool:
        """Whether a parent slot is still waiting to be filled."""
        (lx, ly), (rx, ry) = self.parents(x, y)
        return self.board.is_open_slot(lx, ly) or self.board.is_open_slot(rx, ry)

    def can_accept(self, x: int, y: int) -> bool:
        """Slot is open and both slots feeding it are filled."""
        if not self.board.is_open_slot(x, y):
            return False
        return not self.parents_pending(x, y)

    def input_values(self, x: int, y: int) -> tuple[bool, bool] | None:
        """Boolean values of the two parents, or None if unresolved."""
        side = Side.of(y)
        if side is None:
            return None

        (lx, ly), (rx, ry) = self.parents(x, y)
        left = self.board.get(lx, ly).read(side)
        right = self.board.get(rx, ry).read(side)
        if left is None or right is None:
            return None
        return left, right

    def legal_gates(self, x: int, y: int) -> frozenset[Card]:
        """Gate cards a player may place at (x, y) right now."""
        if not self.can_accept(x, y):
            return NO_GATES

        inputs = self.input_values(x, y)
        if inputs is None:
            return NO_GATES

        candidates = _CANDIDATES[sum(inputs)]
        apex_polarity = self.apex_polarity(y)
        if apex_polarity is not None:
            candidates = frozenset(c for c in candidates if c.polarity == apex_polarity)
        return candidates

    def apex_polarity(self, y: int) -> bool | None:
        """
        Polarity forced at an apex slot, None elsewhere.

        Top apex: true gates only when column 0 holds STATE_LOW.
        Bottom apex: false gates only when the last column holds STATE_LOW.
        """
        apex = self.board.size - 1
        if y == apex:
            return self.board.get(0, 0) is Card.STATE_LOW
        if y == -apex:
            return self.board.get(apex, 0) is not Card.STATE_LOW
        return None

    def is_legal(self, x: int, y: int, gate: Card) -> bool:
        return gate.is_gate and gate in self.legal_gates(x, y)
