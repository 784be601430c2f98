"""
Cards - The card vocabulary of the game.

Two kinds of cards exist:
1. State cards sit in the base row. Each encodes a boolean pair by
   orientation, so it reads differently from the top and from the bottom.
2. Gate cards (AND / OR / XOR) are placed into the pyramid. The suffix
   is the gate's output polarity, fixed when the card is printed.

EMPTY is a sentinel returned by board queries, never stored.
"""

from __future__ import annotations
from enum import Enum


class GateFamily(Enum):
    """Boolean operator a gate card implements."""
    AND = "and"
    OR = "or"
    XOR = "xor"


class Side(Enum):
    """Which half of the board a slot belongs to."""
    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def of(cls, y: int) -> Side | None:
        """Side for a row index; None for the base row."""
        if y > 0:
            return cls.TOP
        if y < 0:
            return cls.BOTTOM
        return None


class Card(Enum):
    """Every card value that can appear on the board or in a hand."""
    STATE_LOW = "state_low"
    STATE_HIGH = "state_high"

    AND_FALSE = "and_0"
    AND_TRUE = "and_1"
    OR_FALSE = "or_0"
    OR_TRUE = "or_1"
    XOR_FALSE = "xor_0"
    XOR_TRUE = "xor_1"

    EMPTY = "empty"

    @property
    def is_state(self) -> bool:
        return self in (Card.STATE_LOW, Card.STATE_HIGH)

    @property
    def is_gate(self) -> bool:
        return self in _GATES

    @property
    def family(self) -> GateFamily | None:
        """Gate family, or None for state cards and EMPTY."""
        entry = _GATES.get(self)
        return entry[0] if entry else None

    @property
    def polarity(self) -> bool | None:
        """Output polarity of a gate card, or None for non-gates."""
        entry = _GATES.get(self)
        return entry[1] if entry else None

    def read(self, side: Side) -> bool | None:
        """
        Boolean value this card feeds into the slot above (or below) it.

        State cards depend on the direction they are viewed from:
        STATE_LOW reads True from the top and False from the bottom,
        STATE_HIGH is the exact mirror. Gate cards read as their polarity.
        EMPTY has no value.
        """
        if self is Card.STATE_LOW:
            return side is Side.TOP
        if self is Card.STATE_HIGH:
            return side is Side.BOTTOM
        return self.polarity

    def flipped(self) -> Card:
        """Same physical card seen from the opposite side of the table."""
        if self is Card.STATE_LOW:
            return Card.STATE_HIGH
        if self is Card.STATE_HIGH:
            return Card.STATE_LOW
        return self

    @classmethod
    def gate(cls, family: GateFamily, polarity: bool) -> Card:
        """Look up the gate card for a family and output polarity."""
        return _GATE_LOOKUP[(family, polarity)]


_GATES: dict[Card, tuple[GateFamily, bool]] = {
    Card.AND_FALSE: (GateFamily.AND, False),
    Card.AND_TRUE: (GateFamily.AND, True),
    Card.OR_FALSE: (GateFamily.OR, False),
    Card.OR_TRUE: (GateFamily.OR, True),
    Card.XOR_FALSE: (GateFamily.XOR, False),
    Card.XOR_TRUE: (GateFamily.XOR, True),
}

_GATE_LOOKUP: dict[tuple[GateFamily, bool], Card] = {v: k for k, v in _GATES.items()}

# Deck order used when the draw pile is rebuilt
GATE_CARDS: tuple[Card, ...] = tuple(_GATES)
STATE_CARDS: tuple[Card, ...] = (Card.STATE_LOW, Card.STATE_HIGH)
