"""
Action System - Actions, payloads, and results.

Actions represent the two moves a player can make:
1. Place a gate card from hand into an open slot
2. Discard a card from hand

All state changes flow through actions. A rejected action leaves the
game untouched and says why.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .cards import Card
from .turn import Turn


class ActionType(Enum):
    """Types of actions in the system."""
    PLACE = "place"
    PLACE_FROM_HAND = "place_from_hand"
    DISCARD = "discard"


class RejectReason(Enum):
    """Why a move was turned down."""
    NOT_YOUR_TURN = "not_your_turn"
    NOT_A_GATE = "not_a_gate"
    SLOT_NOT_OPEN = "slot_not_open"
    SLOT_NOT_READY = "slot_not_ready"
    ILLEGAL_GATE = "illegal_gate"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    HAND_INDEX_OUT_OF_RANGE = "hand_index_out_of_range"
    WRONG_SIDE = "wrong_side"
    UNKNOWN_ACTION = "unknown_action"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    PLACE uses card + (x, y); PLACE_FROM_HAND uses hand_index + (x, y);
    DISCARD uses hand_index.
    """
    player: Turn
    card: Card | None = None
    hand_index: int | None = None
    x: int | None = None
    y: int | None = None


@dataclass
class Action:
    """A complete move to be applied to a game."""
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def place(cls, player: Turn, x: int, y: int, card: Card) -> Action:
        """Factory for placing a specific gate card."""
        return cls(
            action_type=ActionType.PLACE,
            payload=ActionPayload(player=player, card=card, x=x, y=y),
        )

    @classmethod
    def place_from_hand(cls, player: Turn, hand_index: int, x: int, y: int) -> Action:
        """Factory for placing whatever card sits at a hand position."""
        return cls(
            action_type=ActionType.PLACE_FROM_HAND,
            payload=ActionPayload(player=player, hand_index=hand_index, x=x, y=y),
        )

    @classmethod
    def discard(cls, player: Turn, hand_index: int) -> Action:
        """Factory for discard action."""
        return cls(
            action_type=ActionType.DISCARD,
            payload=ActionPayload(player=player, hand_index=hand_index),
        )

    def describe(self) -> str:
        p = self.payload
        if self.action_type is ActionType.DISCARD:
            return f"{p.player.name} discards hand[{p.hand_index}]"
        what = p.card.value if p.card else f"hand[{p.hand_index}]"
        return f"{p.player.name} places {what} at ({p.x}, {p.y})"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Truthy when the move was accepted. On rejection, reason holds the
    RejectReason and error a human-readable message.
    """
    success: bool
    reason: RejectReason | None = None
    error: str | None = None

    # The card that left the hand, for accepted moves
    card: Card | None = None
    state_changes: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failure(cls, reason: RejectReason, error: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, reason=reason, error=error or reason.value)

    @classmethod
    def accepted(cls, card: Card, changes: list[str] | None = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, card=card, state_changes=changes or [])
