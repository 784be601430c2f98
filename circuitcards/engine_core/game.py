"""
Game - The single point of state mutation.

A Game owns a board, a deck manager and a turn controller. All moves go
through place(), place_from_hand(), discard() or apply().

Design principles:
- Validates before mutating; a rejected move changes nothing
- Returns ActionResult with success/failure and a reason
- Deterministic given a seed (shuffles and base orientation)
"""

from __future__ import annotations
import logging
import random

from .action import Action, ActionResult, ActionType, RejectReason
from .board import BoardLattice
from .cards import Card, STATE_CARDS
from .config import DEFAULT_CONFIG, GameConfig
from .deck import DeckManager
from .legality import LegalityEngine
from .state import ColumnSnapshot, GameSnapshot, PlayerView
from .turn import Turn, TurnController

logger = logging.getLogger(__name__)


class Game:
    """
    One game between two players.

    Usage:
        game = Game(seed=7)
        result = game.place(0, 1, Card.OR_TRUE, game.active_player)
        if not result:
            print(result.reason)
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        seed: int | None = None,
        bases: list[Card] | None = None,
        first_player: Turn | None = None,
    ):
        """
        Set up a fresh game.

        Args:
            config: Board and deck dimensions
            rng: Random source (a seeded one is created when omitted)
            seed: Seed for the created random source (not allowed with rng)
            bases: Fixed base row (random orientation when omitted)
            first_player: Fixed starting player (random when omitted)
        """
        self.config = config
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self.rng = rng if rng is not None else random.Random(seed)

        if first_player is None:
            first_player = self.rng.choice(list(Turn))
        self.turn = TurnController(first_player)

        if bases is None:
            bases = [self.rng.choice(STATE_CARDS) for _ in range(config.columns)]
        elif len(bases) != config.columns:
            raise ValueError(f"expected {config.columns} base cards, got {len(bases)}")
        self.board = BoardLattice(bases)
        self.rules = LegalityEngine(self.board)

        self.deck = DeckManager(config, self.rng)
        for player in Turn:
            self.deck.top_up(self.deck.hand(player))

    # =========================================================================
    # Read-only accessors
    # =========================================================================

    @property
    def active_player(self) -> Turn:
        return self.turn.active

    @property
    def draw_pile_size(self) -> int:
        return self.deck.draw_pile_size

    def hand(self, player: Turn) -> tuple[Card, ...]:
        return tuple(self.deck.hand(player))

    def get(self, x: int, y: int) -> Card:
        return self.board.get(x, y)

    def legal_gates(self, x: int, y: int) -> frozenset[Card]:
        return self.rules.legal_gates(x, y)

    def can_accept(self, x: int, y: int) -> bool:
        return self.rules.can_accept(x, y)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            columns=tuple(
                ColumnSnapshot(base=col.base, top=tuple(col.top), bottom=tuple(col.bottom))
                for col in self.board.columns
            ),
            hands={player: self.hand(player) for player in Turn},
            active_player=self.active_player,
            draw_pile_size=self.draw_pile_size,
        )

    def view_for(self, player: Turn) -> PlayerView:
        return self.snapshot().view_for(player)

    # =========================================================================
    # Mutators
    # =========================================================================

    def apply(self, action: Action) -> ActionResult:
        """Dispatch an Action to the matching mutator."""
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(RejectReason.UNKNOWN_ACTION)
        return handler(action)

    def place(self, x: int, y: int, gate: Card, as_player: Turn) -> ActionResult:
        """Place a gate card from the acting player's hand at (x, y)."""
        error = self._validate_place(x, y, gate, as_player)
        if error:
            logger.debug("Rejected %s at (%d, %d) for %s: %s",
                         gate.value, x, y, as_player.name, error.value)
            return ActionResult.failure(error)

        index = self.deck.index_of(as_player, gate)
        if index is None:
            return ActionResult.failure(RejectReason.CARD_NOT_IN_HAND)

        return self._commit_place(x, y, index, as_player)

    def place_from_hand(self, hand_index: int, x: int, y: int, as_player: Turn) -> ActionResult:
        """Place whichever card sits at hand_index."""
        hand = self.deck.hand(as_player)
        if not self.turn.is_active(as_player):
            return ActionResult.failure(RejectReason.NOT_YOUR_TURN)
        if not 0 <= hand_index < len(hand):
            return ActionResult.failure(RejectReason.HAND_INDEX_OUT_OF_RANGE)

        gate = hand[hand_index]
        error = self._validate_place(x, y, gate, as_player)
        if error:
            logger.debug("Rejected hand[%d] at (%d, %d) for %s: %s",
                         hand_index, x, y, as_player.name, error.value)
            return ActionResult.failure(error)

        return self._commit_place(x, y, hand_index, as_player)

    def discard(self, hand_index: int, as_player: Turn) -> ActionResult:
        """Throw away the card at hand_index and draw a replacement."""
        if not self.turn.is_active(as_player):
            return ActionResult.failure(RejectReason.NOT_YOUR_TURN)
        if not 0 <= hand_index < len(self.deck.hand(as_player)):
            return ActionResult.failure(RejectReason.HAND_INDEX_OUT_OF_RANGE)

        self.turn.flip()
        card = self.deck.discard(as_player, hand_index)
        logger.debug("%s discarded %s", as_player.name, card.value)
        return ActionResult.accepted(card, changes=[f"{as_player.name} discarded {card.value}"])

    # =========================================================================
    # Internals
    # =========================================================================

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.PLACE: self._handle_place,
            ActionType.PLACE_FROM_HAND: self._handle_place_from_hand,
            ActionType.DISCARD: self._handle_discard,
        }
        return handlers.get(action_type)

    def _handle_place(self, action: Action) -> ActionResult:
        p = action.payload
        return self.place(p.x, p.y, p.card, p.player)

    def _handle_place_from_hand(self, action: Action) -> ActionResult:
        p = action.payload
        return self.place_from_hand(p.hand_index, p.x, p.y, p.player)

    def _handle_discard(self, action: Action) -> ActionResult:
        p = action.payload
        return self.discard(p.hand_index, p.player)

    def _validate_place(self, x: int, y: int, gate: Card, player: Turn) -> RejectReason | None:
        """Return the first rule the move breaks, None if it is legal."""
        if not self.turn.is_active(player):
            return RejectReason.NOT_YOUR_TURN
        if not gate.is_gate:
            return RejectReason.NOT_A_GATE
        if self.config.restrict_sides and not self._own_side(x, y, player):
            return RejectReason.WRONG_SIDE
        if not self.board.is_open_slot(x, y):
            return RejectReason.SLOT_NOT_OPEN
        if not self.rules.can_accept(x, y):
            return RejectReason.SLOT_NOT_READY
        if not self.rules.is_legal(x, y, gate):
            return RejectReason.ILLEGAL_GATE
        return None

    @staticmethod
    def _own_side(x: int, y: int, player: Turn) -> bool:
        # Player one builds below the base row, player two above it
        if player is Turn.PLAYER_ONE:
            return y < 0
        return y > 0

    def _commit_place(self, x: int, y: int, hand_index: int, player: Turn) -> ActionResult:
        self.turn.flip()
        gate = self.deck.take(player, hand_index)
        self.board.place(x, y, gate)
        logger.debug("%s placed %s at (%d, %d)", player.name, gate.value, x, y)
        return ActionResult.accepted(gate, changes=[f"{player.name} placed {gate.value} at ({x}, {y})"])
