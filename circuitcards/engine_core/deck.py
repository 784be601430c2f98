"""
Deck Manager - The shared draw pile and the two player hands.

Rules:
- The pile only ever holds gate cards (copies_per_gate of each variant)
- Cards are drawn from the tail of the pile
- An empty pile is rebuilt and reshuffled before the next draw
- Every time a card leaves a hand, the hand is topped back up

The board never references hands or the pile.
"""

from __future__ import annotations
import logging
import random

from .cards import Card, GATE_CARDS
from .config import GameConfig
from .turn import Turn

logger = logging.getLogger(__name__)


class DeckManager:
    """
    Owns the draw pile and both hands.

    Usage:
        deck = DeckManager(config, rng)
        deck.top_up(deck.hand(Turn.PLAYER_ONE))
        card = deck.take(Turn.PLAYER_ONE, 2)
    """

    def __init__(self, config: GameConfig, rng: random.Random):
        self.config = config
        self._rng = rng
        self._draw_pile: list[Card] = []
        self._hands: dict[Turn, list[Card]] = {turn: [] for turn in Turn}
        self.discarded: list[Card] = []
        self.refill_count = 0

        self.refill_draw_pile()

    @property
    def draw_pile(self) -> list[Card]:
        """Copy of the draw pile, bottom first."""
        return list(self._draw_pile)

    @property
    def draw_pile_size(self) -> int:
        return len(self._draw_pile)

    def hand(self, player: Turn) -> list[Card]:
        """The live hand list for a player (mutated by draw_into/take)."""
        return self._hands[player]

    def refill_draw_pile(self):
        """Rebuild the full gate set on the pile and shuffle it."""
        for card in GATE_CARDS:
            self._draw_pile.extend([card] * self.config.copies_per_gate)
        self._rng.shuffle(self._draw_pile)
        self.refill_count += 1
        logger.debug("Draw pile refilled (%d cards, refill #%d)",
                     len(self._draw_pile), self.refill_count)

    def draw_into(self, hand: list[Card]) -> Card:
        """Move the tail card of the pile into hand."""
        if not self._draw_pile:
            self.refill_draw_pile()

        card = self._draw_pile.pop()
        hand.append(card)

        if not self._draw_pile:
            self.refill_draw_pile()
        return card

    def top_up(self, hand: list[Card]):
        """Draw until hand holds hand_size cards."""
        while len(hand) < self.config.hand_size:
            self.draw_into(hand)

    def take(self, player: Turn, index: int) -> Card:
        """
        Remove the card at index from a player's hand and top the hand up.

        Raises IndexError for an index outside the hand; callers validate
        first so that a rejected move never reaches here.
        """
        hand = self._hands[player]
        if not 0 <= index < len(hand):
            raise IndexError(f"hand index {index} out of range")

        card = hand.pop(index)
        self.top_up(hand)
        return card

    def discard(self, player: Turn, index: int) -> Card:
        """Take a card out of the game from a player's hand."""
        card = self.take(player, index)
        self.discarded.append(card)
        if not self._draw_pile:
            self.refill_draw_pile()
        return card

    def index_of(self, player: Turn, card: Card) -> int | None:
        """Position of the first copy of card in a player's hand."""
        try:
            return self._hands[player].index(card)
        except ValueError:
            return None

    def cards_in_play(self) -> int:
        """Pile plus both hands."""
        return len(self._draw_pile) + sum(len(h) for h in self._hands.values())
