"""
Action Generator - Generates all legal actions from a game.

The action generator is used by:
1. Bots to enumerate possible moves
2. Clients to highlight playable slots
3. Tests (every generated action must be accepted)

Design: Generates Action objects, not just coordinates.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action
from .cards import Card, Side
from .turn import Turn

if TYPE_CHECKING:
    from .game import Game


@dataclass
class ActionGenerator:
    """Generates legal actions for one player of a game."""
    game: Game

    def generate(self, player: Turn) -> list[Action]:
        """
        Generate every move the player could make right now.

        Placements come first (one per distinct card per slot), then one
        discard per hand position. Empty when it is not the player's turn.
        """
        if not self.game.turn.is_active(player):
            return []

        actions = self.generate_placements(player)
        actions.extend(self.generate_discards(player))
        return actions

    def playable_slots(self, player: Turn | None = None) -> dict[tuple[int, int], frozenset[Card]]:
        """Map of slot -> legal gates for every slot with a legal gate."""
        sides = list(Side)
        if player is not None and self.game.config.restrict_sides:
            sides = [Side.BOTTOM if player is Turn.PLAYER_ONE else Side.TOP]

        slots = {}
        for side in sides:
            for x, y in self.game.board.slots(side):
                gates = self.game.legal_gates(x, y)
                if gates:
                    slots[(x, y)] = gates
        return slots

    def generate_placements(self, player: Turn) -> list[Action]:
        hand = self.game.hand(player)
        actions = []
        for (x, y), gates in self.playable_slots(player).items():
            seen: set[Card] = set()
            for index, card in enumerate(hand):
                if card in gates and card not in seen:
                    seen.add(card)
                    actions.append(Action.place_from_hand(player, index, x, y))
        return actions

    def generate_discards(self, player: Turn) -> list[Action]:
        return [
            Action.discard(player, index)
            for index in range(len(self.game.hand(player)))
        ]


def legal_actions(game: Game, player: Turn) -> list[Action]:
    """Convenience function to get legal actions."""
    return ActionGenerator(game).generate(player)
