"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game and the legal actions of one player and
returns a decision. Bots drive the CLI simulation and the long-running
property tests; they never see the opponent's hand.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.game import Game
    from ..engine_core.turn import Turn


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains the action to take, an explanation (for logs)
    and how many actions were considered.
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """Abstract base class for bot policies."""

    @abstractmethod
    def select_action(
        self,
        game: Game,
        player: Turn,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action to take.

        Args:
            game: Current game
            player: Seat the bot plays
            legal_actions: Actions the bot may choose from

        Returns:
            BotDecision with the chosen action
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    placement_bias is the probability of preferring a placement over a
    discard whenever at least one placement exists.
    """

    def __init__(self, seed: int | None = None, placement_bias: float = 0.9):
        self.rng = random.Random(seed)
        self.placement_bias = placement_bias

    def select_action(
        self,
        game: Game,
        player: Turn,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        placements = [a for a in legal_actions if a.action_type is not ActionType.DISCARD]
        pool = legal_actions
        if placements and self.rng.random() < self.placement_bias:
            pool = placements

        return BotDecision(
            action=self.rng.choice(pool),
            explanation="Selected randomly",
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Placements are generated before discards, so this bot places
    whenever it can.
    """

    def select_action(
        self,
        game: Game,
        player: Turn,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )
