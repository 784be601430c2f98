"""
Bot Runner - Lets bots play a game against each other.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_actions

if TYPE_CHECKING:
    from ..engine_core.action import Action, ActionResult
    from ..engine_core.game import Game
    from ..engine_core.turn import Turn
    from .policy import BotPolicy

logger = logging.getLogger(__name__)


@dataclass
class TurnRecord:
    """One bot move and its outcome."""
    player: Turn
    action: Action
    result: ActionResult


def play_turns(game: Game, bots: dict[Turn, BotPolicy], max_turns: int) -> list[TurnRecord]:
    """
    Run up to max_turns bot moves.

    Stops early if the active seat has no bot or no legal action, or if
    a generated action is rejected (which would be an engine bug).
    """
    records: list[TurnRecord] = []

    for _ in range(max_turns):
        player = game.active_player
        bot = bots.get(player)
        if not bot:
            break

        legal = legal_actions(game, player)
        if not legal:
            break

        decision = bot.select_action(game, player, legal)
        result = game.apply(decision.action)
        records.append(TurnRecord(player=player, action=decision.action, result=result))

        if not result:
            logger.warning("Bot %s produced a rejected action %s: %s",
                           bot.get_name(), decision.action.describe(), result.error)
            break

    return records
