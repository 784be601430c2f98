"""
Bots - Automated players.

Bots choose among the actions produced by the action generator.
They are used for simulations and for exercising the engine in tests.
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .runner import play_turns

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "play_turns",
]
