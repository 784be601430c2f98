"""
Engine Core - Authoritative game state and rules.

The engine is the runtime that:
1. Builds the base row, draw pile and hands
2. Answers slot and legality queries
3. Applies placements and discards
4. Alternates turns
5. Produces snapshots for each player's view
"""

from .cards import Card, GateFamily, Side, GATE_CARDS, STATE_CARDS
from .config import GameConfig, DEFAULT_CONFIG
from .turn import Turn, TurnController
from .deck import DeckManager
from .board import BoardLattice, BaseColumn
from .legality import LegalityEngine, propagate
from .action import Action, ActionType, ActionPayload, ActionResult, RejectReason
from .state import ColumnSnapshot, GameSnapshot, PlayerView
from .game import Game
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "Card",
    "GateFamily",
    "Side",
    "GATE_CARDS",
    "STATE_CARDS",
    "GameConfig",
    "DEFAULT_CONFIG",
    "Turn",
    "TurnController",
    "DeckManager",
    "BoardLattice",
    "BaseColumn",
    "LegalityEngine",
    "propagate",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "RejectReason",
    "ColumnSnapshot",
    "GameSnapshot",
    "PlayerView",
    "Game",
    "ActionGenerator",
    "legal_actions",
]
