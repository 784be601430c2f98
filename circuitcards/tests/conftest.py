"""
Pytest fixtures for Circuit Cards tests.
"""

import random

import pytest

from ..engine_core.cards import Card
from ..engine_core.config import GameConfig
from ..engine_core.game import Game
from ..engine_core.turn import Turn
from ..session import RoomManager
from ..api.service import APIService

L = Card.STATE_LOW
H = Card.STATE_HIGH

# One of each family/polarity mix: intersects every non-apex legal set
COVERING_HAND = [Card.AND_FALSE, Card.OR_TRUE, Card.XOR_TRUE, Card.AND_TRUE, Card.OR_FALSE]


def give(game: Game, player: Turn, cards: list[Card]):
    """Replace a player's hand with the given cards."""
    hand = game.deck.hand(player)
    hand[:] = cards


@pytest.fixture
def alternating_bases() -> list[Card]:
    """Base row L H L H L H."""
    return [L, H, L, H, L, H]


@pytest.fixture
def fixed_game(alternating_bases) -> Game:
    """Six-column game, player one to move, deterministic deck."""
    return Game(seed=1234, bases=alternating_bases, first_player=Turn.PLAYER_ONE)


@pytest.fixture
def seeded_game() -> Game:
    """Fully random setup from a fixed seed."""
    return Game(seed=99)


@pytest.fixture
def sided_game(alternating_bases) -> Game:
    """Game where each player may only build on their own half."""
    return Game(
        GameConfig(restrict_sides=True),
        seed=7,
        bases=alternating_bases,
        first_player=Turn.PLAYER_ONE,
    )


@pytest.fixture
def room_manager() -> RoomManager:
    return RoomManager(rng=random.Random(42))


@pytest.fixture
def service(room_manager) -> APIService:
    """Create a fresh API service."""
    return APIService(room_manager=room_manager)
