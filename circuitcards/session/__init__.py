"""
Session Module - Pairs remote players and keeps their views in sync.

A room represents one game between two connections:
- Created by the first player, joined with its code by the second
- Holds the authoritative Game
- Maps player two's coordinates into the engine's space
- Broadcasts each player's view periodically
- Destroyed when either player leaves or disconnects

Rooms are EPHEMERAL: nothing is persisted.
"""

from .manager import RoomManager, Room, RoomState, RoomError, RoomErrorCode
from .game_loop import BroadcastLoop, LoopState

__all__ = [
    "RoomManager",
    "Room",
    "RoomState",
    "RoomError",
    "RoomErrorCode",
    "BroadcastLoop",
    "LoopState",
]
