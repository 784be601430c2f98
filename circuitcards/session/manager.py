"""
Room Manager - Pairs connected players into two-seat rooms.

LIFECYCLE:
1. A connection gets a player id
2. A player creates a room and receives an 8-character code
3. A second player joins with the code; the game begins
4. Either player leaving or disconnecting closes the room for both

PERSISTENCE RULES:
- Rooms live in memory only
- A closed room and its game are discarded
- No reconnection: a disconnected player's room is gone
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import random
import string
import uuid

from ..engine_core.config import GameConfig
from ..engine_core.game import Game
from ..engine_core.state import PlayerView
from ..engine_core.turn import Turn

logger = logging.getLogger(__name__)

ROOM_CODE_LENGTH = 8
ROOM_CODE_ALPHABET = string.ascii_letters + string.digits

# Rooms pit players against each other on opposite halves of the board
SESSION_GAME_CONFIG = GameConfig(restrict_sides=True)


class RoomErrorCode(Enum):
    ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    NOT_IN_ROOM = "NOT_IN_ROOM"


class RoomError(Exception):
    """Raised when a room operation cannot be carried out."""

    def __init__(self, code: RoomErrorCode, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(reason)


class RoomState(Enum):
    """State of a room."""
    WAITING = "waiting"  # Only the creator is seated
    PLAYING = "playing"  # Both seats taken
    CLOSED = "closed"


@dataclass
class Room:
    """
    A two-seat room and the game played in it.

    The creator sits as player one, the joiner as player two. Player two
    views the board from the opposite side, so their vertical axis is
    flipped on the way in and their snapshot is mirrored on the way out.
    """
    code: str
    game: Game
    first: str
    second: str | None = None
    state: RoomState = RoomState.WAITING

    @property
    def players(self) -> list[str]:
        return [p for p in (self.first, self.second) if p is not None]

    @property
    def is_full(self) -> bool:
        return self.second is not None

    def seat_of(self, player_id: str) -> Turn | None:
        if player_id == self.first:
            return Turn.PLAYER_ONE
        if player_id is not None and player_id == self.second:
            return Turn.PLAYER_TWO
        return None

    def player_at(self, seat: Turn) -> str | None:
        return self.first if seat is Turn.PLAYER_ONE else self.second

    def to_canonical(self, player_id: str, x: int, y: int) -> tuple[int, int]:
        """Map a player-relative slot to engine coordinates."""
        if self.seat_of(player_id) is Turn.PLAYER_TWO:
            return x, -y
        return x, y

    def status_for(self, player_id: str) -> PlayerView:
        """Board and hand as this player sees them."""
        seat = self.seat_of(player_id)
        if seat is None:
            raise RoomError(RoomErrorCode.NOT_IN_ROOM, "Player isn't in this room")
        return self.game.view_for(seat)


class RoomManager:
    """
    Manages connections and rooms.

    Responsibilities:
    - Issue player ids
    - Create, join and close rooms
    - Track which room each player is in

    No persistence - rooms are in-memory only.
    """

    def __init__(
        self,
        game_config: GameConfig = SESSION_GAME_CONFIG,
        rng: random.Random | None = None,
    ):
        self.game_config = game_config
        self._rng = rng or random.Random()
        self._rooms: dict[str, Room] = {}
        self._players: dict[str, str | None] = {}

    def connect(self) -> str:
        """Register a new connection and return its player id."""
        player_id = str(uuid.uuid4())
        self._players[player_id] = None
        logger.info("new connection; id: %s", player_id)
        return player_id

    def is_connected(self, player_id: str) -> bool:
        return player_id in self._players

    def room_of(self, player_id: str) -> Room | None:
        code = self._players.get(player_id)
        return self._rooms.get(code) if code else None

    def get_room(self, code: str) -> Room | None:
        return self._rooms.get(code)

    def list_rooms(self) -> list[str]:
        return list(self._rooms)

    def create_room(self, player_id: str) -> Room:
        """Open a room with player_id in the first seat."""
        if self.room_of(player_id):
            raise RoomError(RoomErrorCode.ALREADY_IN_ROOM, "Player already in room")

        code = self._new_code()
        game = Game(self.game_config, rng=random.Random(self._rng.getrandbits(64)))
        room = Room(code=code, game=game, first=player_id)
        self._rooms[code] = room
        self._players[player_id] = code
        logger.info("room %s created by %s", code, player_id)
        return room

    def join_room(self, player_id: str, code: str | None) -> Room:
        """Take the second seat of an existing room."""
        room = self._rooms.get(code) if code else None
        if room is None:
            raise RoomError(RoomErrorCode.ROOM_NOT_FOUND, "Room code is invalid")
        if room.is_full or room.first == player_id:
            raise RoomError(RoomErrorCode.ROOM_FULL, "Room full or user already joined")
        if self.room_of(player_id):
            raise RoomError(RoomErrorCode.ALREADY_IN_ROOM, "Player already in room")

        room.second = player_id
        room.state = RoomState.PLAYING
        self._players[player_id] = code
        logger.info("room %s begins: %s vs %s", code, room.first, player_id)
        return room

    def leave_room(self, player_id: str) -> Room:
        """Close the player's room for everyone in it."""
        room = self.room_of(player_id)
        if room is None:
            raise RoomError(
                RoomErrorCode.NOT_IN_ROOM,
                "Player already left room or wasn't in room at all",
            )
        self._close(room)
        return room

    def disconnect(self, player_id: str) -> Room | None:
        """Forget a connection; closes its room if it had one."""
        room = self.room_of(player_id)
        if room:
            self._close(room)
        self._players.pop(player_id, None)
        logger.info("closed connection; id: %s", player_id)
        return room

    def _close(self, room: Room):
        room.state = RoomState.CLOSED
        for player_id in room.players:
            if player_id in self._players:
                self._players[player_id] = None
        self._rooms.pop(room.code, None)
        logger.info("room %s closed", room.code)

    def _new_code(self) -> str:
        while True:
            code = "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code
