"""
Pydantic Schemas for API - Wire models for the WebSocket protocol and HTTP.

Every WebSocket message is an envelope {"t": <type>, "d": <payload>}.
Payload field names follow the browser client (camelCase aliases).

Error Codes:
- ROOM_NOT_FOUND: Room code does not exist
- ROOM_FULL: Room already has two players (or you created it)
- NOT_YOUR_TURN: The other player is to move
- MALFORMED_REQUEST: Message could not be parsed or validated
- NOT_IN_ROOM: Action needs a room and the player has none
- ALREADY_IN_ROOM: Player must leave the current room first
- ROOM_NOT_STARTED: Room is still waiting for its second player
- ILLEGAL_MOVE: The engine rejected the placement or discard
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.cards import Card


# =============================================================================
# Enums
# =============================================================================

class InboundType(str, Enum):
    """Messages a client may send."""
    CREATE_ROOM = "create-room"
    JOIN_ROOM = "join-room"
    LEAVE_ROOM = "leave-room"
    PLACE_CARD = "place-card"
    DISCARD_CARD = "discard-card"
    GET_ROOMS = "get-rooms"


class OutboundType(str, Enum):
    """Messages the server sends."""
    CONNECTION_SUCCESSFUL = "connection-successful"
    CREATE_ROOM_SUCCESS = "create-room-success"
    CREATE_ROOM_FAIL = "create-room-fail"
    JOIN_ROOM_SUCCESS = "join-room-success"
    JOIN_ROOM_FAIL = "join-room-fail"
    ROOM_BEGIN = "room-begin"
    ROOM_CLOSE = "room-close"
    LEAVE_ROOM_FAIL = "leave-room-fail"
    PLACE_CARD_FAIL = "place-card-fail"
    DISCARD_CARD_FAIL = "discard-card-fail"
    GET_ROOMS_SUCCESS = "get-rooms-success"
    STATUS = "status"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    NOT_IN_ROOM = "NOT_IN_ROOM"
    ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
    ROOM_NOT_STARTED = "ROOM_NOT_STARTED"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"


# =============================================================================
# Envelope and inbound payloads
# =============================================================================

class Packet(BaseModel):
    """WebSocket message envelope."""
    t: str = Field(..., min_length=1, description="Message type")
    d: Optional[Any] = Field(None, description="Message payload")


class Position(BaseModel):
    """Slot coordinates, relative to the sending player's view."""
    x: int
    y: int


class JoinRoomPayload(BaseModel):
    code: str = Field(..., min_length=1)


class PlaceCardPayload(BaseModel):
    """Place the card at deckIdx of your hand at pos."""
    deck_idx: int = Field(..., alias="deckIdx")
    pos: Position

    model_config = {"populate_by_name": True}


class DiscardCardPayload(BaseModel):
    """Discard the card at deckIdx of your hand."""
    deck_idx: int = Field(..., alias="deckIdx")

    model_config = {"populate_by_name": True}


# =============================================================================
# Outbound payloads
# =============================================================================

class ConnectionPayload(BaseModel):
    id: str


class RoomCodePayload(BaseModel):
    code: str


class FailurePayload(BaseModel):
    """Why a request was refused."""
    reason: str
    code: Optional[ErrorCode] = None


class ColumnInfo(BaseModel):
    """One base column with its chains, nearest the base row first."""
    val: Card
    top: list[Card] = Field(default_factory=list)
    bottom: list[Card] = Field(default_factory=list)


class StatusPayload(BaseModel):
    """Periodic view of the game for one player."""
    placed_cards: list[ColumnInfo] = Field(..., alias="placedCards")
    can_place: bool = Field(..., alias="canPlace")
    player_deck: list[Card] = Field(..., alias="playerDeck")

    model_config = {"populate_by_name": True}


# =============================================================================
# HTTP responses
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class RoomListResponse(BaseModel):
    """Open room codes."""
    rooms: list[str] = Field(default_factory=list)
    count: int = 0


class LegalGatesResponse(BaseModel):
    """Move hint for one slot, in canonical coordinates."""
    code: str
    x: int
    y: int
    can_accept: bool
    gates: list[Card] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "circuitcards"
    version: str = "0.1.0"
    rooms: int = 0
