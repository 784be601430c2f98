"""
API Module - Network interface for game clients.

Exposes the engine over a WebSocket protocol. A client:
1. Connects and receives its player id
2. Creates a room or joins one by code
3. Receives periodic status packets (its own view of the board)
4. Places and discards cards on its turn

All state is room-scoped. No accounts, no persistence.
"""

from .schemas import (
    # Envelope / inbound
    Packet,
    Position,
    InboundType,
    JoinRoomPayload,
    PlaceCardPayload,
    DiscardCardPayload,
    # Outbound
    OutboundType,
    FailurePayload,
    ColumnInfo,
    StatusPayload,
    # HTTP
    ErrorCode,
    ErrorResponse,
    RoomListResponse,
    LegalGatesResponse,
    HealthResponse,
)
from .service import APIService, HandleResult, Outbound, MalformedPacketError, parse_packet

__all__ = [
    # Envelope / inbound
    "Packet",
    "Position",
    "InboundType",
    "JoinRoomPayload",
    "PlaceCardPayload",
    "DiscardCardPayload",
    # Outbound
    "OutboundType",
    "FailurePayload",
    "ColumnInfo",
    "StatusPayload",
    # HTTP
    "ErrorCode",
    "ErrorResponse",
    "RoomListResponse",
    "LegalGatesResponse",
    "HealthResponse",
    # Service
    "APIService",
    "HandleResult",
    "Outbound",
    "MalformedPacketError",
    "parse_packet",
]
