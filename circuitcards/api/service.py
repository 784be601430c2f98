"""
API Service - Protocol layer between the WebSocket and the engine.

The service:
1. Decodes and validates inbound packets
2. Drives the room manager and the games
3. Builds outbound packets (including mirrored status views)

This layer is framework-agnostic: it returns the packets to send and
to whom, and leaves the actual sending to the transport.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import json
import logging

from pydantic import BaseModel, ValidationError

from ..engine_core.action import RejectReason
from ..engine_core.state import PlayerView
from ..session import Room, RoomError, RoomErrorCode, RoomManager
from .schemas import (
    # Envelope / inbound
    Packet,
    InboundType,
    JoinRoomPayload,
    PlaceCardPayload,
    DiscardCardPayload,
    # Outbound
    OutboundType,
    ConnectionPayload,
    RoomCodePayload,
    FailurePayload,
    ColumnInfo,
    StatusPayload,
    ErrorCode,
)

logger = logging.getLogger(__name__)

_ROOM_ERROR_CODES = {
    RoomErrorCode.ALREADY_IN_ROOM: ErrorCode.ALREADY_IN_ROOM,
    RoomErrorCode.ROOM_NOT_FOUND: ErrorCode.ROOM_NOT_FOUND,
    RoomErrorCode.ROOM_FULL: ErrorCode.ROOM_FULL,
    RoomErrorCode.NOT_IN_ROOM: ErrorCode.NOT_IN_ROOM,
}


class MalformedPacketError(Exception):
    """Raised when an inbound frame is not valid JSON."""


@dataclass
class Outbound:
    """A packet addressed to one player."""
    player_id: str
    packet: dict[str, Any]


@dataclass
class HandleResult:
    """
    Outcome of handling one inbound packet.

    started/closed tell the transport to begin or end the status
    broadcast for a room.
    """
    messages: list[Outbound] = field(default_factory=list)
    started: Room | None = None
    closed: Room | None = None

    def send(self, player_id: str, packet: dict[str, Any]):
        self.messages.append(Outbound(player_id=player_id, packet=packet))


def make_packet(t: OutboundType, d: BaseModel | list | None = None) -> dict[str, Any]:
    """Build a wire envelope."""
    if isinstance(d, BaseModel):
        d = d.model_dump(mode="json", by_alias=True)
    return {"t": t.value, "d": d}


def failure_packet(t: OutboundType, reason: str, code: ErrorCode | None = None) -> dict[str, Any]:
    return make_packet(t, FailurePayload(reason=reason, code=code))


def status_payload(view: PlayerView) -> StatusPayload:
    return StatusPayload(
        placed_cards=[
            ColumnInfo(val=col.base, top=list(col.top), bottom=list(col.bottom))
            for col in view.columns
        ],
        can_place=view.can_place,
        player_deck=list(view.hand),
    )


def parse_packet(raw: str | bytes | dict[str, Any]) -> Packet | None:
    """
    Decode an inbound frame.

    Raises MalformedPacketError when the frame is not JSON. Returns None
    for decodable frames that are not a packet with a non-empty type.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPacketError(f"Invalid JSON: {e}") from e
    try:
        return Packet.model_validate(raw)
    except ValidationError:
        return None


@dataclass
class APIService:
    """
    Main service behind the WebSocket endpoint.

    Usage:
        service = APIService()
        player_id, hello = service.connect()
        result = service.handle(player_id, '{"t": "create-room"}')
        for out in result.messages:
            send(out.player_id, out.packet)
    """
    room_manager: RoomManager = field(default_factory=RoomManager)

    def connect(self) -> tuple[str, dict[str, Any]]:
        """Register a connection and build its greeting."""
        player_id = self.room_manager.connect()
        return player_id, make_packet(
            OutboundType.CONNECTION_SUCCESSFUL, ConnectionPayload(id=player_id)
        )

    def disconnect(self, player_id: str) -> HandleResult:
        """Forget a connection and close its room for the other player."""
        result = HandleResult()
        room = self.room_manager.disconnect(player_id)
        if room:
            result.closed = room
            for other in room.players:
                if other != player_id:
                    result.send(other, failure_packet(
                        OutboundType.ROOM_CLOSE,
                        "One of the players disconnected from the server",
                    ))
        return result

    def handle(self, player_id: str, raw: str | bytes | dict[str, Any]) -> HandleResult:
        """
        Handle one inbound frame from player_id.

        Raises MalformedPacketError for frames that are not JSON; a
        missing type or a bad payload is answered with a packet instead.
        """
        packet = parse_packet(raw)
        result = HandleResult()
        if packet is None:
            result.send(player_id, failure_packet(
                OutboundType.ERROR, "Packet needs a non-empty 't' field", ErrorCode.MALFORMED_REQUEST,
            ))
            return result
        logger.debug("packet from %s: %s", player_id, packet.t)

        handlers = {
            InboundType.CREATE_ROOM.value: self._handle_create_room,
            InboundType.JOIN_ROOM.value: self._handle_join_room,
            InboundType.LEAVE_ROOM.value: self._handle_leave_room,
            InboundType.PLACE_CARD.value: self._handle_place_card,
            InboundType.DISCARD_CARD.value: self._handle_discard_card,
            InboundType.GET_ROOMS.value: self._handle_get_rooms,
        }
        handler = handlers.get(packet.t)
        if not handler:
            result.send(player_id, failure_packet(
                OutboundType.ERROR, f"Unknown message type: {packet.t}", ErrorCode.MALFORMED_REQUEST,
            ))
            return result

        handler(player_id, packet, result)
        return result

    def status_packet(self, room: Room, player_id: str) -> dict[str, Any]:
        """Status message for one seat of a room (mirrored for player two)."""
        return make_packet(OutboundType.STATUS, status_payload(room.status_for(player_id)))

    # =========================================================================
    # Room handlers
    # =========================================================================

    def _handle_create_room(self, player_id: str, packet: Packet, result: HandleResult):
        try:
            room = self.room_manager.create_room(player_id)
        except RoomError as e:
            result.send(player_id, self._room_failure(OutboundType.CREATE_ROOM_FAIL, e))
            return
        result.send(player_id, make_packet(
            OutboundType.CREATE_ROOM_SUCCESS, RoomCodePayload(code=room.code)
        ))

    def _handle_join_room(self, player_id: str, packet: Packet, result: HandleResult):
        payload = self._parse(JoinRoomPayload, packet)
        if payload is None:
            result.send(player_id, failure_packet(
                OutboundType.JOIN_ROOM_FAIL, "No code supplied", ErrorCode.MALFORMED_REQUEST,
            ))
            return

        try:
            room = self.room_manager.join_room(player_id, payload.code)
        except RoomError as e:
            result.send(player_id, self._room_failure(OutboundType.JOIN_ROOM_FAIL, e))
            return

        result.send(player_id, make_packet(
            OutboundType.JOIN_ROOM_SUCCESS, RoomCodePayload(code=room.code)
        ))
        for seated in room.players:
            result.send(seated, make_packet(OutboundType.ROOM_BEGIN))
        result.started = room

    def _handle_leave_room(self, player_id: str, packet: Packet, result: HandleResult):
        try:
            room = self.room_manager.leave_room(player_id)
        except RoomError as e:
            result.send(player_id, self._room_failure(OutboundType.LEAVE_ROOM_FAIL, e))
            return

        for seated in room.players:
            result.send(seated, failure_packet(
                OutboundType.ROOM_CLOSE, "One of the players left the room",
            ))
        result.closed = room

    def _handle_get_rooms(self, player_id: str, packet: Packet, result: HandleResult):
        result.send(player_id, make_packet(
            OutboundType.GET_ROOMS_SUCCESS, self.room_manager.list_rooms()
        ))

    # =========================================================================
    # Move handlers
    # =========================================================================

    def _handle_place_card(self, player_id: str, packet: Packet, result: HandleResult):
        room = self._playing_room(player_id, OutboundType.PLACE_CARD_FAIL, result)
        if room is None:
            return

        payload = self._parse(PlaceCardPayload, packet)
        if payload is None:
            result.send(player_id, failure_packet(
                OutboundType.PLACE_CARD_FAIL, "No deck idx supplied", ErrorCode.MALFORMED_REQUEST,
            ))
            return

        x, y = room.to_canonical(player_id, payload.pos.x, payload.pos.y)
        outcome = room.game.place_from_hand(payload.deck_idx, x, y, room.seat_of(player_id))
        if not outcome:
            result.send(player_id, self._move_failure(OutboundType.PLACE_CARD_FAIL, outcome.reason))

    def _handle_discard_card(self, player_id: str, packet: Packet, result: HandleResult):
        room = self._playing_room(player_id, OutboundType.DISCARD_CARD_FAIL, result)
        if room is None:
            return

        payload = self._parse(DiscardCardPayload, packet)
        if payload is None:
            result.send(player_id, failure_packet(
                OutboundType.DISCARD_CARD_FAIL, "No deck idx supplied", ErrorCode.MALFORMED_REQUEST,
            ))
            return

        outcome = room.game.discard(payload.deck_idx, room.seat_of(player_id))
        if not outcome:
            result.send(player_id, self._move_failure(OutboundType.DISCARD_CARD_FAIL, outcome.reason))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _playing_room(self, player_id: str, fail_type: OutboundType, result: HandleResult) -> Room | None:
        """The player's room if a move is possible right now, else reply and return None."""
        room = self.room_manager.room_of(player_id)
        if room is None:
            result.send(player_id, failure_packet(
                fail_type, "Player isn't in a room", ErrorCode.NOT_IN_ROOM,
            ))
            return None
        if not room.is_full:
            result.send(player_id, failure_packet(
                fail_type, "Room hasn't begun", ErrorCode.ROOM_NOT_STARTED,
            ))
            return None
        if not room.game.turn.is_active(room.seat_of(player_id)):
            result.send(player_id, failure_packet(
                fail_type, "It isn't Player's turn", ErrorCode.NOT_YOUR_TURN,
            ))
            return None
        return room

    @staticmethod
    def _parse(model: type[BaseModel], packet: Packet):
        if packet.d is None:
            return None
        try:
            return model.model_validate(packet.d)
        except ValidationError:
            return None

    @staticmethod
    def _room_failure(t: OutboundType, error: RoomError) -> dict[str, Any]:
        return failure_packet(t, error.reason, _ROOM_ERROR_CODES[error.code])

    @staticmethod
    def _move_failure(t: OutboundType, reason: RejectReason) -> dict[str, Any]:
        code = ErrorCode.NOT_YOUR_TURN if reason is RejectReason.NOT_YOUR_TURN else ErrorCode.ILLEGAL_MOVE
        return failure_packet(t, reason.value, code)
