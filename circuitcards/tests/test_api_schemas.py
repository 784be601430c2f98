"""
Tests for API Pydantic schemas.

Validates that:
- Inbound payloads accept the client's camelCase field names
- Outbound payloads serialize cards as their wire values
- Error codes are properly structured
"""

import pytest
from pydantic import ValidationError


class TestInboundSchemas:
    """Tests for packets sent by clients."""

    def test_packet_requires_type(self):
        from circuitcards.api.schemas import Packet

        with pytest.raises(ValidationError):
            Packet.model_validate({"d": {}})
        with pytest.raises(ValidationError):
            Packet(t="")

    def test_place_card_alias(self):
        from circuitcards.api.schemas import PlaceCardPayload

        payload = PlaceCardPayload.model_validate({"deckIdx": 3, "pos": {"x": 1, "y": -2}})

        assert payload.deck_idx == 3
        assert payload.pos.x == 1
        assert payload.pos.y == -2

    def test_place_card_by_field_name(self):
        from circuitcards.api.schemas import PlaceCardPayload, Position

        payload = PlaceCardPayload(deck_idx=0, pos=Position(x=0, y=1))
        assert payload.deck_idx == 0

    def test_place_card_needs_position(self):
        from circuitcards.api.schemas import PlaceCardPayload

        with pytest.raises(ValidationError):
            PlaceCardPayload.model_validate({"deckIdx": 1})

    def test_join_room_needs_code(self):
        from circuitcards.api.schemas import JoinRoomPayload

        with pytest.raises(ValidationError):
            JoinRoomPayload.model_validate({"code": ""})


class TestOutboundSchemas:
    """Tests for packets sent by the server."""

    def test_status_payload_aliases(self):
        from circuitcards.api.schemas import ColumnInfo, StatusPayload
        from circuitcards.engine_core.cards import Card

        status = StatusPayload(
            placed_cards=[ColumnInfo(val=Card.STATE_LOW, top=[Card.OR_TRUE])],
            can_place=True,
            player_deck=[Card.AND_FALSE, Card.XOR_TRUE],
        )

        data = status.model_dump(mode="json", by_alias=True)
        assert data == {
            "placedCards": [{"val": "state_low", "top": ["or_1"], "bottom": []}],
            "canPlace": True,
            "playerDeck": ["and_0", "xor_1"],
        }

    def test_failure_payload(self):
        from circuitcards.api.schemas import ErrorCode, FailurePayload

        data = FailurePayload(reason="Room code is invalid", code=ErrorCode.ROOM_NOT_FOUND).model_dump(mode="json")
        assert data == {"reason": "Room code is invalid", "code": "ROOM_NOT_FOUND"}

    def test_message_types_match_client(self):
        from circuitcards.api.schemas import InboundType, OutboundType

        assert InboundType.PLACE_CARD.value == "place-card"
        assert OutboundType.CONNECTION_SUCCESSFUL.value == "connection-successful"
        assert OutboundType.ROOM_BEGIN.value == "room-begin"


class TestHttpSchemas:
    """Tests for HTTP response models."""

    def test_error_response(self):
        from circuitcards.api.schemas import ErrorCode, ErrorResponse

        response = ErrorResponse(error="Room abc not found", error_code=ErrorCode.ROOM_NOT_FOUND)

        data = response.model_dump(mode="json")
        assert data["error_code"] == "ROOM_NOT_FOUND"
        assert data["api_version"] == "v1"
        assert data["details"] is None

    def test_error_codes_complete(self):
        from circuitcards.api.schemas import ErrorCode

        expected = {
            "ROOM_NOT_FOUND", "ROOM_FULL", "NOT_YOUR_TURN", "MALFORMED_REQUEST",
            "NOT_IN_ROOM", "ALREADY_IN_ROOM", "ROOM_NOT_STARTED", "ILLEGAL_MOVE",
        }
        assert {code.value for code in ErrorCode} == expected

    def test_legal_gates_response(self):
        from circuitcards.api.schemas import LegalGatesResponse
        from circuitcards.engine_core.cards import Card

        response = LegalGatesResponse(code="abcd1234", x=0, y=1, can_accept=True, gates=[Card.OR_TRUE])

        assert response.model_dump(mode="json")["gates"] == ["or_1"]

    def test_health_defaults(self):
        from circuitcards.api.schemas import HealthResponse

        data = HealthResponse().model_dump()
        assert data["status"] == "healthy"
        assert data["service"] == "circuitcards"
