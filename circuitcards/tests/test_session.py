"""
Tests for rooms and the broadcast loop.

Tests:
- Room creation, joining and closing
- Error codes for invalid room operations
- Coordinate mapping for player two
- Periodic status broadcast
"""

import asyncio

import pytest

from ..engine_core.turn import Turn
from ..session import BroadcastLoop, LoopState, RoomError, RoomErrorCode, RoomState
from ..session.manager import ROOM_CODE_LENGTH

from .conftest import COVERING_HAND, give


@pytest.fixture
def playing_room(room_manager):
    alice = room_manager.connect()
    bob = room_manager.connect()
    room = room_manager.create_room(alice)
    room_manager.join_room(bob, room.code)
    return room, alice, bob


class TestRoomLifecycle:
    """Tests for create/join/leave/disconnect."""

    def test_connect_issues_unique_ids(self, room_manager):
        a = room_manager.connect()
        b = room_manager.connect()
        assert a != b
        assert room_manager.is_connected(a)
        assert room_manager.room_of(a) is None

    def test_create_room(self, room_manager):
        alice = room_manager.connect()

        room = room_manager.create_room(alice)

        assert len(room.code) == ROOM_CODE_LENGTH
        assert room.code.isalnum()
        assert room.state is RoomState.WAITING
        assert room.players == [alice]
        assert room_manager.room_of(alice) is room
        assert room_manager.list_rooms() == [room.code]

    def test_room_games_use_side_restriction(self, room_manager):
        room = room_manager.create_room(room_manager.connect())
        assert room.game.config.restrict_sides

    def test_cannot_create_twice(self, room_manager):
        alice = room_manager.connect()
        room_manager.create_room(alice)

        with pytest.raises(RoomError) as exc:
            room_manager.create_room(alice)
        assert exc.value.code is RoomErrorCode.ALREADY_IN_ROOM

    def test_join_starts_game(self, playing_room):
        room, alice, bob = playing_room
        assert room.state is RoomState.PLAYING
        assert room.seat_of(alice) is Turn.PLAYER_ONE
        assert room.seat_of(bob) is Turn.PLAYER_TWO
        assert room.player_at(Turn.PLAYER_TWO) == bob

    @pytest.mark.parametrize("code", [None, "", "nope1234"])
    def test_join_unknown_code(self, room_manager, code):
        bob = room_manager.connect()
        with pytest.raises(RoomError) as exc:
            room_manager.join_room(bob, code)
        assert exc.value.code is RoomErrorCode.ROOM_NOT_FOUND
        assert exc.value.reason == "Room code is invalid"

    def test_join_full_room(self, room_manager, playing_room):
        room, _, _ = playing_room
        carol = room_manager.connect()
        with pytest.raises(RoomError) as exc:
            room_manager.join_room(carol, room.code)
        assert exc.value.code is RoomErrorCode.ROOM_FULL

    def test_join_own_room(self, room_manager):
        alice = room_manager.connect()
        room = room_manager.create_room(alice)
        with pytest.raises(RoomError) as exc:
            room_manager.join_room(alice, room.code)
        assert exc.value.code is RoomErrorCode.ROOM_FULL

    def test_join_while_in_another_room(self, room_manager):
        alice = room_manager.connect()
        bob = room_manager.connect()
        room = room_manager.create_room(alice)
        room_manager.create_room(bob)
        with pytest.raises(RoomError) as exc:
            room_manager.join_room(bob, room.code)
        assert exc.value.code is RoomErrorCode.ALREADY_IN_ROOM

    def test_leave_closes_for_both(self, room_manager, playing_room):
        room, alice, bob = playing_room

        room_manager.leave_room(bob)

        assert room.state is RoomState.CLOSED
        assert room_manager.room_of(alice) is None
        assert room_manager.room_of(bob) is None
        assert room_manager.get_room(room.code) is None
        # Both may start over
        assert room_manager.create_room(alice)

    def test_leave_without_room(self, room_manager):
        alice = room_manager.connect()
        with pytest.raises(RoomError) as exc:
            room_manager.leave_room(alice)
        assert exc.value.code is RoomErrorCode.NOT_IN_ROOM

    def test_disconnect_closes_room(self, room_manager, playing_room):
        room, alice, bob = playing_room

        closed = room_manager.disconnect(alice)

        assert closed is room
        assert room.state is RoomState.CLOSED
        assert not room_manager.is_connected(alice)
        assert room_manager.is_connected(bob)
        assert room_manager.room_of(bob) is None

    def test_disconnect_without_room(self, room_manager):
        alice = room_manager.connect()
        assert room_manager.disconnect(alice) is None


class TestRoomViews:
    """Tests for seat-relative coordinates and status."""

    def test_player_two_axis_is_flipped(self, playing_room):
        room, alice, bob = playing_room
        assert room.to_canonical(alice, 2, -1) == (2, -1)
        assert room.to_canonical(bob, 2, -1) == (2, 1)

    def test_status_for_each_seat(self, playing_room):
        room, alice, bob = playing_room
        game = room.game

        mine = room.status_for(alice)
        theirs = room.status_for(bob)

        assert mine.hand == game.hand(Turn.PLAYER_ONE)
        assert theirs.hand == game.hand(Turn.PLAYER_TWO)
        assert mine.can_place != theirs.can_place
        assert theirs.columns[0].base is game.get(0, 0).flipped()

    def test_player_two_builds_on_own_bottom(self, playing_room):
        room, alice, bob = playing_room
        game = room.game
        if game.active_player is Turn.PLAYER_ONE:
            game.discard(0, Turn.PLAYER_ONE)
        give(game, Turn.PLAYER_TWO, list(COVERING_HAND))

        # Player two aims at their own bottom half, which is the canonical top
        x, y = room.to_canonical(bob, 0, -1)
        gate = sorted(game.legal_gates(x, y) & set(COVERING_HAND), key=lambda c: c.value)[0]
        assert game.place(x, y, gate, Turn.PLAYER_TWO)
        assert room.status_for(bob).columns[1].bottom == (gate,)

    def test_status_for_stranger(self, playing_room, room_manager):
        room, _, _ = playing_room
        with pytest.raises(RoomError):
            room.status_for(room_manager.connect())


class TestBroadcastLoop:
    """Tests for the periodic status push."""

    def test_sends_to_both_until_room_closes(self, playing_room):
        room, alice, bob = playing_room
        sent = []

        async def send(player_id, message):
            sent.append((player_id, message))
            if len(sent) == 4:
                room.state = RoomState.CLOSED

        loop = BroadcastLoop(room, send, build=lambda r, p: {"t": "status", "d": p}, interval=0)
        asyncio.run(loop.run())

        assert loop.ticks == 2
        assert loop.state is LoopState.STOPPED
        assert [p for p, _ in sent] == [alice, bob, alice, bob]
        assert sent[1][1] == {"t": "status", "d": bob}

    def test_does_not_run_for_waiting_room(self, room_manager):
        room = room_manager.create_room(room_manager.connect())
        sent = []

        async def send(player_id, message):
            sent.append(message)

        loop = BroadcastLoop(room, send, build=lambda r, p: {}, interval=0)
        asyncio.run(loop.run())

        assert sent == []
        assert loop.ticks == 0

    def test_stop_cancels_task(self, playing_room):
        room, _, _ = playing_room

        async def send(player_id, message):
            pass

        async def scenario():
            loop = BroadcastLoop(room, send, build=lambda r, p: {}, interval=0.01)
            task = loop.start()
            await asyncio.sleep(0.05)
            loop.stop()
            await asyncio.gather(task, return_exceptions=True)
            return loop

        loop = asyncio.run(scenario())

        assert loop.state is LoopState.STOPPED
        assert loop.ticks >= 1
