"""
Broadcast Loop - Periodic status push to both seats of a room.

While a room is playing, every interval each seated player receives a
snapshot of the board as seen from their seat plus their hand. The
loop is transport-agnostic: it is given an async send callback and a
function building the message for one player.
"""

from __future__ import annotations
import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .manager import Room

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.25

SendFn = Callable[[str, dict[str, Any]], Awaitable[None]]
BuildFn = Callable[["Room", str], dict[str, Any]]


class LoopState(Enum):
    """State of the broadcast loop."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class BroadcastLoop:
    """
    Pushes status messages for one room.

    Usage:
        loop = BroadcastLoop(room, send=send_json, build=status_packet)
        loop.start()
        ...
        loop.stop()
    """

    def __init__(self, room: Room, send: SendFn, build: BuildFn, interval: float = DEFAULT_INTERVAL):
        self.room = room
        self.send = send
        self.build = build
        self.interval = interval
        self.state = LoopState.IDLE
        self.ticks = 0
        self._task: asyncio.Task | None = None

    async def tick(self):
        """Send one status message to every seated player."""
        for player_id in self.room.players:
            await self.send(player_id, self.build(self.room, player_id))
        self.ticks += 1

    async def run(self):
        """Broadcast until stopped or the room stops playing."""
        from .manager import RoomState

        self.state = LoopState.RUNNING
        try:
            while self.state is LoopState.RUNNING and self.room.state is RoomState.PLAYING:
                await self.tick()
                await asyncio.sleep(self.interval)
        finally:
            self.state = LoopState.STOPPED
            logger.debug("broadcast for room %s stopped after %d ticks", self.room.code, self.ticks)

    def start(self) -> asyncio.Task:
        """Schedule run() on the current event loop."""
        self._task = asyncio.ensure_future(self.run())
        return self._task

    def stop(self):
        self.state = LoopState.STOPPED
        if self._task and not self._task.done():
            self._task.cancel()
