"""
FastAPI Application - WebSocket game server.

Endpoints:
    WS     /ws                          Game protocol ({"t": ..., "d": ...} packets)
    GET    /api/v1/rooms                List open room codes
    GET    /api/v1/rooms/{code}/legal   Legal gates for a slot (canonical coordinates)
    GET    /health                      Health check
    GET    /                            API info

WebSocket Flow:
    1. Server greets with connection-successful {id}
    2. Client sends create-room, or join-room {code}
    3. When the second player joins both receive room-begin, then a
       status packet every CIRCUIT_BROADCAST_INTERVAL seconds
    4. Clients send place-card {deckIdx, pos} / discard-card {deckIdx}
    5. leave-room or a disconnect sends room-close to both players

A frame that is not valid JSON closes the connection; a frame without a
type gets an error packet. Text and binary frames are both accepted.
"""

from typing import Annotated, Any, Union
import logging
import os

from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..session import BroadcastLoop
from .schemas import (
    ErrorCode,
    ErrorResponse,
    HealthResponse,
    LegalGatesResponse,
    OutboundType,
    RoomListResponse,
)
from .service import APIService, HandleResult, MalformedPacketError, failure_packet

# Environment configuration
CIRCUIT_ENV = os.getenv("CIRCUIT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
BROADCAST_INTERVAL = float(os.getenv("CIRCUIT_BROADCAST_INTERVAL", "0.25"))

logger = logging.getLogger(__name__)


def create_app(service: APIService | None = None, broadcast_interval: float | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        broadcast_interval: Seconds between status packets (env default if omitted)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Circuit Cards API",
        description="Two-player logic circuit card game server.",
        version=__version__,
        docs_url="/api/docs" if CIRCUIT_ENV != "production" else None,
        redoc_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()
    interval = BROADCAST_INTERVAL if broadcast_interval is None else broadcast_interval

    # Live connections and per-room broadcast loops
    connections: dict[str, WebSocket] = {}
    broadcasts: dict[str, BroadcastLoop] = {}

    app.state.service = api_service
    app.state.connections = connections
    app.state.broadcasts = broadcasts

    # =========================================================================
    # Delivery helpers
    # =========================================================================

    async def send_to(player_id: str, packet: dict[str, Any]):
        ws = connections.get(player_id)
        if ws is None:
            return
        try:
            await ws.send_json(packet)
        except Exception as e:
            # Dead socket; the receive loop will clean it up
            logger.debug("send to %s failed: %s", player_id, e)

    async def deliver(result: HandleResult):
        for out in result.messages:
            await send_to(out.player_id, out.packet)

        if result.started:
            loop = BroadcastLoop(
                result.started,
                send=send_to,
                build=api_service.status_packet,
                interval=interval,
            )
            broadcasts[result.started.code] = loop
            loop.start()

        if result.closed:
            loop = broadcasts.pop(result.closed.code, None)
            if loop:
                loop.stop()

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=message, error_code=error_code).model_dump(mode="json"),
        )

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """Game protocol endpoint, one connection per player."""
        await websocket.accept()

        player_id, hello = api_service.connect()
        connections[player_id] = websocket
        await websocket.send_json(hello)

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                # Text and binary frames carry the same JSON packets
                data = message.get("text")
                if data is None:
                    data = message.get("bytes") or b""
                try:
                    result = api_service.handle(player_id, data)
                except MalformedPacketError as e:
                    logger.info("closing %s after malformed packet: %s", player_id, e)
                    await websocket.send_json(failure_packet(
                        OutboundType.ERROR, str(e), ErrorCode.MALFORMED_REQUEST,
                    ))
                    await websocket.close(code=1003)
                    break
                await deliver(result)
        except WebSocketDisconnect as e:
            logger.info("connection %s closed (code %s)", player_id, e.code)
        finally:
            connections.pop(player_id, None)
            await deliver(api_service.disconnect(player_id))

    # =========================================================================
    # Room Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/rooms",
        response_model=RoomListResponse,
        tags=["Rooms"],
        summary="List open rooms",
    )
    async def list_rooms() -> RoomListResponse:
        rooms = api_service.room_manager.list_rooms()
        return RoomListResponse(rooms=rooms, count=len(rooms))

    @app.get(
        "/api/v1/rooms/{code}/legal",
        response_model=LegalGatesResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rooms"],
        summary="Legal gates for a slot",
    )
    async def legal_gates(
        code: str,
        x: Annotated[int, Query(description="Column index")],
        y: Annotated[int, Query(description="Row index, canonical orientation")],
    ) -> Union[LegalGatesResponse, JSONResponse]:
        """
        Which gate cards could legally be placed at (x, y) right now.

        Coordinates are canonical (player one's view).
        """
        room = api_service.room_manager.get_room(code)
        if room is None:
            return make_error_response(
                ErrorCode.ROOM_NOT_FOUND,
                f"Room {code} not found",
                status_code=404,
            )

        gates = sorted(room.game.legal_gates(x, y), key=lambda c: c.value)
        return LegalGatesResponse(
            code=code,
            x=x,
            y=y,
            can_accept=room.game.can_accept(x, y),
            gates=gates,
        )

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            version=__version__,
            rooms=len(api_service.room_manager.list_rooms()),
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Circuit Cards API",
            "version": __version__,
            "websocket": "/ws",
            "health": "/health",
        }

    return app


# For running directly: uvicorn circuitcards.api.app:app
app = create_app()
