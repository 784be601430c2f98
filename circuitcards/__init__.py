"""
Circuit Cards - Logic Circuit Card Game Server

An authoritative rules engine for a two-player logic-gate card game,
plus the session and API layers that pair remote players:
- Pyramid board of gate merges over a row of state cards
- Legal move generation and boolean propagation
- Shared draw pile and hand replenishment
- Rooms, mirrored player views and a WebSocket API
"""

__version__ = "0.1.0"
