"""
Circuit Cards CLI - Command-line interface for the server and engine.

Usage:
    circuitcards serve [--host HOST] [--port PORT]     Run the WebSocket server
    circuitcards simulate [--turns N] [--seed S]       Let two bots play and print the board
"""

import argparse
import logging
import os
import sys

from .engine_core.cards import Card
from .engine_core.game import Game
from .engine_core.turn import Turn

_SYMBOLS = {
    Card.STATE_LOW: "L",
    Card.STATE_HIGH: "H",
    Card.AND_FALSE: "&0",
    Card.AND_TRUE: "&1",
    Card.OR_FALSE: "|0",
    Card.OR_TRUE: "|1",
    Card.XOR_FALSE: "^0",
    Card.XOR_TRUE: "^1",
    Card.EMPTY: ".",
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Circuit Cards - logic circuit card game server",
        prog="circuitcards",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CIRCUIT_LOG_LEVEL", "INFO"),
        help="Logging level (default: $CIRCUIT_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the WebSocket server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")), help="Port")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a bot-vs-bot game")
    simulate_parser.add_argument("--turns", type=int, default=40, help="Number of moves")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the WebSocket server."""
    import uvicorn

    uvicorn.run("circuitcards.api.app:app", host=args.host, port=args.port)


def cmd_simulate(args):
    """Let two random bots play and print the result."""
    from .bots import RandomPolicy, play_turns

    game = Game(seed=args.seed)
    bots = {
        Turn.PLAYER_ONE: RandomPolicy(seed=args.seed),
        Turn.PLAYER_TWO: RandomPolicy(seed=None if args.seed is None else args.seed + 1),
    }
    records = play_turns(game, bots, args.turns)

    for record in records:
        status = "ok" if record.result else f"rejected ({record.result.error})"
        print(f"{record.action.describe()}: {status}")

    print()
    print(render_board(game))
    print(f"\nNext to move: {game.active_player.name}")
    print(f"Draw pile: {game.draw_pile_size} cards")


def render_board(game: Game) -> str:
    """Text rendering of both halves, top apex first."""
    size = game.board.size
    lines = []
    for y in range(size - 1, -size, -1):
        cells = [_SYMBOLS[game.get(x, y)] for x in range(size - abs(y))]
        indent = " " * (abs(y) * 2)
        lines.append(f"{y:>3} {indent}" + "  ".join(f"{c:<2}" for c in cells))
    return "\n".join(lines)


if __name__ == "__main__":
    main()
