"""Entry point for running TicTac via ``python -m tictac``."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

import uvicorn

from .cli import play_game
from .game import Player


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tictac", description="Tic-tac-toe against a perfect opponent"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    commands = parser.add_subparsers(dest="command")

    play = commands.add_parser("play", help="play in the terminal (default)")
    play.add_argument(
        "--human",
        type=Player,
        choices=list(Player),
        default=Player.X,
        help="side you play; X moves first",
    )

    serve = commands.add_parser("serve", help="start the web server")
    serve.add_argument("--host", default=os.environ.get("TICTAC_HOST", "127.0.0.1"))
    serve.add_argument(
        "--port", type=int, default=int(os.environ.get("TICTAC_PORT", "8000"))
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Play a terminal game, or start the FastAPI web server with ``serve``."""

    args = parse_args(argv)
    logging.basicConfig(level=args.log_level)

    if args.command == "serve":
        uvicorn.run("tictac.ui:app", host=args.host, port=args.port, reload=False)
        return

    try:
        play_game(human=getattr(args, "human", Player.X))
    except (EOFError, KeyboardInterrupt):
        print()


if __name__ == "__main__":
    main()
