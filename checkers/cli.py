from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from checkers.engine import deserialize, move_to_str
from config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Inspect and advance serialized checkers game states")
    ap.add_argument("--state", default="", help="Serialized game state (empty for a new game)")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print the board, side to move and game-over status")
    sub.add_parser("moves", help="List legal moves for the side to move")
    apply_p = sub.add_parser("apply", help="Apply a move and print the new state")
    apply_p.add_argument("start", type=int, help="Start square index (0-31)")
    apply_p.add_argument("end", type=int, help="End square index (0-31)")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    args = parse_args(argv)
    game = deserialize(args.state)

    if args.command == "show":
        print(game)
        active = game.active_capture_index
        if active is not None:
            print(f"must continue capturing from {active}")
        print(f"game over: {game.is_game_over()}")
    elif args.command == "moves":
        for move in game.legal_moves():
            print(move_to_str(move))
    elif args.command == "apply":
        if not game.apply_move(args.start, args.end):
            print(f"illegal move: {args.start} -> {args.end}", file=sys.stderr)
            return 1
        print(game.serialize())
    return 0


if __name__ == "__main__":
    sys.exit(main())
