"""
Functional API over GameState plus move-string notation.
This allows `from checkers.engine import legal_moves, apply_move`, etc.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from checkers.board import Board, middle_index
from checkers.game_state import GameState
from checkers.types import Move, Piece, is_valid_index

__all__ = [
    "new_game",
    "legal_moves",
    "apply_move",
    "is_terminal",
    "serialize",
    "deserialize",
    "count_pieces",
    "move_to_str",
    "parse_move_str",
]


def new_game() -> GameState:
    """A game in the starting position with player 1 to move."""
    return GameState()


def legal_moves(game: GameState) -> List[Move]:
    return game.legal_moves()


def apply_move(game: GameState, move: Move) -> bool:
    return game.apply_move(move.start, move.end)


def is_terminal(game: GameState) -> bool:
    return game.is_game_over()


def serialize(game: GameState) -> str:
    return game.serialize()


def deserialize(state: Optional[str]) -> GameState:
    return GameState.from_string(state)


def count_pieces(board: Board) -> Tuple[int, int, int, int]:
    """Count pieces on the board.

    Returns:
        Tuple of (black_pieces, white_pieces, black_kings, white_kings)
    """
    black_kings = board.count(Piece.BLACK_KING)
    white_kings = board.count(Piece.WHITE_KING)
    blacks = board.count(Piece.BLACK_CHECKER) + black_kings
    whites = board.count(Piece.WHITE_CHECKER) + white_kings
    return blacks, whites, black_kings, white_kings


def move_to_str(move: Move) -> str:
    """'8-12' for a step, '9x18' for a capture."""
    sep = 'x' if is_valid_index(middle_index(move.start, move.end)) else '-'
    return f"{move.start}{sep}{move.end}"


def parse_move_str(s: str) -> Optional[Move]:
    """Parse '8-12', '9x18' or '8 12' into a move; None if malformed."""
    s = s.strip().lower().replace('x', '-').replace(' ', '-')
    parts: List[str] = [p for p in s.split('-') if p]
    if len(parts) != 2:
        return None
    try:
        start, end = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (is_valid_index(start) and is_valid_index(end)):
        return None
    return Move(start, end)
