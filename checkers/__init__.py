"""Checkers package: 8x8 rules engine.

Usage examples:
    from checkers import GameState
    game = GameState()
    game.apply_move(8, 12)
    from checkers import legal_moves, serialize
"""
from __future__ import annotations

# Core types and board
from .types import (
    INVALID_INDEX,
    INVALID_POINT,
    SQUARES_COUNT,
    WEIGHT_INVALID,
    Move,
    Piece,
    Player,
    Point,
)
from .board import Board, middle, middle_of_points, point_to_index, to_index, to_point

# Rules
from .moves import MoveGenerator, MoveValidator, is_legal_move, is_safe
from .game_state import GameState

# Engine API
from .engine import (
    new_game,
    legal_moves,
    apply_move,
    is_terminal,
    serialize,
    deserialize,
    count_pieces,
    move_to_str,
    parse_move_str,
)

# Players
from .players import HumanPlayer, NetworkPlayer, PlayerBase, ScriptedPlayer, play_turn
