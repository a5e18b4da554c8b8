"""
Type definitions for the checkers rules engine.

This module provides:
- The closed set of piece identifiers stored on the board
- Player identifiers and their movement direction
- Point and Move value objects
- Type aliases and constants shared by the rest of the package
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional

import numpy as np

# Basic type aliases
SquareIndex = int  # 0..31 for dark squares

# Constants for type safety
SQUARES_COUNT = 32
BOARD_WIDTH = 8
INVALID_INDEX: SquareIndex = -1
WEIGHT_INVALID = float("-inf")


class Piece(IntEnum):
    """Piece identifier stored on a dark square.

    Bit 2 marks an occupied square, bit 1 marks black and bit 0 marks a king.
    """

    EMPTY = 0
    WHITE_CHECKER = 4
    WHITE_KING = 5
    BLACK_CHECKER = 6
    BLACK_KING = 7

    @property
    def is_empty(self) -> bool:
        return self is Piece.EMPTY

    @property
    def is_black(self) -> bool:
        return self in (Piece.BLACK_CHECKER, Piece.BLACK_KING)

    @property
    def is_white(self) -> bool:
        return self in (Piece.WHITE_CHECKER, Piece.WHITE_KING)

    @property
    def is_king(self) -> bool:
        return self in (Piece.BLACK_KING, Piece.WHITE_KING)

    def promoted(self) -> Piece:
        """Return the king of the same colour (kings and EMPTY are unchanged)."""
        if self is Piece.BLACK_CHECKER:
            return Piece.BLACK_KING
        if self is Piece.WHITE_CHECKER:
            return Piece.WHITE_KING
        return self

    def is_opponent_of(self, other: Piece) -> bool:
        """True if both pieces are occupied and of opposite colours."""
        return (self.is_black and other.is_white) or (self.is_white and other.is_black)

    @classmethod
    def from_id(cls, value: int) -> Optional[Piece]:
        """Map a raw identifier to a piece, or None if it is not one."""
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return _PIECE_CHARS[self]


_PIECE_CHARS = {
    Piece.EMPTY: ".",
    Piece.WHITE_CHECKER: "w",
    Piece.WHITE_KING: "W",
    Piece.BLACK_CHECKER: "b",
    Piece.BLACK_KING: "B",
}


class Player(IntEnum):
    """Turn owner. Player 1 plays black from the top rows, player 2 plays white."""

    PLAYER2 = 0
    PLAYER1 = 1

    @property
    def opponent(self) -> Player:
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1

    @property
    def forward(self) -> int:
        """Row delta of a non-king piece owned by this player."""
        return 1 if self is Player.PLAYER1 else -1

    @property
    def promotion_row(self) -> int:
        return BOARD_WIDTH - 1 if self is Player.PLAYER1 else 0

    def owns(self, piece: Optional[Piece]) -> bool:
        if piece is None:
            return False
        return piece.is_black if self is Player.PLAYER1 else piece.is_white

    @classmethod
    def of(cls, piece: Piece) -> Optional[Player]:
        """Owner of a piece, or None for EMPTY."""
        if piece.is_black:
            return cls.PLAYER1
        if piece.is_white:
            return cls.PLAYER2
        return None

    def __str__(self) -> str:
        return "player1 (black)" if self is Player.PLAYER1 else "player2 (white)"


class Point(NamedTuple):
    """Board coordinate; x is the column and y the row, both in 0..7."""

    x: int
    y: int


INVALID_POINT = Point(-1, -1)


@dataclass
class Move:
    """A single step or capture from one dark square to another.

    The weight is only meaningful to move-ranking collaborators and has no
    effect on legality.
    """

    start: SquareIndex
    end: SquareIndex
    weight: float = 0.0

    @property
    def start_point(self) -> Point:
        from checkers.board import to_point
        return to_point(self.start)

    @property
    def end_point(self) -> Point:
        from checkers.board import to_point
        return to_point(self.end)

    def change_weight(self, delta: float) -> None:
        self.weight += delta

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Move):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self.start, self.end))


# Utility functions for type checking
def is_valid_index(index: object) -> bool:
    """Check if a value is a dark-square index. Accepts numpy integers, rejects bools."""
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        return False
    return 0 <= index < SQUARES_COUNT


def is_valid_point(point: Optional[Point]) -> bool:
    """Check if a point lies on a dark square of the board."""
    if point is None:
        return False
    x, y = point
    if x < 0 or x >= BOARD_WIDTH or y < 0 or y >= BOARD_WIDTH:
        return False
    return x % 2 != y % 2
