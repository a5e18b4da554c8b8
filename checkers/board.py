"""
Packed 8x8 checkers board.

Only the 32 dark squares are playable, so the board stores one piece id per
dark square. Squares are numbered row by row from the top-left:

    index = y * 4 + x // 2        (x, y) = (1, 0) -> 0, (3, 0) -> 1, ... (6, 7) -> 31

All conversions are total: anything off the board maps to INVALID_INDEX or
INVALID_POINT instead of raising.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

import numpy as np

from checkers.types import (
    BOARD_WIDTH,
    INVALID_INDEX,
    INVALID_POINT,
    SQUARES_COUNT,
    Piece,
    Player,
    Point,
    SquareIndex,
    is_valid_index,
    is_valid_point,
)

logger = logging.getLogger(__name__)

PieceLike = Union[Piece, int]

# Number of starting checkers per side
_ROWS_OF_CHECKERS = 3
_CHECKERS_PER_SIDE = _ROWS_OF_CHECKERS * BOARD_WIDTH // 2


# ============================
# Coordinate helpers
# ============================
def to_index(x: int, y: int) -> SquareIndex:
    """Convert a coordinate to a square index, or INVALID_INDEX for light/off-board squares."""
    if not is_valid_point(Point(x, y)):
        return INVALID_INDEX
    return y * 4 + x // 2


def point_to_index(point: Optional[Point]) -> SquareIndex:
    if point is None:
        return INVALID_INDEX
    return to_index(point[0], point[1])


def to_point(index: SquareIndex) -> Point:
    """Convert a square index to its coordinate, or INVALID_POINT when out of range."""
    if not is_valid_index(index):
        return INVALID_POINT
    y = index // 4
    x = 2 * (index % 4) + (y + 1) % 2
    return Point(x, y)


def middle_of_points(p1: Optional[Point], p2: Optional[Point]) -> Point:
    """Square jumped over when moving from p1 to p2.

    Both points must be dark squares exactly two diagonal steps apart,
    otherwise INVALID_POINT is returned.
    """
    if p1 is None or p2 is None:
        return INVALID_POINT
    if not is_valid_point(p1) or not is_valid_point(p2):
        return INVALID_POINT
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    if abs(dx) != abs(dy) or abs(dx) != 2:
        return INVALID_POINT
    return Point(p1.x + dx // 2, p1.y + dy // 2)


def middle(index1: SquareIndex, index2: SquareIndex) -> Point:
    return middle_of_points(to_point(index1), to_point(index2))


def middle_index(index1: SquareIndex, index2: SquareIndex) -> SquareIndex:
    return point_to_index(middle(index1, index2))


class Board:
    """Mutable board of 32 dark squares backed by an int8 numpy array."""

    __slots__ = ("_squares",)

    # Coordinate helpers are also reachable through the class
    to_index = staticmethod(to_index)
    point_to_index = staticmethod(point_to_index)
    to_point = staticmethod(to_point)
    middle = staticmethod(middle)
    middle_of_points = staticmethod(middle_of_points)
    is_valid_index = staticmethod(is_valid_index)
    is_valid_point = staticmethod(is_valid_point)

    def __init__(self) -> None:
        self._squares: np.ndarray = np.zeros(SQUARES_COUNT, dtype=np.int8)
        self.reset()

    @classmethod
    def empty(cls) -> Board:
        """A board with no pieces on it."""
        board = cls()
        board._squares[:] = Piece.EMPTY
        return board

    def reset(self) -> None:
        """Standard layout: black checkers on squares 0-11, white on 20-31."""
        self._squares[:] = Piece.EMPTY
        for i in range(_CHECKERS_PER_SIDE):
            self._squares[i] = Piece.BLACK_CHECKER
            self._squares[SQUARES_COUNT - 1 - i] = Piece.WHITE_CHECKER

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._squares = self._squares.copy()
        return b

    # -- Element access -----------------------------------------------------

    def get(self, index: SquareIndex) -> Optional[Piece]:
        """Piece on a square, or None if the index is not a dark square."""
        if not is_valid_index(index):
            return None
        return Piece(int(self._squares[index]))

    def get_at(self, x: int, y: int) -> Optional[Piece]:
        return self.get(to_index(x, y))

    def set(self, index: SquareIndex, piece: PieceLike) -> None:
        """Place a piece.

        Out-of-range squares and unknown piece ids are ignored; negative ids
        clear the square.
        """
        if not is_valid_index(index):
            return
        if piece < 0:
            piece = Piece.EMPTY
        resolved = Piece.from_id(int(piece))
        if resolved is None:
            logger.debug("Ignoring unknown piece id %r for square %s", piece, index)
            return
        self._squares[index] = resolved

    def set_at(self, x: int, y: int, piece: PieceLike) -> None:
        self.set(to_index(x, y), piece)

    def find(self, piece: PieceLike) -> List[Point]:
        """Points of all squares holding the given piece, in ascending index order."""
        return [to_point(int(i)) for i in np.flatnonzero(self._squares == int(piece))]

    def pieces_of(self, player: Player) -> List[SquareIndex]:
        """Square indices of every piece owned by a player, ascending."""
        if player is Player.PLAYER1:
            ids = (Piece.BLACK_CHECKER, Piece.BLACK_KING)
        else:
            ids = (Piece.WHITE_CHECKER, Piece.WHITE_KING)
        return [int(i) for i in np.flatnonzero(np.isin(self._squares, ids))]

    def count(self, piece: PieceLike) -> int:
        return int(np.count_nonzero(self._squares == int(piece)))

    def as_array(self) -> np.ndarray:
        """Read-only snapshot of the 32 piece ids."""
        snapshot = self._squares.copy()
        snapshot.flags.writeable = False
        return snapshot

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._squares, other._squares))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board([{', '.join(str(int(v)) for v in self._squares)}])"

    def render(self) -> str:
        """Text diagram, row 0 at the top, light squares blank."""
        rows: List[str] = []
        for y in range(BOARD_WIDTH):
            cells = []
            for x in range(BOARD_WIDTH):
                piece = self.get_at(x, y)
                cells.append(" " if piece is None else str(piece))
            rows.append(f"{y} {' '.join(cells)}")
        rows.append("  " + " ".join(str(x) for x in range(BOARD_WIDTH)))
        return "\n".join(rows)
