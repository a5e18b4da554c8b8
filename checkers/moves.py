from __future__ import annotations

from typing import List, Optional, Union

from checkers.board import Board, middle_index, point_to_index, to_index, to_point
from checkers.types import Piece, Player, Point, SquareIndex, is_valid_index

StartSquare = Union[SquareIndex, Point]


def _as_index(square: Optional[StartSquare]) -> SquareIndex:
    if isinstance(square, tuple):
        return point_to_index(square)
    if square is None:
        return -1
    return square


def _add_points(points: List[Point], p: Point, piece: Piece, delta: int) -> None:
    """Append the diagonal endpoints at distance `delta` a piece may head for."""
    if piece.is_king or piece is Piece.BLACK_CHECKER:
        points.append(Point(p.x + delta, p.y + delta))
        points.append(Point(p.x - delta, p.y + delta))
    if piece.is_king or piece is Piece.WHITE_CHECKER:
        points.append(Point(p.x + delta, p.y - delta))
        points.append(Point(p.x - delta, p.y - delta))


class MoveGenerator:
    """Generates step and capture endpoints for the piece on a square.

    Endpoints are geometric candidates filtered by occupancy only; whose turn
    it is and the forced-capture rule are the validator's concern.
    """

    def move_candidates(self, board: Optional[Board], start: StartSquare) -> List[Point]:
        start_index = _as_index(start)
        if board is None or not is_valid_index(start_index):
            return []
        piece = board.get(start_index)
        points: List[Point] = []
        _add_points(points, to_point(start_index), piece, 1)
        return [p for p in points if board.get_at(p.x, p.y) is Piece.EMPTY]

    def capture_candidates(self, board: Optional[Board], start: StartSquare) -> List[Point]:
        start_index = _as_index(start)
        if board is None or not is_valid_index(start_index):
            return []
        piece = board.get(start_index)
        points: List[Point] = []
        _add_points(points, to_point(start_index), piece, 2)
        return [p for p in points
                if self.is_valid_capture(board, start_index, to_index(p.x, p.y))]

    @staticmethod
    def is_valid_capture(board: Optional[Board], start: SquareIndex, end: SquareIndex) -> bool:
        """True if the piece on `start` can jump an enemy piece and land on `end`."""
        if board is None:
            return False
        if board.get(end) is not Piece.EMPTY:
            return False
        piece = board.get(start)
        if piece is None or piece.is_empty:
            return False
        mid = board.get(middle_index(start, end))
        if mid is None or mid.is_empty:
            return False
        return piece.is_opponent_of(mid)


class MoveValidator:
    """Full legality check for a proposed start -> end pair."""

    def __init__(self, captures_mandatory: bool = True,
                 generator: Optional[MoveGenerator] = None) -> None:
        self.captures_mandatory = bool(captures_mandatory)
        self.generator = generator if generator is not None else MoveGenerator()

    def is_legal_move(self, board: Optional[Board], turn: Player, start: SquareIndex,
                      end: SquareIndex, active_capture_index: Optional[SquareIndex] = None) -> bool:
        # Basic checks
        if board is None or not is_valid_index(start) or not is_valid_index(end):
            return False
        if start == end:
            return False
        # Mid-chain the same piece has to keep capturing
        if is_valid_index(active_capture_index):
            if active_capture_index != start or not is_valid_index(middle_index(start, end)):
                return False

        if not self._validate_ids(board, turn, start, end):
            return False
        if not self._validate_distance(board, turn, start, end):
            return False
        return True

    def _validate_ids(self, board: Board, turn: Player, start: SquareIndex, end: SquareIndex) -> bool:
        if board.get(end) is not Piece.EMPTY:
            return False
        if not turn.owns(board.get(start)):
            return False
        # A two-square span must jump an opponent piece
        mid = board.get(middle_index(start, end))
        if mid is not None and not turn.opponent.owns(mid):
            return False
        return True

    def _validate_distance(self, board: Board, turn: Player, start: SquareIndex, end: SquareIndex) -> bool:
        p1, p2 = to_point(start), to_point(end)
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        if abs(dx) != abs(dy) or abs(dx) > 2 or dx == 0:
            return False

        piece = board.get(start)
        if (piece is Piece.WHITE_CHECKER and dy > 0) or (piece is Piece.BLACK_CHECKER and dy < 0):
            return False

        # Not a capture: only allowed when no capture exists anywhere
        if board.get(middle_index(start, end)) is None and self.captures_mandatory:
            if self.any_capture_available(board, turn):
                return False
        return True

    def any_capture_available(self, board: Optional[Board], turn: Player) -> bool:
        if board is None:
            return False
        return any(self.generator.capture_candidates(board, i) for i in board.pieces_of(turn))

    def is_safe(self, board: Optional[Board], point: Optional[Point]) -> bool:
        """True if no opposing piece can capture the piece on `point` next turn."""
        if board is None or point is None:
            return True
        point = Point(*point)
        index = point_to_index(point)
        if index < 0:
            return True
        piece = board.get(index)
        if piece.is_empty:
            return True

        neighbours: List[Point] = []
        _add_points(neighbours, point, Piece.BLACK_KING, 1)
        for p in neighbours:
            start = point_to_index(p)
            attacker = board.get(start)
            if attacker is None or not attacker.is_opponent_of(piece):
                continue

            dx = (point.x - p.x) * 2
            dy = (point.y - p.y) * 2
            owner = Player.of(attacker)
            if not attacker.is_king and dy * owner.forward < 0:
                continue
            if self.generator.is_valid_capture(board, start, to_index(p.x + dx, p.y + dy)):
                return False
        return True


# Convenience functional API

def is_legal_move(board: Optional[Board], turn: Player, start: SquareIndex, end: SquareIndex,
                  active_capture_index: Optional[SquareIndex] = None,
                  captures_mandatory: bool = True) -> bool:
    validator = MoveValidator(captures_mandatory=captures_mandatory)
    return validator.is_legal_move(board, turn, start, end, active_capture_index)


def is_safe(board: Optional[Board], point: Optional[Point]) -> bool:
    return MoveValidator().is_safe(board, point)
