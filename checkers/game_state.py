"""
Game state machine: one board, the turn owner and an in-progress capture chain.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from checkers.board import Board, middle_index, point_to_index, to_index, to_point
from checkers.moves import MoveGenerator, MoveValidator
from checkers.types import (
    INVALID_INDEX,
    SQUARES_COUNT,
    Move,
    Piece,
    Player,
    Point,
    SquareIndex,
    is_valid_index,
)
from config import GameRulesSettings, get_game_rules

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[+-]?[0-9]+")

_Snapshot = Tuple[Board, Player, Optional[SquareIndex], Optional[Move]]


class GameState:
    """Owns the live board and applies validated moves to it.

    Callers only ever receive copies of the board, so renderers and move
    rankers can inspect a position without touching the game.
    """

    def __init__(self, board: Optional[Board] = None, turn: Player = Player.PLAYER1,
                 active_capture_index: Optional[SquareIndex] = None,
                 rules: Optional[GameRulesSettings] = None) -> None:
        self.rules = rules if rules is not None else get_game_rules()
        self.generator = MoveGenerator()
        self.validator = MoveValidator(captures_mandatory=self.rules.captures_mandatory,
                                       generator=self.generator)
        self._board = board.copy() if board is not None else Board()
        self._turn = Player(turn)
        self._active_capture_index = (active_capture_index
                                      if is_valid_index(active_capture_index) else None)
        self.last_move: Optional[Move] = None
        self.history: List[_Snapshot] = []

    @classmethod
    def from_string(cls, state: Optional[str],
                    rules: Optional[GameRulesSettings] = None) -> GameState:
        game = cls(rules=rules)
        game.deserialize(state)
        return game

    def restart(self) -> None:
        """Reset to the initial position with player 1 to move."""
        self._board = Board()
        self._turn = Player.PLAYER1
        self._active_capture_index = None
        self.last_move = None
        self.history.clear()

    def copy(self) -> GameState:
        game = GameState(self._board, self._turn, self._active_capture_index, rules=self.rules)
        game.last_move = self.last_move
        game.history = [(b.copy(), t, a, m) for b, t, a, m in self.history]
        return game

    # -- Accessors ----------------------------------------------------------

    @property
    def turn(self) -> Player:
        return self._turn

    @property
    def is_p1_turn(self) -> bool:
        return self._turn is Player.PLAYER1

    def set_turn(self, player: Player) -> None:
        self._turn = Player(player)

    @property
    def active_capture_index(self) -> Optional[SquareIndex]:
        return self._active_capture_index

    def get_board(self) -> Board:
        """Independent copy of the current board."""
        return self._board.copy()

    def get_piece_counts(self) -> Tuple[int, int, int, int]:
        """Get piece counts: (black_checkers, white_checkers, black_kings, white_kings)."""
        b = self._board
        return (b.count(Piece.BLACK_CHECKER), b.count(Piece.WHITE_CHECKER),
                b.count(Piece.BLACK_KING), b.count(Piece.WHITE_KING))

    # -- Rules --------------------------------------------------------------

    def is_legal_move(self, start: SquareIndex, end: SquareIndex) -> bool:
        return self.validator.is_legal_move(self._board, self._turn, start, end,
                                            self._active_capture_index)

    def legal_moves(self) -> List[Move]:
        """Every legal (start, end) pair for the side to move."""
        if self._active_capture_index is not None:
            starts = [self._active_capture_index]
        else:
            starts = self._board.pieces_of(self._turn)
        moves: List[Move] = []
        for start in starts:
            ends = (self.generator.capture_candidates(self._board, start)
                    + self.generator.move_candidates(self._board, start))
            for p in ends:
                end = to_index(p.x, p.y)
                if self.is_legal_move(start, end):
                    moves.append(Move(start, end))
        return moves

    def apply_move(self, start: SquareIndex, end: SquareIndex) -> bool:
        """Validate and apply a move. Returns False, leaving the state untouched, if illegal."""
        if not self.is_legal_move(start, end):
            logger.debug("Rejected move %s -> %s for %s", start, end, self._turn)
            return False

        start, end = int(start), int(end)
        self.history.append((self._board.copy(), self._turn,
                             self._active_capture_index, self.last_move))

        mid = middle_index(start, end)
        self._board.set(end, self._board.get(start))
        self._board.set(mid, Piece.EMPTY)
        self._board.set(start, Piece.EMPTY)
        self.last_move = Move(start, end)

        # Promotion ends the turn even if more captures are available
        switch_turn = False
        piece = self._board.get(end)
        owner = Player.of(piece)
        if not piece.is_king and to_point(end).y == owner.promotion_row:
            self._board.set(end, piece.promoted())
            logger.debug("Promoted piece on %s to %s", end, piece.promoted().name)
            switch_turn = True

        captured = is_valid_index(mid)
        if not captured or not self.generator.capture_candidates(self._board, end):
            switch_turn = True

        if switch_turn:
            self._turn = self._turn.opponent
            self._active_capture_index = None
            logger.debug("Turn passes to %s", self._turn)
        else:
            self._active_capture_index = end
            logger.debug("Capture chain continues from %s", end)
        return True

    def apply_point_move(self, start: Optional[Point], end: Optional[Point]) -> bool:
        if start is None or end is None:
            return False
        return self.apply_move(point_to_index(start), point_to_index(end))

    def undo_move(self) -> bool:
        """Undo the last applied move and return success."""
        if not self.rules.allow_undo or not self.history:
            return False
        self._board, self._turn, self._active_capture_index, self.last_move = self.history.pop()
        return True

    def is_game_over(self) -> bool:
        """True if a colour has no pieces, or the side to move cannot move or capture."""
        if not self._board.pieces_of(Player.PLAYER1) or not self._board.pieces_of(Player.PLAYER2):
            return True
        for i in self._board.pieces_of(self._turn):
            if (self.generator.move_candidates(self._board, i)
                    or self.generator.capture_candidates(self._board, i)):
                return False
        return True

    def winner(self) -> Optional[Player]:
        """The side left with pieces, or the opponent of a blocked side to move."""
        if not self.is_game_over():
            return None
        if not self._board.pieces_of(Player.PLAYER1):
            return Player.PLAYER2
        if not self._board.pieces_of(Player.PLAYER2):
            return Player.PLAYER1
        return self._turn.opponent

    # -- Serialization ------------------------------------------------------

    def serialize(self) -> str:
        """32 piece digits, the turn digit, then the active capture index (-1 for none)."""
        squares = "".join(str(int(self._board.get(i))) for i in range(SQUARES_COUNT))
        turn = "1" if self.is_p1_turn else "0"
        active = self._active_capture_index if self._active_capture_index is not None else INVALID_INDEX
        return f"{squares}{turn}{active}"

    def deserialize(self, state: Optional[str]) -> None:
        """Restart, then overlay whatever fields of `state` can be parsed."""
        self.restart()
        if not state:
            return

        n = len(state)
        for i in range(min(SQUARES_COUNT, n)):
            try:
                piece = Piece.from_id(int(state[i]))
            except ValueError:
                piece = None
            if piece is None:
                logger.debug("Skipping unparsable square %d: %r", i, state[i])
                continue
            self._board.set(i, piece)

        if n > SQUARES_COUNT:
            self._turn = Player.PLAYER1 if state[SQUARES_COUNT] == "1" else Player.PLAYER2
        if n > SQUARES_COUNT + 1:
            tail = state[SQUARES_COUNT + 1:]
            if _INDEX_RE.fullmatch(tail):
                active = int(tail)
            else:
                logger.debug("Unparsable active capture index: %r", tail)
                active = INVALID_INDEX
            self._active_capture_index = active if is_valid_index(active) else None

    def __str__(self) -> str:
        return f"{self._board.render()}\nturn: {self._turn}"
