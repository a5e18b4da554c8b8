from checkers.board import Board, to_index, to_point
from checkers.moves import MoveGenerator, MoveValidator, is_legal_move, is_safe
from checkers.types import Piece, Player, Point

# Helpers

def make_empty_board():
    return Board.empty()


def place_pieces(board, placement):
    for idx, piece in placement.items():
        board.set(idx, piece)
    return board


def indices(points):
    return [to_index(p.x, p.y) for p in points]


def test_move_candidates_initial_position():
    board = Board()
    gen = MoveGenerator()
    # 8 is (1,2): black checkers head down the board
    assert indices(gen.move_candidates(board, 8)) == [13, 12]
    # 11 is (7,2) on the edge
    assert indices(gen.move_candidates(board, 11)) == [15]
    # Back-row checkers are blocked
    assert gen.move_candidates(board, 0) == []
    # White checkers head up
    assert indices(gen.move_candidates(board, 21)) == [17, 16]


def test_move_candidates_trivial_cases():
    gen = MoveGenerator()
    assert gen.move_candidates(None, 8) == []
    assert gen.move_candidates(Board(), -1) == []
    assert gen.move_candidates(Board(), 15) == []  # empty square


def test_king_moves_both_ways():
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_KING})
    gen = MoveGenerator()
    assert sorted(indices(gen.move_candidates(board, 13))) == [8, 9, 16, 17]
    assert sorted(indices(gen.move_candidates(board, Point(2, 3)))) == [8, 9, 16, 17]


def test_capture_candidates():
    # Black at 13 (2,3) can jump white at 17 (3,4) onto 22 (4,5)
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 17: Piece.WHITE_CHECKER})
    gen = MoveGenerator()
    assert indices(gen.capture_candidates(board, 13)) == [22]
    # White at 17 moves up and can jump 13 onto 8 (1,2)
    assert indices(gen.capture_candidates(board, 17)) == [8]


def test_capture_candidates_respect_direction():
    # White at 9 (3,2) sits above black at 13; a black checker cannot jump backwards
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 9: Piece.WHITE_CHECKER})
    gen = MoveGenerator()
    assert gen.capture_candidates(board, 13) == []
    board.set(13, Piece.BLACK_KING)
    assert indices(gen.capture_candidates(board, 13)) == [6]


def test_is_valid_capture_requires_occupancy_and_opposition():
    gen = MoveGenerator()
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 17: Piece.WHITE_CHECKER})
    assert gen.is_valid_capture(board, 13, 22)

    # End occupied
    board.set(22, Piece.WHITE_CHECKER)
    assert not gen.is_valid_capture(board, 13, 22)
    board.set(22, Piece.EMPTY)

    # Midpoint same colour
    board.set(17, Piece.BLACK_CHECKER)
    assert not gen.is_valid_capture(board, 13, 22)

    # Midpoint empty
    board.set(17, Piece.EMPTY)
    assert not gen.is_valid_capture(board, 13, 22)

    # Start empty
    board.set(17, Piece.WHITE_CHECKER)
    board.set(13, Piece.EMPTY)
    assert not gen.is_valid_capture(board, 13, 22)

    assert not gen.is_valid_capture(None, 13, 22)
    assert not gen.is_valid_capture(board, 13, 40)


def test_opening_move_is_legal():
    validator = MoveValidator()
    board = Board()
    assert validator.is_legal_move(board, Player.PLAYER1, 8, 12)
    assert validator.is_legal_move(board, Player.PLAYER1, 8, 13)


def test_basic_rejections():
    validator = MoveValidator()
    board = Board()
    assert not validator.is_legal_move(None, Player.PLAYER1, 8, 12)
    assert not validator.is_legal_move(board, Player.PLAYER1, -1, 12)
    assert not validator.is_legal_move(board, Player.PLAYER1, 8, 32)
    assert not validator.is_legal_move(board, Player.PLAYER1, 8, 8)
    # Occupied end square
    assert not validator.is_legal_move(board, Player.PLAYER1, 4, 8)
    # Wrong owner
    assert not validator.is_legal_move(board, Player.PLAYER2, 8, 12)
    assert not validator.is_legal_move(board, Player.PLAYER1, 20, 16)
    # Not diagonal / too far
    assert not validator.is_legal_move(board, Player.PLAYER1, 8, 16)
    assert not validator.is_legal_move(board, Player.PLAYER1, 9, 17)


def test_backward_move_rejected_for_checkers_only():
    validator = MoveValidator()
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 30: Piece.WHITE_CHECKER})
    assert not validator.is_legal_move(board, Player.PLAYER1, 13, 9)
    board.set(13, Piece.BLACK_KING)
    assert validator.is_legal_move(board, Player.PLAYER1, 13, 9)


def test_jump_over_empty_or_own_piece_rejected():
    validator = MoveValidator()
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 30: Piece.WHITE_CHECKER})
    assert not validator.is_legal_move(board, Player.PLAYER1, 13, 22)
    board.set(17, Piece.BLACK_CHECKER)
    assert not validator.is_legal_move(board, Player.PLAYER1, 13, 22)


def test_forced_capture_rejects_every_quiet_move():
    board = place_pieces(make_empty_board(), {
        13: Piece.BLACK_CHECKER,
        17: Piece.WHITE_CHECKER,
        1: Piece.BLACK_CHECKER,
    })
    validator = MoveValidator()
    assert validator.any_capture_available(board, Player.PLAYER1)
    assert validator.is_legal_move(board, Player.PLAYER1, 13, 22)
    assert not validator.is_legal_move(board, Player.PLAYER1, 13, 16)
    assert not validator.is_legal_move(board, Player.PLAYER1, 1, 5)
    assert not validator.is_legal_move(board, Player.PLAYER1, 1, 6)


def test_forced_capture_can_be_disabled():
    board = place_pieces(make_empty_board(), {
        13: Piece.BLACK_CHECKER,
        17: Piece.WHITE_CHECKER,
        1: Piece.BLACK_CHECKER,
    })
    assert is_legal_move(board, Player.PLAYER1, 1, 5, captures_mandatory=False)
    assert not is_legal_move(board, Player.PLAYER1, 1, 5)


def test_active_capture_index_pins_start_square():
    board = place_pieces(make_empty_board(), {
        13: Piece.BLACK_CHECKER,
        17: Piece.WHITE_CHECKER,
        2: Piece.BLACK_CHECKER,
        6: Piece.WHITE_CHECKER,
    })
    validator = MoveValidator()
    assert validator.is_legal_move(board, Player.PLAYER1, 2, 9)
    assert not validator.is_legal_move(board, Player.PLAYER1, 2, 9, active_capture_index=13)
    assert validator.is_legal_move(board, Player.PLAYER1, 13, 22, active_capture_index=13)


def test_is_safe():
    # White checker at 17 (3,4) can jump black at 13 (2,3) onto 8 (1,2)
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 17: Piece.WHITE_CHECKER})
    assert not is_safe(board, to_point(13))

    # Landing square occupied
    board.set(8, Piece.BLACK_CHECKER)
    assert is_safe(board, to_point(13))


def test_is_safe_respects_attacker_direction():
    # White checker at 8 (1,2) would have to move down to jump 13
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 8: Piece.WHITE_CHECKER})
    assert is_safe(board, to_point(13))
    board.set(8, Piece.WHITE_KING)
    assert not is_safe(board, to_point(13))


def test_is_safe_trivial_cases():
    board = Board()
    assert is_safe(None, Point(1, 0))
    assert is_safe(board, None)
    assert is_safe(board, Point(0, 0))
    assert is_safe(board, to_point(15))  # empty square
    assert is_safe(board, (1, 0))


def test_active_capture_index_only_allows_captures_when_relaxed():
    board = place_pieces(make_empty_board(), {13: Piece.BLACK_CHECKER, 17: Piece.WHITE_CHECKER})
    validator = MoveValidator(captures_mandatory=False)
    assert validator.is_legal_move(board, Player.PLAYER1, 13, 16)
    assert not validator.is_legal_move(board, Player.PLAYER1, 13, 16, active_capture_index=13)
    assert validator.is_legal_move(board, Player.PLAYER1, 13, 22, active_capture_index=13)
