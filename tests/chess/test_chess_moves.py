"""Unit tests for /src/chess/moves.py and /src/chess/board.py"""

from unittest.mock import Mock, patch

import pytest

from src.chess.board import STARTING_POSITION, Board
from src.chess.moves import (
    Move,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_pawn_moves,
    candidate_rook_moves,
    is_square_attacked,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import NotationError

EMPTY_FEN = "/".join(["8"] * 8)


def single_piece_board(fen_char: str, square_name: str) -> Board:
    return Board.empty().place_piece(
        Piece.from_fen(fen_char), Square.from_algebraic(square_name)
    )


def targets(moves: list[Move]) -> set[str]:
    return {move.to_square.to_algebraic() for move in moves}


# -- MOVE CREATION, ENCODING/DECODING UCI NOTATION ---
@pytest.mark.parametrize(
    "uci_move, from_name, to_name",
    [
        ("e2e4", "e2", "e4"),
        ("a1a5", "a1", "a5"),
        ("g1f3", "g1", "f3"),
        ("a7a8q", "a7", "a8"),
    ],
)
def test_creating_move_from_uci(uci_move: str, from_name: str, to_name: str) -> None:
    """A trailing promotion character is accepted (and ignored: promotion is always to a queen)"""
    move = Move.from_uci(uci_move)
    assert move.from_square == Square.from_algebraic(from_name)
    assert move.to_square == Square.from_algebraic(to_name)
    assert move.to_uci() == uci_move[:4]


@pytest.mark.parametrize("uci_move", ["", "e2", "e2e9", "z1a1", "e2ex", "e2e4e5x"])
def test_invalid_uci(uci_move: str) -> None:
    with pytest.raises(NotationError):
        Move.from_uci(uci_move)


# -- CANDIDATE MOVES ---
def test_knight_in_the_corner() -> None:
    board = single_piece_board("N", "a1")
    assert targets(candidate_knight_moves(Square.from_algebraic("a1"), board)) == {"b3", "c2"}


def test_king_in_the_middle() -> None:
    board = single_piece_board("K", "d4")
    assert targets(candidate_king_moves(Square.from_algebraic("d4"), board)) == {
        "c3", "c4", "c5", "d3", "d5", "e3", "e4", "e5",
    }  # fmt: skip


def test_rook_on_empty_board_reaches_14_squares() -> None:
    board = single_piece_board("R", "d4")
    assert len(candidate_rook_moves(Square.from_algebraic("d4"), board)) == 14


def test_bishop_stops_at_own_piece_and_captures_enemy() -> None:
    """The ray stops before an own piece, and includes (captures) the first enemy piece"""
    board = (
        single_piece_board("B", "c1")
        .place_piece(Piece.from_fen("P"), Square.from_algebraic("b2"))
        .place_piece(Piece.from_fen("p"), Square.from_algebraic("f4"))
    )
    assert targets(candidate_bishop_moves(Square.from_algebraic("c1"), board)) == {"d2", "e3", "f4"}


@pytest.mark.parametrize(
    "fen, expected",
    [
        (STARTING_POSITION, {"e3", "e4"}),
        # a piece right in front blocks both the single and the double step
        ("rnbqkbnr/pppppppp/8/8/8/4n3/PPPPPPPP/RNBQKBNR", set()),
        # a piece two squares ahead only blocks the double step
        ("rnbqkbnr/pppppppp/8/8/4n3/8/PPPPPPPP/RNBQKBNR", {"e3"}),
        # diagonal captures
        ("rnbqkbnr/pppppppp/8/8/8/3n1n2/PPPPPPPP/RNBQKBNR", {"d3", "e3", "e4", "f3"}),
    ],
)
def test_white_pawn_on_e2(fen: str, expected: set[str]) -> None:
    board = Board.from_fen(fen)
    assert targets(candidate_pawn_moves(Square.from_algebraic("e2"), board)) == expected


def test_pawn_off_its_starting_row_moves_a_single_step() -> None:
    board = Board.from_fen("8/8/8/8/8/4P3/8/8")
    assert targets(candidate_pawn_moves(Square.from_algebraic("e3"), board)) == {"e4"}


def test_black_pawn_moves_down_the_board() -> None:
    board = Board.starting_position()
    assert targets(candidate_pawn_moves(Square.from_algebraic("d7"), board)) == {"d6", "d5"}


# -- ATTACKS ---
@pytest.mark.parametrize(
    "fen_char, attacker_square, target_square, attacked",
    [
        ("P", "d4", "e5", True),
        ("P", "d4", "d5", False),  # pawns do not attack straight ahead
        ("P", "d4", "c3", False),  # nor backwards
        ("p", "d5", "e4", True),
        ("N", "b1", "c3", True),
        ("B", "a1", "h8", True),
        ("R", "a1", "a8", True),
        ("R", "a1", "b2", False),
        ("Q", "d1", "h5", True),
        ("K", "e1", "f2", True),
    ],
)
def test_is_square_attacked(
    fen_char: str, attacker_square: str, target_square: str, attacked: bool
) -> None:
    board = single_piece_board(fen_char, attacker_square)
    color = Piece.from_fen(fen_char).color
    assert is_square_attacked(Square.from_algebraic(target_square), color, board) == attacked


def test_attack_is_blocked_by_piece_in_between() -> None:
    board = single_piece_board("R", "a1").place_piece(
        Piece.from_fen("p"), Square.from_algebraic("a4")
    )
    assert not is_square_attacked(Square.from_algebraic("a8"), Color.WHITE, board)


# -- BOARD --
def test_fen_roundtrip_of_starting_position() -> None:
    board = Board.starting_position()
    assert board.to_fen() == STARTING_POSITION
    assert board.piece_count() == 32
    assert Board.from_fen(EMPTY_FEN).piece_count() == 0


def test_move_piece_returns_new_board() -> None:
    board = Board.starting_position()
    moved = board.move_piece(Move.from_uci("e2e4"))
    assert board.piece(Square.from_algebraic("e2")) == Piece(PieceType.PAWN, Color.WHITE)
    assert moved.piece(Square.from_algebraic("e2")) is None
    assert moved.piece(Square.from_algebraic("e4")).has_moved


def test_pawn_reaching_last_row_becomes_queen() -> None:
    board = single_piece_board("P", "a7")
    promoted = board.move_piece(Move.from_uci("a7a8"))
    assert promoted.piece(Square.from_algebraic("a8")).type == PieceType.QUEEN


def test_count_material() -> None:
    board = Board.starting_position()
    # 8 pawns + 2 knights + 2 bishops + 2 rooks + queen + king
    assert board.count_material() == {Color.WHITE: 139, Color.BLACK: 139}


def test_candidate_moves_use_the_movement_rule_of_each_piece() -> None:
    """The board only dispatches: every piece type is looked up in MOVEMENT_RULES"""
    mock_rules = {piece_type: Mock(return_value=[]) for piece_type in PieceType}
    with patch.dict("src.chess.board.MOVEMENT_RULES", mock_rules):
        Board.starting_position().generate_candidate_moves(Color.WHITE)

    assert mock_rules[PieceType.PAWN].call_count == 8
    assert mock_rules[PieceType.KNIGHT].call_count == 2
    assert mock_rules[PieceType.KING].call_count == 1
