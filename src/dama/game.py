"""
Rules of dama (checkers).

* Captures are mandatory: as soon as the side to move can capture, only captures are legal.
* A capture chain is played one jump at a time. While the capturing piece can keep capturing, the turn does not pass
  and `must_continue_from` pins the next move to that piece.
* A man reaching the far row is crowned immediately, also in the middle of a chain (it continues as a king).
* The side to move loses when it has no pieces or no legal move left.
"""

from dataclasses import dataclass, replace
from typing import Optional

from src.dama.board import KING_ROW, Board, Color, Square
from src.dama.moves import Move, capture_moves, step_moves

MUST_CAPTURE_MESSAGE = "You must capture"
MUST_CONTINUE_MESSAGE = "You must continue capturing with the same piece"


@dataclass(frozen=True)
class DamaState:
    board: Board
    color_to_move: Color = Color.RED
    must_continue_from: Optional[Square] = None
    winner: Optional[str] = None


def initialize() -> DamaState:
    return DamaState(board=Board.starting_position())


def all_captures(board: Board, color: Color) -> list[Move]:
    return [
        move
        for square in board.locate_color(color)
        for move in capture_moves(board, square)
    ]


def legal_moves(state: DamaState, color: Color) -> list[Move]:
    """
    1. a capture chain in progress? --> only further captures by that piece
    2. any capture available? --> only captures
    3. otherwise all single diagonal steps
    """
    if state.winner is not None or color != state.color_to_move:
        return []

    if state.must_continue_from is not None:
        return capture_moves(state.board, state.must_continue_from)

    captures = all_captures(state.board, color)
    if captures:
        return captures

    return [
        move
        for square in state.board.locate_color(color)
        for move in step_moves(state.board, square)
    ]


def apply_move(state: DamaState, move: Move) -> DamaState:
    if move not in legal_moves(state, state.color_to_move):
        return state

    board = state.board
    piece = board.piece(move.from_square)
    if move.to_square.row == KING_ROW[piece.color] and not piece.is_king:
        piece = piece.crowned()

    board = board.place_piece(None, move.from_square).place_piece(piece, move.to_square)
    if move.is_capture:
        board = board.place_piece(None, move.captured_square)

    # keep capturing with the same piece if possible (also right after being crowned)
    if move.is_capture and capture_moves(board, move.to_square):
        return replace(state, board=board, must_continue_from=move.to_square)

    next_state = replace(
        state,
        board=board,
        color_to_move=state.color_to_move.opponent,
        must_continue_from=None,
    )
    return replace(next_state, winner=_determine_winner(next_state))


def is_terminal(state: DamaState) -> Optional[str]:
    return state.winner


def rejection_reason(state: DamaState, move: Move) -> str:
    if state.winner is not None:
        return "The game is over"
    piece = state.board.piece(move.from_square)
    if piece is None or piece.color != state.color_to_move:
        return f"Select one of the {state.color_to_move} pieces"
    if state.must_continue_from is not None and move.from_square != state.must_continue_from:
        return MUST_CONTINUE_MESSAGE
    if not move.is_capture and all_captures(state.board, state.color_to_move):
        return MUST_CAPTURE_MESSAGE
    return "Invalid move"


def _determine_winner(state: DamaState) -> Optional[str]:
    """The player to move has lost if they have nothing left to move"""
    if legal_moves(state, state.color_to_move):
        return None
    return str(state.color_to_move.opponent)
