"""
Rules of a game of chess: which moves are legal, and what state a move leads to.

All functions are pure: they take a ChessState and return a new one (or the same one, if the move is rejected).

Supported: the movement rules of all pieces, capturing, check, checkmate and stalemate, automatic promotion to a queen.
Not supported: castling, en passant, choosing the piece to promote into.
"""

from dataclasses import dataclass, replace
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color
from src.core.shared_types import DRAW

SELF_CHECK_MESSAGE = "That move would leave your king in check"


@dataclass(frozen=True)
class ChessState:
    board: Board
    color_to_move: Color = Color.WHITE
    moves: tuple[Move, ...] = ()
    # "white" / "black" after checkmate, "draw" after stalemate. None while in progress
    winner: Optional[str] = None

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """
        Only the first two parts of a FEN string are used: <board position string> <active color>
        ex: "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w"
        """
        parts = fen.strip().split(" ")
        board = Board.from_fen(parts[0])
        color = Color.BLACK if len(parts) > 1 and parts[1] == "b" else Color.WHITE
        return cls(board=board, color_to_move=color)

    def to_fen(self) -> str:
        active = "w" if self.color_to_move == Color.WHITE else "b"
        return f"{self.board.to_fen()} {active}"


def initialize() -> ChessState:
    return ChessState(board=Board.starting_position())


def legal_moves(state: ChessState, color: Color) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces
    ----

    1. generate candidate moves, using the basic movement rules for all pieces (the board does this calculation)
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.

    Empty when it is not this color's turn, or when the game is over.
    """
    if state.winner is not None or color != state.color_to_move:
        return []
    return _moves_not_leaving_king_in_check(state.board, color)


def apply_move(state: ChessState, move: Move) -> ChessState:
    """
    Attempt to make a move
    -----

    1. reject (return the state unchanged) if the move is not legal
    2. update the board (captures and promotion happen there)
    3. update the list of moves and hand the turn to the opponent
    4. check for the end of the game
    """
    if move not in legal_moves(state, state.color_to_move):
        return state

    player_color = state.color_to_move
    board = state.board.move_piece(move)
    next_state = replace(
        state,
        board=board,
        color_to_move=player_color.opponent,
        moves=state.moves + (move,),
    )
    return replace(next_state, winner=_determine_winner(next_state))


def is_terminal(state: ChessState) -> Optional[str]:
    return state.winner


def is_check(state: ChessState, color: Color) -> bool:
    return state.board.is_check(color)


def rejection_reason(state: ChessState, move: Move) -> str:
    """Advisory message explaining why a move is not accepted"""
    if state.winner is not None:
        return "The game is over"
    piece = state.board.piece(move.from_square)
    if piece is None:
        return f"There is no piece on {move.from_square.to_algebraic()}"
    if piece.color != state.color_to_move:
        return f"It is {state.color_to_move}'s turn"
    candidate_moves = state.board.generate_candidate_moves(piece.color)
    if move in candidate_moves and move not in legal_moves(state, piece.color):
        return SELF_CHECK_MESSAGE
    return f"The {piece.type} on {move.from_square.to_algebraic()} cannot move to {move.to_square.to_algebraic()}"


# -- PRIVATE HELPERS ---
def _moves_not_leaving_king_in_check(board: Board, color: Color) -> list[Move]:
    return [
        move
        for move in board.generate_candidate_moves(color)
        if not _is_putting_yourself_in_check(board, move, color)
    ]


def _is_putting_yourself_in_check(board: Board, move: Move, color: Color) -> bool:
    """Return True if the move puts you in check

    plan:
    1. make the candidate move on a copy of the board
    2. determine if king is in check on the new board
    """
    return board.move_piece(move).is_check(color)


def _determine_winner(state: ChessState) -> Optional[str]:
    """
    Performs checks to see if game has ended.

    NOTE the turn has already been handed over: the color to move is the opponent of the player that just moved.
    """
    next_color = state.color_to_move
    if state.board.locate_king(next_color) is None:
        # only possible when starting from a custom position without this king
        return str(next_color.opponent)
    if _moves_not_leaving_king_in_check(state.board, next_color):
        return None
    # no legal moves: checkmate or stalemate
    if state.board.is_check(next_color):
        return str(next_color.opponent)
    return DRAW
