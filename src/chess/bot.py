"""
Greedy chess bot: scores every legal move after playing it (one ply, no search) and picks the best.

score = material difference
      + small positional bonuses (center, pawn advancement, check / getting close to the enemy king)
      + capture bonus
      + random jitter to break ties
"""

from random import Random
from typing import Optional

from src.chess.board import Board
from src.chess.game import ChessState, apply_move, legal_moves
from src.chess.moves import PAWN_START_ROW, Move
from src.chess.pieces import Color, PieceType
from src.chess.square import Square

CENTER_SQUARES: frozenset[Square] = frozenset(
    Square(row, col) for row in (3, 4) for col in (3, 4)
)
CENTER_BONUS = 0.3
PAWN_ADVANCE_BONUS = 0.1
CHECK_BONUS = 0.5
KING_PROXIMITY_BONUS = 0.05
CAPTURE_BONUS_FACTOR = 0.5
CHECKMATE_BONUS = 1000.0
MAX_JITTER = 0.5


def bot_move(state: ChessState, rng: Random) -> Optional[Move]:
    """The highest scoring legal move for the color to move (None if there is no legal move)"""
    color = state.color_to_move
    candidates = legal_moves(state, color)
    if not candidates:
        return None
    return max(candidates, key=lambda move: score_move(state, move, rng))


def score_move(state: ChessState, move: Move, rng: Random) -> float:
    color = state.color_to_move
    captured = state.board.piece(move.to_square)
    moving_piece = state.board.piece(move.from_square)
    after = apply_move(state, move)
    board = after.board

    material = board.count_material()
    score = float(material[color] - material[color.opponent])

    if move.to_square in CENTER_SQUARES:
        score += CENTER_BONUS

    if moving_piece.type == PieceType.PAWN:
        score += PAWN_ADVANCE_BONUS * _rows_advanced(move.to_square, color)

    score += _king_pressure(board, move.to_square, color)

    if captured is not None:
        score += CAPTURE_BONUS_FACTOR * captured.points

    if after.winner == str(color):
        score += CHECKMATE_BONUS

    return score + rng.uniform(0, MAX_JITTER)


def _rows_advanced(square: Square, color: Color) -> int:
    return abs(square.row - PAWN_START_ROW[color])


def _king_pressure(board: Board, landing_square: Square, color: Color) -> float:
    """Bonus for giving check, plus a little for every step closer the moved piece stands to the enemy king"""
    enemy_king = board.locate_king(color.opponent)
    if enemy_king is None:
        return 0.0
    bonus = CHECK_BONUS if board.is_check(color.opponent) else 0.0
    distance = max(
        abs(enemy_king.row - landing_square.row),
        abs(enemy_king.col - landing_square.col),
    )
    return bonus + KING_PROXIMITY_BONUS * (7 - distance)
