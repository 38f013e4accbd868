"""
Greedy dama bot. Since captures are mandatory, the legal moves already put captures first;
the heuristic only ranks the moves within that set.
"""

from random import Random
from typing import Optional

from src.dama.board import BOARD_SIZE, KING_ROW, Color
from src.dama.game import DamaState, apply_move, legal_moves
from src.dama.moves import Move

ADVANCE_BONUS = 0.1
CENTER_BONUS = 0.3
EDGE_PENALTY = 0.2
CAPTURE_BONUS = 2.0
PROMOTION_BONUS = 3.0
FOLLOW_UP_CAPTURE_BONUS = 1.5
MAX_JITTER = 0.5


def bot_move(state: DamaState, rng: Random) -> Optional[Move]:
    candidates = legal_moves(state, state.color_to_move)
    if not candidates:
        return None
    return max(candidates, key=lambda move: score_move(state, move, rng))


def score_move(state: DamaState, move: Move, rng: Random) -> float:
    color = state.color_to_move
    piece = state.board.piece(move.from_square)
    after = apply_move(state, move)

    material = after.board.count_material()
    score = float(material[color] - material[color.opponent])

    if not piece.is_king:
        # the closer to the king row, the better
        score += ADVANCE_BONUS * (BOARD_SIZE - 1 - _rows_to_go(move.to_square.row, color))
        if move.to_square.row == KING_ROW[color]:
            score += PROMOTION_BONUS

    if 2 <= move.to_square.row <= 5 and 2 <= move.to_square.col <= 5:
        score += CENTER_BONUS
    if move.to_square.col in (0, BOARD_SIZE - 1):
        score -= EDGE_PENALTY

    if move.is_capture:
        score += CAPTURE_BONUS
    if after.must_continue_from is not None:
        score += FOLLOW_UP_CAPTURE_BONUS

    return score + rng.uniform(0, MAX_JITTER)


def _rows_to_go(row: int, color: Color) -> int:
    return abs(KING_ROW[color] - row)
