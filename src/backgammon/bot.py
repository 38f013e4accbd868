"""Greedy backgammon bot: scores each single-die move and plays the best one (no planning of the whole roll)."""

from random import Random
from typing import Optional

from src.backgammon.board import BAR, OFF
from src.backgammon.game import BackgammonState, Move, legal_moves

BEAR_OFF_BONUS = 100
HIT_BONUS = 50
ENTER_BONUS = 30
STACK_BONUS_PER_PIECE = 5
ADVANCE_BONUS_PER_PIP = 2
MAX_JITTER = 10.0


def bot_move(state: BackgammonState, rng: Random) -> Optional[Move]:
    candidates = legal_moves(state, state.color_to_move)
    if not candidates:
        return None
    return max(candidates, key=lambda move: score_move(state, move, rng))


def score_move(state: BackgammonState, move: Move, rng: Random) -> float:
    color = state.color_to_move
    score = 0.0

    if move.to_point == OFF:
        score += BEAR_OFF_BONUS
    else:
        target = state.points[move.to_point]
        if target is not None and target.color != color and target.count == 1:
            score += HIT_BONUS
        if target is not None and target.color == color:
            score += STACK_BONUS_PER_PIECE * target.count

    if move.from_point == BAR:
        score += ENTER_BONUS
    elif move.to_point != OFF:
        score += ADVANCE_BONUS_PER_PIP * move.die

    return score + rng.uniform(0, MAX_JITTER)
