"""
Rules of Snakes & Ladders.

A turn is one roll of a single die: advance by the roll (capped at the final square), then follow
at most one snake or ladder. Reaching the final square wins.
"""

from dataclasses import dataclass, replace
from random import Random
from typing import Optional, Self

from src.core.exceptions import NotationError

FINAL_SQUARE = 100
START_SQUARE = 1
DIE_FACES = range(1, 7)

# fmt: off
SNAKES: dict[int, int] = {
    16: 6, 47: 26, 49: 11, 56: 53, 62: 19, 64: 60, 87: 24, 93: 73, 95: 75, 98: 78,
}

LADDERS: dict[int, int] = {
    1: 38, 4: 14, 9: 21, 21: 42, 28: 84, 36: 44, 51: 67, 71: 91, 80: 100,
}
# fmt: on


@dataclass(frozen=True)
class Roll:
    value: int

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'roll:5'"""
        _, _, value = notation.partition(":")
        if not notation.startswith("roll:") or not value.isdigit():
            raise NotationError(f"Cannot interpret {notation!r} as a roll (ex. 'roll:5').")
        return cls(int(value))

    def to_notation(self) -> str:
        return f"roll:{self.value}"


@dataclass(frozen=True)
class SnakesState:
    positions: tuple[int, ...]
    current: int = 0
    last_roll: Optional[int] = None
    winner: Optional[str] = None


def player_name(index: int) -> str:
    return f"player-{index + 1}"


def initialize(num_players: int = 2) -> SnakesState:
    return SnakesState(positions=(START_SQUARE,) * num_players)


def redirect(square: int) -> int:
    """Follow a snake or a ladder starting on `square`. A single hop: the destination is never looked up again."""
    if square in SNAKES:
        return SNAKES[square]
    return LADDERS.get(square, square)


def legal_moves(state: SnakesState, side: str) -> list[Roll]:
    """Every face of the die is a possible outcome of the roll"""
    if state.winner is not None or side != player_name(state.current):
        return []
    return [Roll(value) for value in DIE_FACES]


def apply_move(state: SnakesState, move: Roll) -> SnakesState:
    if move not in legal_moves(state, player_name(state.current)):
        return state

    landing = min(state.positions[state.current] + move.value, FINAL_SQUARE)
    new_position = redirect(landing)
    positions = list(state.positions)
    positions[state.current] = new_position

    if new_position == FINAL_SQUARE:
        return replace(
            state,
            positions=tuple(positions),
            last_roll=move.value,
            winner=player_name(state.current),
        )
    return replace(
        state,
        positions=tuple(positions),
        last_roll=move.value,
        current=(state.current + 1) % len(positions),
    )


def is_terminal(state: SnakesState) -> Optional[str]:
    return state.winner


def bot_move(state: SnakesState, rng: Random) -> Optional[Roll]:
    """Nothing to decide: the bot just rolls"""
    if state.winner is not None:
        return None
    return Roll(rng.choice(DIE_FACES))


def rejection_reason(state: SnakesState, move: Roll) -> str:
    if state.winner is not None:
        return "The game is over"
    return f"A die roll is between {DIE_FACES[0]} and {DIE_FACES[-1]}"
