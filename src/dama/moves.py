"""
Geometry of dama moves: diagonal steps and jumps.

A jump (capture) is a single hop over an adjacent enemy piece onto the empty square right behind it.
A chain of captures is played as a sequence of separate jumps by the same piece (see game.py).
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import NotationError
from src.dama.board import FORWARD, Board, Square

Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    from_square: Square
    to_square: Square

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'c3d4' for a step, 'c3e5' for a jump"""
        if len(notation) != 4:
            raise NotationError(f"Cannot interpret {notation!r} as a dama move.")
        try:
            move = cls(
                Square.from_algebraic(notation[:2]), Square.from_algebraic(notation[2:])
            )
        except ValueError as e:
            raise NotationError(f"Cannot interpret {notation!r} as a dama move.") from e
        if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
            raise NotationError(f"Move {notation!r} leaves the board.")
        return move

    def to_notation(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def is_capture(self) -> bool:
        return abs(self.to_square.row - self.from_square.row) == 2

    @property
    def captured_square(self) -> Optional[Square]:
        """The square that is jumped over (None for a quiet step)"""
        if not self.is_capture:
            return None
        return Square(
            (self.from_square.row + self.to_square.row) // 2,
            (self.from_square.col + self.to_square.col) // 2,
        )


def directions(board: Board, square: Square) -> list[Vector]:
    """Men only move (and capture) forward, kings go both ways"""
    piece = board.piece(square)
    forward = FORWARD[piece.color]
    rows = [forward, -forward] if piece.is_king else [forward]
    return [(dr, dc) for dr in rows for dc in (-1, 1)]


def step_moves(board: Board, square: Square) -> list[Move]:
    moves: list[Move] = []
    for dr, dc in directions(board, square):
        target = square.shifted(dr, dc)
        if target.is_within_bounds() and board.piece(target) is None:
            moves.append(Move(square, target))
    return moves


def capture_moves(board: Board, square: Square) -> list[Move]:
    piece = board.piece(square)
    moves: list[Move] = []
    for dr, dc in directions(board, square):
        jumped = square.shifted(dr, dc)
        landing = square.shifted(2 * dr, 2 * dc)
        if not landing.is_within_bounds():
            continue
        victim = board.piece(jumped)
        if victim is not None and victim.color != piece.color and board.piece(landing) is None:
            moves.append(Move(square, landing))
    return moves
