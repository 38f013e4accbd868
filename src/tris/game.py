"""Rules of Tris (tic-tac-toe) on a flat array of 9 cells, X moves first."""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Optional, Self

from src.core.exceptions import NotationError
from src.core.shared_types import TIE


class Mark(StrEnum):
    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> "Mark":
        return Mark.O if self == Mark.X else Mark.X


Cells = tuple[Optional[Mark], ...]

# Pre-computed winning lines (indices into the flattened 3x3 board)
WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),  # diagonals
)  # fmt: skip


@dataclass(frozen=True)
class Move:
    cell: int

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        if not notation.isdigit() or not 0 <= int(notation) < 9:
            raise NotationError(f"Cannot interpret {notation!r} as a cell (0-8).")
        return cls(int(notation))

    def to_notation(self) -> str:
        return str(self.cell)


@dataclass(frozen=True)
class TrisState:
    cells: Cells = (None,) * 9
    current: Mark = Mark.X
    # "X" / "O" / "tie", None while in progress
    winner: Optional[str] = None


def initialize() -> TrisState:
    return TrisState()


def check_winner(cells: Cells) -> Optional[str]:
    """Three equal marks on a line win. A full board without a line is a tie."""
    for a, b, c in WIN_LINES:
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return str(cells[a])
    if all(cell is not None for cell in cells):
        return TIE
    return None


def empty_cells(cells: Cells) -> list[int]:
    return [index for index, cell in enumerate(cells) if cell is None]


def legal_moves(state: TrisState, mark: Mark) -> list[Move]:
    if is_terminal(state) is not None or mark != state.current:
        return []
    return [Move(index) for index in empty_cells(state.cells)]


def apply_move(state: TrisState, move: Move) -> TrisState:
    if move not in legal_moves(state, state.current):
        return state
    cells = list(state.cells)
    cells[move.cell] = state.current
    return replace(
        state,
        cells=tuple(cells),
        current=state.current.opponent,
        winner=check_winner(tuple(cells)),
    )


def is_terminal(state: TrisState) -> Optional[str]:
    """Also holds for a state built straight from cells (winner not filled in)"""
    return state.winner or check_winner(state.cells)


def rejection_reason(state: TrisState, move: Move) -> str:
    if is_terminal(state) is not None:
        return "The game is over"
    return f"Cell {move.cell} is already taken"
