"""
Rule-ordered Tris bot (no lookahead):
win now > block the opponent's win > center > random free corner > random free cell
"""

from random import Random
from typing import Optional

from src.tris.game import (
    WIN_LINES,
    Cells,
    Mark,
    Move,
    TrisState,
    empty_cells,
    is_terminal,
)

CENTER = 4
CORNERS = (0, 2, 6, 8)


def bot_move(state: TrisState, rng: Random) -> Optional[Move]:
    if is_terminal(state) is not None:
        return None
    free = empty_cells(state.cells)
    if not free:
        return None

    winning_cell = completing_cell(state.cells, state.current)
    if winning_cell is not None:
        return Move(winning_cell)

    blocking_cell = completing_cell(state.cells, state.current.opponent)
    if blocking_cell is not None:
        return Move(blocking_cell)

    if CENTER in free:
        return Move(CENTER)

    free_corners = [cell for cell in CORNERS if cell in free]
    if free_corners:
        return Move(rng.choice(free_corners))

    return Move(rng.choice(free))


def completing_cell(cells: Cells, mark: Mark) -> Optional[int]:
    """A free cell that would give `mark` three in a row (first one found, in line order)"""
    for line in WIN_LINES:
        marks = [cells[index] for index in line]
        if marks.count(mark) == 2 and marks.count(None) == 1:
            return line[marks.index(None)]
    return None
