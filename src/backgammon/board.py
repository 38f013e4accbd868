"""Backgammon board: 24 points (0-indexed), each empty or holding a stack of a single color."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

NUM_POINTS = 24
PIECES_PER_COLOR = 15

# sentinels used in moves: entering from the bar / bearing off the board
BAR = -1
OFF = NUM_POINTS


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self == Color.WHITE else Color.WHITE


# white travels up the indices (home: 18-23), black travels down (home: 0-5)
DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
HOME_POINTS: dict[Color, range] = {
    Color.WHITE: range(18, 24),
    Color.BLACK: range(0, 6),
}


@dataclass(frozen=True)
class Point:
    color: Color
    count: int


Points = tuple[Optional[Point], ...]

STARTING_LAYOUT: dict[int, Point] = {
    0: Point(Color.WHITE, 2),
    11: Point(Color.WHITE, 5),
    16: Point(Color.WHITE, 3),
    18: Point(Color.WHITE, 5),
    23: Point(Color.BLACK, 2),
    12: Point(Color.BLACK, 5),
    7: Point(Color.BLACK, 3),
    5: Point(Color.BLACK, 5),
}


def starting_points() -> Points:
    return tuple(STARTING_LAYOUT.get(index) for index in range(NUM_POINTS))


def entry_point(color: Color, die: int) -> int:
    """Where a piece from the bar lands: white enters at the start of the track (0..5), black at the end (23..18)"""
    return die - 1 if color == Color.WHITE else NUM_POINTS - die


def pips_to_bear_off(color: Color, index: int) -> int:
    """The exact die needed to bear off a piece from this point"""
    return NUM_POINTS - index if color == Color.WHITE else index + 1


def add_piece(points: Points, index: int, color: Color) -> Points:
    cells = list(points)
    current = cells[index]
    count = current.count + 1 if current is not None and current.color == color else 1
    cells[index] = Point(color, count)
    return tuple(cells)


def remove_piece(points: Points, index: int) -> Points:
    cells = list(points)
    current = cells[index]
    cells[index] = Point(current.color, current.count - 1) if current.count > 1 else None
    return tuple(cells)


def pieces_on_board(points: Points, color: Color) -> int:
    return sum(point.count for point in points if point is not None and point.color == color)
