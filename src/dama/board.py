"""Dama board: 8x8 grid, pieces only ever stand on the dark squares."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Optional

BOARD_SIZE = 8


class Color(StrEnum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self == Color.RED else Color.RED


# red starts at the bottom (rows 5-7) and moves up the board, black starts at the top
FORWARD: dict[Color, int] = {Color.RED: -1, Color.BLACK: 1}
KING_ROW: dict[Color, int] = {Color.RED: 0, Color.BLACK: BOARD_SIZE - 1}
STARTING_ROWS: dict[Color, range] = {Color.RED: range(5, 8), Color.BLACK: range(0, 3)}


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Same naming as a chess board: 'a8' is the top-left corner (0,0)"""
        return cls(BOARD_SIZE - int(sq[1:]), ord(sq[0]) - ord("a"))

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_SIZE - self.row}"

    def is_within_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def shifted(self, dr: int, dc: int) -> Square:
        return Square(self.row + dr, self.col + dc)

    @property
    def index(self) -> int:
        return self.row * BOARD_SIZE + self.col


@dataclass(frozen=True)
class Piece:
    color: Color
    is_king: bool = False

    @property
    def value(self) -> int:
        return 5 if self.is_king else 1

    def crowned(self) -> Piece:
        return replace(self, is_king=True)


@dataclass(frozen=True)
class Board:
    cells: tuple[Optional[Piece], ...]

    @classmethod
    def empty(cls) -> Board:
        return cls((None,) * (BOARD_SIZE * BOARD_SIZE))

    @classmethod
    def starting_position(cls) -> Board:
        board = cls.empty()
        for color, rows in STARTING_ROWS.items():
            for row in rows:
                for col in range(BOARD_SIZE):
                    square = Square(row, col)
                    if square.is_dark():
                        board = board.place_piece(Piece(color), square)
        return board

    @classmethod
    def from_rows(cls, rows: list[str]) -> Board:
        """
        Convenience constructor (mostly for tests): one string of 8 characters per row, top row first.
        'r'/'b' are red/black men, 'R'/'B' are kings, anything else is an empty square.
        """
        symbols = {
            "r": Piece(Color.RED),
            "R": Piece(Color.RED, is_king=True),
            "b": Piece(Color.BLACK),
            "B": Piece(Color.BLACK, is_king=True),
        }
        return cls(tuple(symbols.get(character) for row in rows for character in row))

    def to_rows(self) -> list[str]:
        def symbol(piece: Optional[Piece]) -> str:
            if piece is None:
                return "."
            character = "r" if piece.color == Color.RED else "b"
            return character.upper() if piece.is_king else character

        return [
            "".join(symbol(self.piece(Square(row, col))) for col in range(BOARD_SIZE))
            for row in range(BOARD_SIZE)
        ]

    def piece(self, square: Square) -> Optional[Piece]:
        return self.cells[square.index]

    def place_piece(self, piece: Optional[Piece], square: Square) -> Board:
        cells = list(self.cells)
        cells[square.index] = piece
        return Board(tuple(cells))

    def locate_color(self, color: Color) -> list[Square]:
        return [
            Square(index // BOARD_SIZE, index % BOARD_SIZE)
            for index, piece in enumerate(self.cells)
            if piece is not None and piece.color == color
        ]

    def count_material(self) -> dict[Color, int]:
        return {
            color: sum(self.piece(square).value for square in self.locate_color(color))
            for color in Color
        }
