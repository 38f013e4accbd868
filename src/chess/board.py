"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import (
    MOVEMENT_RULES,
    CandidateMovesFn,
    Move,
    is_pawn_move_to_promotion_row,
    is_square_attacked,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square

Cells = tuple[Optional[Piece], ...]

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass(frozen=True)
class Board:
    """
    Value object: the 64 cells are stored in a flat tuple (row-major, row 0 first).
    Making a move never changes a Board, it returns a new one.
    """

    cells: Cells

    @classmethod
    def empty(cls) -> Self:
        return cls((None,) * (BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]))

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * pawns cover the 7th rank (row 1) entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 (row 6) are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces.

        NOTE: pawns that are not on their starting row are marked as having moved.
        """
        cells: list[Optional[Piece]] = []
        for row, fen_one_rank in enumerate(fen_str.split("/")):
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    piece = Piece.from_fen(character)
                    cells.append(_with_inferred_moved_flag(piece, row))
                else:
                    # A number denotes the amount of empty squares after each other
                    cells.extend([None] * int(character))
        return cls(tuple(cells))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.cells[square.index]

    def squares(self) -> list[Square]:
        return [
            Square(row, col)
            for row in range(BOARD_DIMENSIONS[0])
            for col in range(BOARD_DIMENSIONS[1])
        ]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square in self.squares()
            if self.piece(square) is not None and self.piece(square).color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """Scan the board for the king of the given color (None if it is not on the board)"""
        return next(
            (
                square
                for square in self.locate_color(color)
                if self.piece(square).type == PieceType.KING
            ),
            None,
        )

    def generate_candidate_moves(self, color: Color) -> list[Move]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)
        """
        candidate_moves: list[Move] = []
        for starting_square in self.locate_color(color):
            piece_type = self.piece(starting_square).type
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece_type]
            candidate_moves.extend(movement_rule(starting_square, self))
        return candidate_moves

    def is_check(self, color: Color) -> bool:
        """Is the king of `color` attacked by any of the opponent's pieces?"""
        king_square = self.locate_king(color)
        if king_square is None:
            return False
        return is_square_attacked(king_square, color.opponent, self)

    def place_piece(self, piece: Optional[Piece], square: Square) -> Self:
        cells = list(self.cells)
        cells[square.index] = piece
        return type(self)(tuple(cells))

    def move_piece(self, move: Move) -> Self:
        """
        New board with the move played. Whatever stood on the target square is captured.
        A pawn reaching the far row becomes a queen.
        """
        piece_that_moved = self.piece(move.from_square).moved()
        if is_pawn_move_to_promotion_row(move, self):
            piece_that_moved = piece_that_moved.promote_to(PieceType.QUEEN)
        cells = list(self.cells)
        cells[move.from_square.index] = None
        cells[move.to_square.index] = piece_that_moved
        return type(self)(tuple(cells))

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {color: self._count_material_player(color) for color in Color}

    def _count_material_player(self, color: Color) -> int:
        """Tally the points of material for a specific player"""
        return sum(self.piece(square).points for square in self.locate_color(color))

    def piece_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)


def _with_inferred_moved_flag(piece: Piece, row: int) -> Piece:
    """A FEN string does not store whether a piece moved. For pawns we can tell from the row they stand on."""
    home_row = 6 if piece.color == Color.WHITE else 1
    if piece.type == PieceType.PAWN and row != home_row:
        return piece.moved()
    return piece
