"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define candidate move sets for each piece type.


Legality (not leaving your own king in check) is checked later by the rules in game.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import NotationError


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]

# rows count downwards: white pawns walk towards row 0, black pawns towards row 7
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_DIMENSIONS[0] - 1}

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = DIAGONALS + STRAIGHTS


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g1f3": (knight) jumps from g1 to f3

        NOTE: Promotion is always to a queen, so a trailing promotion character is accepted but ignored.
        """
        if len(uci) not in (4, 5):
            raise NotationError(f"Cannot interpret {uci!r} as a UCI move.")
        try:
            from_sq = Square.from_algebraic(uci[:2])
            to_sq = Square.from_algebraic(uci[2:4])
        except ValueError as e:
            raise NotationError(f"Cannot interpret {uci!r} as a UCI move.") from e
        if not (from_sq.is_within_bounds() and to_sq.is_within_bounds()):
            raise NotationError(f"Move {uci!r} leaves the board.")
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. Every square in between must be empty (path clearing).
    """
    player_color = board.piece(square).color
    moves: list[Move] = []
    for dr, dc in directions:
        target_square = square
        while True:
            target_square = target_square.shifted(dr, dc)
            if not target_square.is_within_bounds():
                break

            occupant = board.piece(target_square)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.color != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.piece(square).color
    moves: list[Move] = []
    for dr, dc in deltas:
        target_square = square.shifted(dr, dc)
        if not target_square.is_within_bounds():
            continue

        occupant = board.piece(target_square)
        if occupant is None or occupant.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square only.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally (forward)
    """
    color = board.piece(square).color
    direction = PAWN_DIRECTION[color]
    moves: list[Move] = []

    one_step = square.shifted(direction, 0)
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        moves.append(Move(square, one_step))

        two_steps = square.shifted(2 * direction, 0)
        if square.row == PAWN_START_ROW[color] and board.piece(two_steps) is None:
            moves.append(Move(square, two_steps))

    for dc in (-1, 1):
        target_square = square.shifted(direction, dc)
        if not target_square.is_within_bounds():
            continue
        occupant = board.piece(target_square)
        if occupant is not None and occupant.color != color:
            moves.append(Move(square, target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_bishop_moves(square, board) + candidate_rook_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """The king can move by a single square at the time."""
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and
    that is allowed to move along the given direction?"_

    ---
    Returns TRUE if the first piece encountered along one of the directions is such a piece.
    """
    for dr, dc in directions:
        target_square = square
        while True:
            target_square = target_square.shifted(dr, dc)
            if not target_square.is_within_bounds():
                break

            piece_found = board.piece(target_square)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    The equivalent of raycasting_attack() for pawns, kings, and knights.

    ---
    Returns TRUE if a piece of the specified type and color stands a single step away.
    """
    for dr, dc in deltas:
        target_square = square.shifted(dr, dc)
        if not target_square.is_within_bounds():
            continue

        # NOTE: has_moved does not matter for attacks, so compare type and color only
        piece_found = board.piece(target_square)
        if (
            piece_found is not None
            and piece_found.type == by_piece_type
            and piece_found.color == by_color
        ):
            return True

    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric: to check IF a white pawn could take on your square -->
    Must look one row DOWN the board (white pawns move up). Hence, vectors are opposite to the pawn's own direction.
    """
    back = -PAWN_DIRECTION[by_color]
    inverse_pawn_take_deltas: list[Vector] = [(back, 1), (back, -1)]
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


def is_attacked_on_diagonal(square: Square, by_color: Color, board: Board) -> bool:
    """Bishops and the Queen"""
    return raycasting_attack(
        square, by_color, (PieceType.BISHOP, PieceType.QUEEN), board, DIAGONALS
    )


def is_attacked_on_straight(square: Square, by_color: Color, board: Board) -> bool:
    """Rooks and the Queen"""
    return raycasting_attack(
        square, by_color, (PieceType.ROOK, PieceType.QUEEN), board, STRAIGHTS
    )


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: list[IsAttackedFn] = [
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_by_king,
    is_attacked_on_diagonal,
    is_attacked_on_straight,
]


def is_square_attacked(square: Square, by_color: Color, board: Board) -> bool:
    return any(rule(square, by_color, board) for rule in ATTACK_RULES)


# -- PAWN PROMOTION --
def is_pawn_move_to_promotion_row(move: Move, board: Board) -> bool:
    """check if the move is a pawn move reaching the far row for its color"""
    moving_piece = board.piece(move.from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return move.to_square.row == PROMOTION_ROW[moving_piece.color]
