"""
Rules of backgammon.

A turn has two phases:
1. awaiting roll: no dice available. `roll_dice` fills the pool (4 entries for doubles).
2. moving: every move consumes one die from the pool.
The turn passes as soon as the pool is empty or none of the remaining dice can be played.

Pieces on the bar must re-enter before anything else may move. Bearing off is allowed once all pieces
of a color are in its home board.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

from src.backgammon.board import (
    BAR,
    DIRECTION,
    HOME_POINTS,
    NUM_POINTS,
    OFF,
    PIECES_PER_COLOR,
    Color,
    Points,
    add_piece,
    entry_point,
    pips_to_bear_off,
    remove_piece,
    starting_points,
)
from src.core.exceptions import NotationError

MUST_ENTER_MESSAGE = "You must enter your pieces from the bar first"


@dataclass(frozen=True)
class Move:
    """
    A single piece moved by a single die.
    `from_point` is BAR when entering, `to_point` is OFF when bearing off.

    NOTE: the die is not part of the equality: "20-off" matches whichever die bears that piece off.
    """

    from_point: int
    to_point: int
    die: int = field(default=0, compare=False)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'11-16', 'bar-3', '20-off' or, to pick the die explicitly, '20-off/6'"""
        body, _, die = notation.partition("/")
        start, dash, end = body.partition("-")
        try:
            from_point = BAR if start == "bar" else int(start)
            to_point = OFF if end == "off" else int(end)
            die_value = int(die) if die else 0
        except ValueError as e:
            raise NotationError(f"Cannot interpret {notation!r} as a backgammon move.") from e
        if not dash:
            raise NotationError(f"Cannot interpret {notation!r} as a backgammon move.")
        return cls(from_point, to_point, die_value)

    def to_notation(self) -> str:
        start = "bar" if self.from_point == BAR else str(self.from_point)
        end = "off" if self.to_point == OFF else str(self.to_point)
        return f"{start}-{end}/{self.die}"


@dataclass(frozen=True)
class BackgammonState:
    points: Points
    color_to_move: Color = Color.WHITE
    # the last roll (for display) and the dice that can still be used this turn
    dice: tuple[int, ...] = ()
    available: tuple[int, ...] = ()
    white_bar: int = 0
    black_bar: int = 0
    white_borne_off: int = 0
    black_borne_off: int = 0
    winner: Optional[str] = None


def initialize() -> BackgammonState:
    return BackgammonState(points=starting_points())


def bar_count(state: BackgammonState, color: Color) -> int:
    return state.white_bar if color == Color.WHITE else state.black_bar


def borne_off_count(state: BackgammonState, color: Color) -> int:
    return state.white_borne_off if color == Color.WHITE else state.black_borne_off


def is_awaiting_roll(state: BackgammonState) -> bool:
    return state.winner is None and not state.available


def dice_pool(dice: tuple[int, int]) -> tuple[int, ...]:
    """Doubles are played four times"""
    first, second = dice
    return (first,) * 4 if first == second else (first, second)


def roll_dice(state: BackgammonState, dice: tuple[int, int]) -> BackgammonState:
    """
    Start the moving phase with the given dice (the caller rolls them).
    When none of the dice can be played, the turn passes right away.
    """
    if not is_awaiting_roll(state) or not all(1 <= die <= 6 for die in dice):
        return state
    rolled = replace(state, dice=tuple(dice), available=dice_pool(dice))
    if not legal_moves(rolled, rolled.color_to_move):
        return _end_turn(rolled)
    return rolled


def can_bear_off(state: BackgammonState, color: Color) -> bool:
    if bar_count(state, color) > 0:
        return False
    home = HOME_POINTS[color]
    return all(
        index in home
        for index, point in enumerate(state.points)
        if point is not None and point.color == color
    )


def legal_moves(state: BackgammonState, color: Color) -> list[Move]:
    """
    Every (piece, die) combination that can be played. Each die value is only tried once, smallest first.

    With pieces on the bar, only entering moves are legal.
    """
    if state.winner is not None or color != state.color_to_move:
        return []
    dice = sorted(set(state.available))

    if bar_count(state, color) > 0:
        return [
            Move(BAR, entry_point(color, die), die)
            for die in dice
            if not _is_blocked(state, entry_point(color, die), color)
        ]

    bearing_off = can_bear_off(state, color)
    moves: list[Move] = []
    for index, point in enumerate(state.points):
        if point is None or point.color != color:
            continue
        for die in dice:
            target = index + DIRECTION[color] * die
            if 0 <= target < NUM_POINTS:
                if not _is_blocked(state, target, color):
                    moves.append(Move(index, target, die))
            elif bearing_off and _may_bear_off(state, color, index, die):
                moves.append(Move(index, OFF, die))
    return moves


def apply_move(state: BackgammonState, move: Move) -> BackgammonState:
    legal = _resolve(state, move)
    if legal is None:
        return state

    color = state.color_to_move
    points = state.points
    bars = {Color.WHITE: state.white_bar, Color.BLACK: state.black_bar}
    borne_off = {Color.WHITE: state.white_borne_off, Color.BLACK: state.black_borne_off}

    # pick up the piece
    if legal.from_point == BAR:
        bars[color] -= 1
    else:
        points = remove_piece(points, legal.from_point)

    # put it down
    if legal.to_point == OFF:
        borne_off[color] += 1
    else:
        occupant = points[legal.to_point]
        if occupant is not None and occupant.color != color:
            # a lone enemy piece gets hit and goes to the bar
            points = remove_piece(points, legal.to_point)
            bars[color.opponent] += 1
        points = add_piece(points, legal.to_point, color)

    available = list(state.available)
    available.remove(legal.die)

    next_state = replace(
        state,
        points=points,
        available=tuple(available),
        white_bar=bars[Color.WHITE],
        black_bar=bars[Color.BLACK],
        white_borne_off=borne_off[Color.WHITE],
        black_borne_off=borne_off[Color.BLACK],
    )

    if borne_off[color] == PIECES_PER_COLOR:
        return replace(next_state, winner=str(color), available=())

    if not next_state.available or not legal_moves(next_state, color):
        return _end_turn(next_state)
    return next_state


def is_terminal(state: BackgammonState) -> Optional[str]:
    return state.winner


def rejection_reason(state: BackgammonState, move: Move) -> str:
    if state.winner is not None:
        return "The game is over"
    if not state.available:
        return "Roll the dice first"
    color = state.color_to_move
    if bar_count(state, color) > 0 and move.from_point != BAR:
        return MUST_ENTER_MESSAGE
    if move.to_point == OFF and not can_bear_off(state, color):
        return "You can only bear off once all your pieces are in your home board"
    if 0 <= move.to_point < NUM_POINTS and _is_blocked(state, move.to_point, color):
        return f"Point {move.to_point} is blocked"
    return "No remaining die allows that move"


# -- PRIVATE HELPERS ---
def _resolve(state: BackgammonState, move: Move) -> Optional[Move]:
    """The legal move matching the request. Prefer the requested die when the same piece move fits several dice."""
    matches = [legal for legal in legal_moves(state, state.color_to_move) if legal == move]
    exact = [legal for legal in matches if legal.die == move.die]
    return (exact or matches or [None])[0]


def _is_blocked(state: BackgammonState, index: int, color: Color) -> bool:
    point = state.points[index]
    return point is not None and point.color != color and point.count >= 2


def _may_bear_off(state: BackgammonState, color: Color, index: int, die: int) -> bool:
    """Exact die, or a larger die when no piece of this color stands farther away from home"""
    needed = pips_to_bear_off(color, index)
    if die == needed:
        return True
    if die < needed:
        return False
    farther = range(0, index) if color == Color.WHITE else range(index + 1, NUM_POINTS)
    return not any(
        state.points[other] is not None and state.points[other].color == color
        for other in farther
    )


def _end_turn(state: BackgammonState) -> BackgammonState:
    return replace(state, color_to_move=state.color_to_move.opponent, available=())
