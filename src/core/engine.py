"""
Contract between the rules engines and the session service.

Every game lives in its own package as a set of pure functions over frozen dataclasses.
Each package also ships a small `<Game>Engine` adapter that bundles those functions, and that adapter
structurally satisfies the `Engine` protocol below (no shared base class).
"""

from random import Random
from typing import Any, Optional, Protocol, TypeVar

StateT = TypeVar("StateT")
MoveT = TypeVar("MoveT")


class Engine(Protocol[StateT, MoveT]):
    """Just the parts the session service needs"""

    # number of dice the presentation should animate when rolling (0: no dice in this game)
    dice_count: int

    def initialize(self, rng: Random) -> StateT: ...
    def sides(self, state: StateT) -> tuple[str, ...]: ...
    def side_to_move(self, state: StateT) -> Optional[str]: ...
    def legal_moves(self, state: StateT, side: str) -> list[MoveT]: ...
    def apply_move(self, state: StateT, move: MoveT) -> StateT: ...
    def is_terminal(self, state: StateT) -> Optional[str]: ...
    def bot_move(self, state: StateT, rng: Random) -> Optional[MoveT]: ...
    def rejection_reason(self, state: StateT, move: MoveT) -> str: ...
    def needs_roll(self, state: StateT) -> bool: ...
    def roll(self, state: StateT, dice: tuple[int, ...]) -> StateT: ...
    def parse_move(self, notation: str) -> MoveT: ...
    def format_move(self, move: MoveT) -> str: ...
    def move_endpoints(self, move: MoveT) -> tuple[Optional[str], Optional[str]]: ...
    def describe(self, state: StateT) -> dict[str, Any]: ...
