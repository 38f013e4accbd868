"""Adapter exposing the Snakes & Ladders rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.snakes import game
from src.snakes.game import LADDERS, SNAKES, Roll, SnakesState


class SnakesEngine:
    dice_count = 1

    def __init__(self, num_players: int = 2) -> None:
        self.num_players = num_players

    def initialize(self, rng: Random) -> SnakesState:
        return game.initialize(self.num_players)

    def sides(self, state: SnakesState) -> tuple[str, ...]:
        return tuple(game.player_name(index) for index in range(len(state.positions)))

    def side_to_move(self, state: SnakesState) -> Optional[str]:
        return None if state.winner else game.player_name(state.current)

    def legal_moves(self, state: SnakesState, side: str) -> list[Roll]:
        return game.legal_moves(state, side)

    def apply_move(self, state: SnakesState, move: Roll) -> SnakesState:
        return game.apply_move(state, move)

    def is_terminal(self, state: SnakesState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: SnakesState, rng: Random) -> Optional[Roll]:
        return game.bot_move(state, rng)

    def rejection_reason(self, state: SnakesState, move: Roll) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: SnakesState) -> bool:
        return state.winner is None

    def roll(self, state: SnakesState, dice: tuple[int, ...]) -> SnakesState:
        """Rolling is the whole turn"""
        return game.apply_move(state, Roll(dice[0]))

    def parse_move(self, notation: str) -> Roll:
        return Roll.from_notation(notation)

    def format_move(self, move: Roll) -> str:
        return move.to_notation()

    def move_endpoints(self, move: Roll) -> tuple[Optional[str], Optional[str]]:
        return None, None

    def describe(self, state: SnakesState) -> dict[str, Any]:
        return {
            "positions": {
                game.player_name(index): position
                for index, position in enumerate(state.positions)
            },
            "current": game.player_name(state.current),
            "last_roll": state.last_roll,
            "snakes": SNAKES,
            "ladders": LADDERS,
        }
