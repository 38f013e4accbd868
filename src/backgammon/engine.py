"""Adapter exposing the backgammon rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.backgammon import bot, game
from src.backgammon.board import BAR, OFF, Color
from src.backgammon.game import BackgammonState, Move


class BackgammonEngine:
    dice_count = 2

    def initialize(self, rng: Random) -> BackgammonState:
        return game.initialize()

    def sides(self, state: BackgammonState) -> tuple[str, ...]:
        return (Color.WHITE, Color.BLACK)

    def side_to_move(self, state: BackgammonState) -> Optional[str]:
        return None if state.winner else str(state.color_to_move)

    def legal_moves(self, state: BackgammonState, side: str) -> list[Move]:
        return game.legal_moves(state, Color(side))

    def apply_move(self, state: BackgammonState, move: Move) -> BackgammonState:
        return game.apply_move(state, move)

    def is_terminal(self, state: BackgammonState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: BackgammonState, rng: Random) -> Optional[Move]:
        return bot.bot_move(state, rng)

    def rejection_reason(self, state: BackgammonState, move: Move) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: BackgammonState) -> bool:
        return game.is_awaiting_roll(state)

    def roll(self, state: BackgammonState, dice: tuple[int, ...]) -> BackgammonState:
        first, second = dice
        return game.roll_dice(state, (first, second))

    def parse_move(self, notation: str) -> Move:
        return Move.from_notation(notation)

    def format_move(self, move: Move) -> str:
        return move.to_notation()

    def move_endpoints(self, move: Move) -> tuple[Optional[str], Optional[str]]:
        start = "bar" if move.from_point == BAR else str(move.from_point)
        end = "off" if move.to_point == OFF else str(move.to_point)
        return start, end

    def describe(self, state: BackgammonState) -> dict[str, Any]:
        return {
            "points": [
                {"color": str(point.color), "count": point.count} if point else None
                for point in state.points
            ],
            "color_to_move": str(state.color_to_move),
            "dice": list(state.dice),
            "available": list(state.available),
            "bar": {
                str(color): game.bar_count(state, color) for color in Color
            },
            "borne_off": {
                str(color): game.borne_off_count(state, color) for color in Color
            },
        }
