"""Adapter exposing the dama rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.dama import bot, game
from src.dama.board import Color
from src.dama.game import DamaState
from src.dama.moves import Move


class DamaEngine:
    dice_count = 0

    def initialize(self, rng: Random) -> DamaState:
        return game.initialize()

    def sides(self, state: DamaState) -> tuple[str, ...]:
        return (Color.RED, Color.BLACK)

    def side_to_move(self, state: DamaState) -> Optional[str]:
        return None if state.winner else str(state.color_to_move)

    def legal_moves(self, state: DamaState, side: str) -> list[Move]:
        return game.legal_moves(state, Color(side))

    def apply_move(self, state: DamaState, move: Move) -> DamaState:
        return game.apply_move(state, move)

    def is_terminal(self, state: DamaState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: DamaState, rng: Random) -> Optional[Move]:
        return bot.bot_move(state, rng)

    def rejection_reason(self, state: DamaState, move: Move) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: DamaState) -> bool:
        return False

    def roll(self, state: DamaState, dice: tuple[int, ...]) -> DamaState:
        return state

    def parse_move(self, notation: str) -> Move:
        return Move.from_notation(notation)

    def format_move(self, move: Move) -> str:
        return move.to_notation()

    def move_endpoints(self, move: Move) -> tuple[Optional[str], Optional[str]]:
        return move.from_square.to_algebraic(), move.to_square.to_algebraic()

    def describe(self, state: DamaState) -> dict[str, Any]:
        return {
            "board": state.board.to_rows(),
            "color_to_move": str(state.color_to_move),
            "must_continue_from": (
                state.must_continue_from.to_algebraic()
                if state.must_continue_from
                else None
            ),
            "must_capture": bool(game.all_captures(state.board, state.color_to_move)),
        }
