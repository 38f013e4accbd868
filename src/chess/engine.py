"""Adapter exposing the chess rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.chess import bot, game
from src.chess.game import ChessState
from src.chess.moves import Move
from src.chess.pieces import Color


class ChessEngine:
    dice_count = 0

    def initialize(self, rng: Random) -> ChessState:
        return game.initialize()

    def sides(self, state: ChessState) -> tuple[str, ...]:
        return (Color.WHITE, Color.BLACK)

    def side_to_move(self, state: ChessState) -> Optional[str]:
        return None if state.winner else str(state.color_to_move)

    def legal_moves(self, state: ChessState, side: str) -> list[Move]:
        return game.legal_moves(state, Color(side))

    def apply_move(self, state: ChessState, move: Move) -> ChessState:
        return game.apply_move(state, move)

    def is_terminal(self, state: ChessState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: ChessState, rng: Random) -> Optional[Move]:
        return bot.bot_move(state, rng)

    def rejection_reason(self, state: ChessState, move: Move) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: ChessState) -> bool:
        return False

    def roll(self, state: ChessState, dice: tuple[int, ...]) -> ChessState:
        return state

    def parse_move(self, notation: str) -> Move:
        return Move.from_uci(notation)

    def format_move(self, move: Move) -> str:
        return move.to_uci()

    def move_endpoints(self, move: Move) -> tuple[Optional[str], Optional[str]]:
        return move.from_square.to_algebraic(), move.to_square.to_algebraic()

    def describe(self, state: ChessState) -> dict[str, Any]:
        return {
            "fen": state.to_fen(),
            "color_to_move": str(state.color_to_move),
            "in_check": game.is_check(state, state.color_to_move),
            "moves": [move.to_uci() for move in state.moves],
            "material": {
                str(color): points
                for color, points in state.board.count_material().items()
            },
        }
