"""Adapter exposing the Uno rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.uno import bot, game
from src.uno.game import DEFAULT_HAND_SIZE, UnoMove, UnoState


class UnoEngine:
    dice_count = 0

    def __init__(self, num_players: int = 2, hand_size: int = DEFAULT_HAND_SIZE) -> None:
        game.check_table_size(num_players, hand_size)
        self.num_players = num_players
        self.hand_size = hand_size

    def initialize(self, rng: Random) -> UnoState:
        return game.initialize(rng, self.num_players, self.hand_size)

    def sides(self, state: UnoState) -> tuple[str, ...]:
        return tuple(game.player_name(index) for index in range(state.num_players))

    def side_to_move(self, state: UnoState) -> Optional[str]:
        return None if state.winner else game.player_name(state.current)

    def legal_moves(self, state: UnoState, side: str) -> list[UnoMove]:
        return game.legal_moves(state, side)

    def apply_move(self, state: UnoState, move: UnoMove) -> UnoState:
        return game.apply_move(state, move)

    def is_terminal(self, state: UnoState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: UnoState, rng: Random) -> Optional[UnoMove]:
        return bot.bot_move(state, rng)

    def rejection_reason(self, state: UnoState, move: UnoMove) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: UnoState) -> bool:
        return False

    def roll(self, state: UnoState, dice: tuple[int, ...]) -> UnoState:
        return state

    def parse_move(self, notation: str) -> UnoMove:
        return game.move_from_notation(notation)

    def format_move(self, move: UnoMove) -> str:
        return game.move_to_notation(move)

    def move_endpoints(self, move: UnoMove) -> tuple[Optional[str], Optional[str]]:
        return None, game.move_to_notation(move)

    def describe(self, state: UnoState) -> dict[str, Any]:
        return {
            "hands": {
                game.player_name(index): [
                    {"id": card.id, "color": str(card.color), "type": str(card.type), "value": card.value}
                    for card in hand
                ]
                for index, hand in enumerate(state.hands)
            },
            "top_card": str(state.top_card),
            "current_color": str(state.current_color),
            "current": game.player_name(state.current),
            "direction": state.direction,
            "phase": str(state.phase),
            "draw_pile": len(state.draw_pile),
            "discard_pile": len(state.discard_pile),
        }
