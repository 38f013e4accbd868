"""Adapter exposing the Tris rules through the Engine protocol used by the session service."""

from random import Random
from typing import Any, Optional

from src.tris import bot, game
from src.tris.game import Mark, Move, TrisState


class TrisEngine:
    dice_count = 0

    def initialize(self, rng: Random) -> TrisState:
        return game.initialize()

    def sides(self, state: TrisState) -> tuple[str, ...]:
        return (Mark.X, Mark.O)

    def side_to_move(self, state: TrisState) -> Optional[str]:
        return None if game.is_terminal(state) is not None else str(state.current)

    def legal_moves(self, state: TrisState, side: str) -> list[Move]:
        return game.legal_moves(state, Mark(side))

    def apply_move(self, state: TrisState, move: Move) -> TrisState:
        return game.apply_move(state, move)

    def is_terminal(self, state: TrisState) -> Optional[str]:
        return game.is_terminal(state)

    def bot_move(self, state: TrisState, rng: Random) -> Optional[Move]:
        return bot.bot_move(state, rng)

    def rejection_reason(self, state: TrisState, move: Move) -> str:
        return game.rejection_reason(state, move)

    def needs_roll(self, state: TrisState) -> bool:
        return False

    def roll(self, state: TrisState, dice: tuple[int, ...]) -> TrisState:
        return state

    def parse_move(self, notation: str) -> Move:
        return Move.from_notation(notation)

    def format_move(self, move: Move) -> str:
        return move.to_notation()

    def move_endpoints(self, move: Move) -> tuple[Optional[str], Optional[str]]:
        # nothing gets picked up: a click on a cell is the whole move
        return None, move.to_notation()

    def describe(self, state: TrisState) -> dict[str, Any]:
        return {
            "cells": [str(cell) if cell else None for cell in state.cells],
            "current": str(state.current),
        }
