"""
Type definitions used across layers
"""

from enum import StrEnum


class GameKind(StrEnum):
    CHESS = "chess"
    DAMA = "dama"
    TRIS = "tris"
    SNAKES_AND_LADDERS = "snakes-and-ladders"
    BACKGAMMON = "backgammon"
    UNO = "uno"


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- NOTE each game keeps its own Color enum (chess: white/black, dama: red/black, uno: player seats, ...).
# --- Only the names of sides cross the service boundary, as plain strings.
TIE = "tie"
DRAW = "draw"
