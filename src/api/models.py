"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameKind, Status

Side = str
MAX_PLAYERS = 10


def _not_blank(value: str, field_name: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise InvalidRequestError(f"{field_name} must not be empty.")
    return stripped


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    game: GameKind
    bot_enabled: bool = False
    # fixes every random choice of the session (shuffle, dice, bot jitter)
    seed: Optional[int] = None
    # only used by the games that allow more than two players (uno, snakes and ladders)
    players: Optional[int] = None

    @field_validator("players")
    @classmethod
    def validate_players(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        if not 2 <= value <= MAX_PLAYERS:
            raise InvalidRequestError(
                f"A game needs between 2 and {MAX_PLAYERS} players, got {value}."
            )
        return value


class GetSessionRequest(BaseModel):
    session_id: UUID


class DeleteSessionRequest(BaseModel):
    session_id: UUID


class ResetRequest(BaseModel):
    session_id: UUID


class BotTurnRequest(BaseModel):
    session_id: UUID


class LegalMovesRequest(BaseModel):
    session_id: UUID
    side: Side


class MoveRequest(BaseModel):
    session_id: UUID
    side: Side
    # notation of the game, e.g. "e2e4" (chess), "c3d4" (dama), "4" (tris), "play:017:red" (uno)
    move: str

    @field_validator(*["side", "move"])
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        return _not_blank(value, "side / move")


class RollRequest(BaseModel):
    session_id: UUID
    side: Side

    @field_validator("side")
    @classmethod
    def validate_side(cls, value: str) -> str:
        return _not_blank(value, "side")


class SelectRequest(BaseModel):
    """Click-style input: the first cell picks a piece up, the second one puts it down."""

    session_id: UUID
    side: Side
    cell: str

    @field_validator(*["side", "cell"])
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        return _not_blank(value, "side / cell")


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: UUID
    game: GameKind
    status: Status
    side_to_move: Optional[Side]
    winner: Optional[str]
    version: int
    bot_enabled: bool
    dice_count: int
    selection: Optional[str]
    # JSON-safe picture of the game state, in the shape the game's engine describes it
    snapshot: dict[str, Any]
    # False when the request was refused (illegal move, wrong turn, stale roll...). `message` says why.
    accepted: bool = True
    message: Optional[str] = None


class LegalMovesResponse(BaseModel):
    session_id: UUID
    side: Side
    legal_moves: list[str]
