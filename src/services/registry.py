"""Which engine drives which game."""

from typing import Any, Callable, Optional

from src.backgammon.engine import BackgammonEngine
from src.chess.engine import ChessEngine
from src.core.config import Settings
from src.core.engine import Engine
from src.core.shared_types import GameKind
from src.dama.engine import DamaEngine
from src.snakes.engine import SnakesEngine
from src.tris.engine import TrisEngine
from src.uno.engine import UnoEngine

EngineFactory = Callable[[Settings, Optional[int]], Engine[Any, Any]]

ENGINE_FACTORIES: dict[GameKind, EngineFactory] = {
    GameKind.CHESS: lambda settings, players: ChessEngine(),
    GameKind.DAMA: lambda settings, players: DamaEngine(),
    GameKind.TRIS: lambda settings, players: TrisEngine(),
    GameKind.BACKGAMMON: lambda settings, players: BackgammonEngine(),
    GameKind.SNAKES_AND_LADDERS: lambda settings, players: SnakesEngine(
        players or settings.snakes_players
    ),
    GameKind.UNO: lambda settings, players: UnoEngine(
        players or settings.uno_players, settings.uno_hand_size
    ),
}


def build_engine(
    game: GameKind, settings: Settings, players: Optional[int] = None
) -> Engine[Any, Any]:
    """`players` only matters for the games with a variable number of seats."""
    return ENGINE_FACTORIES[game](settings, players)
