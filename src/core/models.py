"""
Boundary layer data model(s).

The service keeps one SessionModel per running game and hands it to the repository.
(Decouples the engine-specific state from the bookkeeping the service needs: version, bot toggle, random source, selection.)
"""

from dataclasses import dataclass, field
from random import Random
from typing import Any, Optional

from src.core.shared_types import GameKind


@dataclass
class SessionModel:
    """One authoritative game state plus the information needed to drive it."""

    game: GameKind
    state: Any
    rng: Random
    bot_enabled: bool = False
    seed: Optional[int] = None
    # bumped on every accepted change and on reset. Scheduled callbacks compare against it.
    version: int = 0
    # transient pick-up of a cell (click-to-select, click-to-move)
    selection: Optional[str] = None
    options: dict[str, Any] = field(default_factory=dict)
