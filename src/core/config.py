"""
Runtime settings.

Defaults match the timings the presentation layer expects. Every field can be overridden through an
environment variable named TABLETOP_<FIELD NAME IN CAPITALS>, e.g. TABLETOP_BOT_DELAY_SECONDS=0.5
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from src.uno.cards import MAX_DEALT_CARDS

ENV_PREFIX = "TABLETOP_"


class Settings(BaseModel):
    """Timing and table-size settings for the session service."""

    # artificial "thinking" delay before a bot move is applied
    bot_delay_seconds: float = Field(default=1.5, ge=0)
    # dice animation: number of resampled faces shown before the result, and time between them
    dice_frames: int = Field(default=10, ge=0)
    dice_frame_seconds: float = Field(default=0.1, ge=0)
    uno_hand_size: int = Field(default=7, ge=1, le=20)
    uno_players: int = Field(default=2, ge=2, le=10)
    snakes_players: int = Field(default=2, ge=2, le=6)

    @model_validator(mode="after")
    def check_uno_deal(self) -> "Settings":
        if self.uno_players * self.uno_hand_size > MAX_DEALT_CARDS:
            raise ValueError(
                f"{self.uno_players} players with {self.uno_hand_size} cards each need more than "
                f"the {MAX_DEALT_CARDS} cards a deal can use."
            )
        return self


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the defaults, overridden by any TABLETOP_* variables found in `environ` (default: os.environ)"""
    environ = os.environ if environ is None else environ
    overrides = {
        name: environ[f"{ENV_PREFIX}{name.upper()}"]
        for name in Settings.model_fields
        if f"{ENV_PREFIX}{name.upper()}" in environ
    }
    # pydantic takes care of converting the strings into the proper types (and of validating the ranges)
    return Settings.model_validate(overrides)
