"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest

from src.core.config import Settings
from src.db.memory_repository import InMemorySessionRepository


@pytest.fixture
def repository() -> Generator[InMemorySessionRepository, None, None]:
    """Fresh in-memory repository. Cleared at teardown to keep tests independent of each other."""
    repo = InMemorySessionRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def fast_settings() -> Settings:
    """No waiting around in tests: (almost) zero bot delay and dice animation"""
    return Settings(bot_delay_seconds=0.01, dice_frames=3, dice_frame_seconds=0.0)
