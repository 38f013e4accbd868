"""Unit tests for /src/services/scheduler.py and /src/services/dice.py"""

import asyncio
from random import Random
from uuid import UUID, uuid4

import pytest

from src.services.dice import animate_roll, reveal, roll
from src.services.scheduler import TurnScheduler


# -- DICE --
@pytest.mark.parametrize("dice_count", [1, 2])
def test_roll(dice_count: int) -> None:
    dice = roll(Random(0), dice_count)
    assert len(dice) == dice_count
    assert all(1 <= die <= 6 for die in dice)


def test_animation_ends_with_the_result() -> None:
    frames = animate_roll(Random(4), dice_count=2, frames=10)
    assert len(frames) == 11
    assert all(len(frame) == 2 for frame in frames)
    assert frames == animate_roll(Random(4), dice_count=2, frames=10)


def test_reveal_shows_every_frame() -> None:
    frames = [(1,), (5,), (3,)]
    shown: list[tuple[int, ...]] = []
    result = asyncio.run(reveal(frames, 0.0, shown.append))
    assert result == (3,)
    assert shown == frames


# -- SCHEDULER --
def test_scheduled_callback_fires_with_its_version() -> None:
    calls: list[tuple[UUID, int]] = []
    session_id = uuid4()

    async def scenario() -> None:
        scheduler = TurnScheduler()
        scheduler.schedule(0.0, session_id, 3, lambda sid, version: calls.append((sid, version)))
        assert scheduler.pending(session_id) is not None
        await asyncio.sleep(0.02)
        assert scheduler.pending(session_id) is None

    asyncio.run(scenario())
    assert calls == [(session_id, 3)]


def test_cancelled_callback_never_fires() -> None:
    calls: list[int] = []
    session_id = uuid4()

    async def scenario() -> None:
        scheduler = TurnScheduler()
        task = scheduler.schedule(0.01, session_id, 1, lambda sid, version: calls.append(version))
        assert scheduler.cancel(session_id)
        assert task.cancelled
        assert not scheduler.cancel(session_id)
        await asyncio.sleep(0.03)

    asyncio.run(scenario())
    assert calls == []


def test_rescheduling_replaces_the_pending_task() -> None:
    calls: list[int] = []
    session_id = uuid4()

    async def scenario() -> None:
        scheduler = TurnScheduler()
        scheduler.schedule(0.01, session_id, 1, lambda sid, version: calls.append(version))
        scheduler.schedule(0.01, session_id, 2, lambda sid, version: calls.append(version))
        await asyncio.sleep(0.03)

    asyncio.run(scenario())
    assert calls == [2]


def test_schedule_needs_an_event_loop() -> None:
    with pytest.raises(RuntimeError):
        TurnScheduler().schedule(0.0, uuid4(), 0, lambda sid, version: None)
