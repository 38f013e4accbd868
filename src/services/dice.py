"""
Dice rolling and the roll "animation".

The animation is a sequence of random faces shown one after the other before the result appears.
The last frame IS the result.
"""

import asyncio
from random import Random
from typing import Callable, Optional

DIE_FACES = range(1, 7)

Dice = tuple[int, ...]


def roll(rng: Random, dice_count: int) -> Dice:
    return tuple(rng.choice(DIE_FACES) for _ in range(dice_count))


def animate_roll(rng: Random, dice_count: int, frames: int) -> list[Dice]:
    """`frames` resampled faces followed by the final roll."""
    return [roll(rng, dice_count) for _ in range(frames)] + [roll(rng, dice_count)]


async def reveal(
    frames: list[Dice],
    frame_seconds: float,
    on_frame: Optional[Callable[[Dice], None]] = None,
) -> Dice:
    """Hand every frame to `on_frame`, waiting `frame_seconds` in between. Returns the result (the last frame)."""
    for index, frame in enumerate(frames):
        if on_frame is not None:
            on_frame(frame)
        if index < len(frames) - 1:
            await asyncio.sleep(frame_seconds)
    return frames[-1]
