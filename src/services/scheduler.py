"""
Delayed, cancellable callbacks on the asyncio event loop.

A scheduled task remembers the version of the session at the moment it was scheduled.
The callback receives that version and has to compare it with the current one before touching the session:
a reset (or any other accepted change) in the meantime turns it into a no-op.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

logger = logging.getLogger(__name__)

Callback = Callable[[UUID, int], None]


@dataclass
class ScheduledTask:
    session_id: UUID
    version: int
    handle: asyncio.TimerHandle

    def cancel(self) -> None:
        self.handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self.handle.cancelled()


class TurnScheduler:
    """At most one pending task per session: scheduling a new one cancels the previous one."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._pending: dict[UUID, ScheduledTask] = {}

    def schedule(
        self, delay: float, session_id: UUID, version: int, callback: Callback
    ) -> ScheduledTask:
        """Must be called from within a running event loop, unless a loop was given to the constructor."""
        loop = self._loop or asyncio.get_running_loop()
        self.cancel(session_id)
        handle = loop.call_later(delay, self._fire, session_id, version, callback)
        task = ScheduledTask(session_id, version, handle)
        self._pending[session_id] = task
        logger.debug("Scheduled task for session %s at version %d in %.2fs", session_id, version, delay)
        return task

    def cancel(self, session_id: UUID) -> bool:
        """Cancel the pending task of the session. True if there was one."""
        task = self._pending.pop(session_id, None)
        if task is None:
            return False
        task.cancel()
        logger.debug("Cancelled task for session %s (version %d)", session_id, task.version)
        return True

    def pending(self, session_id: UUID) -> Optional[ScheduledTask]:
        return self._pending.get(session_id)

    def _fire(self, session_id: UUID, version: int, callback: Callback) -> None:
        task = self._pending.get(session_id)
        if task is not None and task.version == version:
            del self._pending[session_id]
        callback(session_id, version)
