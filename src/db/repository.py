"""Protocol repository (in memory for now: game state is not persisted across processes)"""

from typing import Protocol
from uuid import UUID

from src.core.models import SessionModel


class SessionRepository(Protocol):
    """Storage of the running game sessions"""

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        ...

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""
        ...

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Replace the stored session (None if there is no such record)."""
        ...

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        """Remove a session's record."""
        ...
