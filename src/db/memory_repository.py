"""Dictionary-backed implementation of the SessionRepository"""

from uuid import UUID, uuid4

from src.core.models import SessionModel


class InMemorySessionRepository:
    """Keeps the sessions of this process in a dictionary."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, SessionModel] = {}

    def get_session(self, session_id: UUID) -> SessionModel | None:
        return self._sessions.get(session_id)

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        session_id = uuid4()
        self._sessions[session_id] = session
        return session, session_id

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        if session_id not in self._sessions:
            return None
        self._sessions[session_id] = session
        return session

    def delete_session(self, session_id: UUID) -> SessionModel | None:
        return self._sessions.pop(session_id, None)

    def session_ids(self) -> list[UUID]:
        return list(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()
