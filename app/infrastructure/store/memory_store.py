from __future__ import annotations

import threading

from app.application.ports.session_store import SessionStorePort
from app.domain.entities.practice_session import PracticeSession


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, PracticeSession] = {}
        self._lock = threading.Lock()

    def get_session(self, session_id: str) -> PracticeSession | None:
        return self._sessions.get(session_id)

    def put_session(self, session: PracticeSession) -> None:
        with self._lock:
            self._sessions[session.id] = session

    def list_sessions(self, group_code: str) -> list[PracticeSession]:
        return [s for s in self._sessions.values() if s.group_code == group_code]

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None
