from __future__ import annotations

import logging
from datetime import date

from app.application.exceptions import PermissionDeniedError, SessionNotFoundError
from app.application.ports.session_store import SessionStorePort
from app.domain.entities.practice_session import PracticeSession


class ListSessionsUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store

    def execute(self, group_code: str, member: str, today: date | None = None) -> list[PracticeSession]:
        """Sessions in the group the member created or joined that have not ended yet."""
        today = today or date.today()
        return [
            s for s in self._store.list_sessions(group_code)
            if s.involves(member) and s.end_date >= today
        ]


class GetSessionUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store

    def execute(self, session_id: str) -> PracticeSession:
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session


class DeleteSessionUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, session_id: str, actor: str) -> None:
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if not session.is_coordinator(actor):
            raise PermissionDeniedError("練習日程を削除できるのは作成者のみです。")
        if not self._store.delete_session(session_id):
            raise SessionNotFoundError(session_id)
        self._logger.info("Session deleted", extra={"session_id": session_id})
