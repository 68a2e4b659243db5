from __future__ import annotations

import logging
import time
from datetime import date

from app.application.exceptions import BookingValidationError
from app.application.ports.session_store import SessionStorePort
from app.domain.entities.practice_session import PracticeSession


class CreateSessionUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        creator: str,
        group_code: str,
        title: str,
        start_date: date,
        end_date: date,
        now_ts: float | None = None,
    ) -> PracticeSession:
        """Create a session for one piece. The creator is its first participant."""
        creator = (creator or "").strip()
        group_code = (group_code or "").strip()
        title = (title or "").strip()
        if not (creator and group_code and title):
            raise BookingValidationError("すべての項目を入力してください。")
        if start_date > end_date:
            raise BookingValidationError("終了日は開始日より後に設定してください。")

        millis = int((now_ts if now_ts is not None else time.time()) * 1000)
        # Ids must stay unique within the store even for sessions created in the same millisecond.
        while self._store.get_session(f"{group_code}-{millis}") is not None:
            millis += 1
        session = PracticeSession(
            id=f"{group_code}-{millis}",
            creator=creator,
            group_code=group_code,
            title=title,
            start_date=start_date,
            end_date=end_date,
            participants=(creator,),
        )
        self._store.put_session(session)
        self._logger.info("Session created", extra={"session_id": session.id, "group_code": group_code})
        return session
