from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from app.application.exceptions import BookingValidationError, SessionNotFoundError
from app.application.ports.session_store import SessionStorePort
from app.application.utils.availability import normalize_slots
from app.application.utils.confirmation import parse_slot_keys
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey


def add_participant(session: PracticeSession, member: str) -> PracticeSession:
    if member in session.participants:
        return session
    return replace(session, participants=session.participants + (member,))


class SubmitAvailabilityUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, session_id: str, member: str, slot_keys: Iterable[SlotKey | str]) -> PracticeSession:
        """
        Replace the member's free slots.
        Slots outside the session's date range and slots already finalized are dropped.
        """
        member = (member or "").strip()
        if not member:
            raise BookingValidationError("ニックネームは空にできません。")
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        slots = normalize_slots(
            s for s in parse_slot_keys(slot_keys)
            if session.covers_date(s.date) and not session.is_slot_finalized(s)
        )
        availability = dict(session.availability)
        availability[member] = slots
        updated = add_participant(replace(session, availability=availability), member)
        self._store.put_session(updated)

        self._logger.info(
            "Availability saved",
            extra={"session_id": session_id, "member": member, "slot_count": len(slots)},
        )
        return updated


class JoinSessionUseCase:
    def __init__(self, store: SessionStorePort) -> None:
        self._store = store

    def execute(self, session_id: str, member: str) -> PracticeSession:
        member = (member or "").strip()
        if not member:
            raise BookingValidationError("ニックネームは空にできません。")
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        updated = add_participant(session, member)
        if updated is not session:
            self._store.put_session(updated)
        return updated
