from __future__ import annotations

import logging
from typing import Iterable

from app.application.exceptions import PermissionDeniedError, SessionNotFoundError
from app.application.ports.session_store import SessionStorePort
from app.application.utils.confirmation import ConfirmationOutcome, finalize_confirmation
from app.domain.entities.inventory import EquipmentInventory
from app.domain.entities.slot import SlotKey


class FinalizeConfirmationUseCase:
    def __init__(self, store: SessionStorePort, inventory: EquipmentInventory) -> None:
        self._store = store
        self._inventory = inventory
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        session_id: str,
        actor: str,
        slot_keys: Iterable[SlotKey | str],
        room: str,
        equipment: Iterable[str] | None = None,
    ) -> ConfirmationOutcome:
        session = self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if not session.is_coordinator(actor):
            self._logger.warning(
                "Confirmation refused",
                extra={"session_id": session_id, "member": actor, "reason": "not coordinator"},
            )
            raise PermissionDeniedError("練習コマを確定できるのは作成者のみです。")

        group_sessions = self._store.list_sessions(session.group_code)
        outcome = finalize_confirmation(
            session=session,
            group_sessions=group_sessions,
            slot_keys=slot_keys,
            room=room,
            equipment=equipment,
            inventory=self._inventory,
        )
        self._store.put_session(outcome.session)

        self._logger.info(
            "Practice slots finalized",
            extra={
                "session_id": session.id,
                "group_code": session.group_code,
                "entry_count": len(outcome.entries),
                "warning_count": outcome.warning_count,
            },
        )
        if outcome.warning_count:
            self._logger.warning(
                "Finalized with warnings",
                extra={"session_id": session.id, "reason": " / ".join(w for e in outcome.entries for w in e.warnings)},
            )
        return outcome
