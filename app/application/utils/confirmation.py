from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable

from app.application.exceptions import BookingValidationError
from app.application.utils.availability import participants_for_slots
from app.application.utils.corpus import CorpusEntry, GroupSnapshot
from app.application.utils.equipment import check_equipment_stock
from app.application.utils.overlap import detect_person_overlaps
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.inventory import EquipmentInventory
from app.domain.entities.period import Period, sort_periods
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey


@dataclass(frozen=True)
class ConfirmationOutcome:
    session: PracticeSession
    entries: tuple[FinalizedEntry, ...]

    @property
    def warning_count(self) -> int:
        return sum(len(entry.warnings) for entry in self.entries)


def parse_slot_keys(slot_keys: Iterable[SlotKey | str]) -> list[SlotKey]:
    parsed: list[SlotKey] = []
    for key in slot_keys:
        if isinstance(key, SlotKey):
            parsed.append(key)
            continue
        try:
            parsed.append(SlotKey.parse(key))
        except (ValueError, TypeError) as e:
            raise BookingValidationError(f"不正なコマ指定です: {key}") from e
    return parsed


def normalize_equipment(equipment: Iterable[str] | None) -> tuple[str, ...]:
    items: dict[str, None] = {}
    for item in equipment or []:
        label = (item or "").strip()
        if label:
            items.setdefault(label, None)
    return tuple(items)


def group_by_date(slots: Iterable[SlotKey]) -> dict[date, tuple[Period, ...]]:
    """Slot keys partitioned by date, dates ascending, periods in timetable order."""
    grouped: dict[date, list[Period]] = {}
    for slot in slots:
        grouped.setdefault(slot.date, []).append(slot.period)
    return {day: sort_periods(grouped[day]) for day in sorted(grouped)}


def finalize_confirmation(
    session: PracticeSession,
    group_sessions: Iterable[PracticeSession],
    slot_keys: Iterable[SlotKey | str],
    room: str,
    equipment: Iterable[str] | None,
    inventory: EquipmentInventory,
) -> ConfirmationOutcome:
    """
    Turn the coordinator's slot selection into finalized entries, one per date.

    Participants are resolved per entry and every entry is checked against the
    group's finalized history for double-booked members and equipment beyond stock.
    Findings are attached as warnings; they never stop the confirmation.
    Raises BookingValidationError without touching the session when the selection
    is empty, the room is blank, or a slot key is malformed.
    """
    slots = set(parse_slot_keys(slot_keys))
    if not slots:
        raise BookingValidationError("確定するコマを1つ以上選択してください。")
    room = (room or "").strip()
    if not room:
        raise BookingValidationError("練習部屋は必須です。")
    items = normalize_equipment(equipment)

    batch_id = uuid.uuid4().hex
    pending: list[FinalizedEntry] = []
    for day, periods in group_by_date(slots).items():
        group_slots = [SlotKey(date=day, period=p) for p in periods]
        pending.append(
            FinalizedEntry(
                date=day,
                periods=periods,
                room=room,
                equipment=items,
                participants=participants_for_slots(session, group_slots),
            )
        )

    # The stored copy of this session may be stale; check against the one being confirmed.
    corpus = [session if s.id == session.id else s for s in group_sessions]
    if not any(s.id == session.id for s in corpus):
        corpus.append(session)
    snapshot = GroupSnapshot.build(
        session.group_code,
        corpus,
        pending=[
            CorpusEntry(session_id=session.id, session_title=session.title, entry=entry, batch_id=batch_id)
            for entry in pending
        ],
    )

    entries: list[FinalizedEntry] = []
    for entry in pending:
        warnings = [o.message for o in detect_person_overlaps(entry, snapshot, batch_id)]
        warnings.extend(s.message for s in check_equipment_stock(entry, snapshot, inventory, batch_id))
        entries.append(replace(entry, warnings=tuple(warnings)))

    updated = replace(session, finalized=session.finalized + tuple(entries))
    return ConfirmationOutcome(session=updated, entries=tuple(entries))
