from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from app.domain.entities.period import Period
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey


@dataclass(frozen=True)
class SlotSummary:
    slot: SlotKey
    available_count: int
    finalized: bool


def participants_for_slots(session: PracticeSession, slots: Sequence[SlotKey]) -> tuple[str, ...]:
    """
    Members free on at least one of the given slots.
    A member who is free for any period of a slot-group takes part in the whole group.
    Order is first-seen while walking slots, then members in availability order.
    """
    participants: dict[str, None] = {}
    for slot in slots:
        for member, free_slots in session.availability.items():
            if slot in free_slots:
                participants.setdefault(member, None)
    return tuple(participants)


def members_available_at(session: PracticeSession, slot: SlotKey) -> list[str]:
    return [member for member, free_slots in session.availability.items() if slot in free_slots]


def availability_counts(session: PracticeSession) -> list[SlotSummary]:
    """Per-slot head count over the session's date range, period-major like the grid rows."""
    summaries: list[SlotSummary] = []
    for period in Period:
        for day in session.dates():
            slot = SlotKey(date=day, period=period)
            summaries.append(
                SlotSummary(
                    slot=slot,
                    available_count=len(members_available_at(session, slot)),
                    finalized=session.is_slot_finalized(slot),
                )
            )
    return summaries


def normalize_slots(slots: Iterable[SlotKey]) -> tuple[SlotKey, ...]:
    return tuple(sorted(set(slots)))
