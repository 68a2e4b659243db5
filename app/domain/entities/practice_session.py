from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Tuple

from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.slot import SlotKey


@dataclass(frozen=True)
class PracticeSession:
    """One scheduling effort for one piece, scoped to a group."""

    id: str
    creator: str
    group_code: str
    title: str
    start_date: date
    end_date: date
    participants: Tuple[str, ...] = ()
    availability: dict[str, Tuple[SlotKey, ...]] = field(default_factory=dict)
    finalized: Tuple[FinalizedEntry, ...] = ()

    def dates(self) -> list[date]:
        days: list[date] = []
        current = self.start_date
        while current <= self.end_date:
            days.append(current)
            current += timedelta(days=1)
        return days

    def is_slot_finalized(self, slot: SlotKey) -> bool:
        return any(entry.covers(slot) for entry in self.finalized)

    def is_coordinator(self, member: str | None) -> bool:
        return bool(member) and member.strip() == self.creator

    def covers_date(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def involves(self, member: str) -> bool:
        return member == self.creator or member in self.participants
