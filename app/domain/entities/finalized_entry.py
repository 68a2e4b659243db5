from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple

from app.domain.entities.period import Period
from app.domain.entities.slot import SlotKey


@dataclass(frozen=True)
class FinalizedEntry:
    date: date
    periods: Tuple[Period, ...]
    room: str
    equipment: Tuple[str, ...] = ()
    participants: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def slots(self) -> tuple[SlotKey, ...]:
        return tuple(SlotKey(date=self.date, period=p) for p in self.periods)

    def overlaps(self, other: "FinalizedEntry") -> bool:
        """Same date and at least one shared period."""
        return self.date == other.date and not set(self.periods).isdisjoint(other.periods)

    def covers(self, slot: SlotKey) -> bool:
        return self.date == slot.date and slot.period in self.periods
