from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import total_ordering

from app.domain.entities.period import Period

SLOT_KEY_SEPARATOR = "_"


@total_ordering
@dataclass(frozen=True)
class SlotKey:
    date: date
    period: Period

    @property
    def sort_key(self) -> tuple[date, int]:
        return (self.date, self.period.ordinal)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SlotKey):
            return NotImplemented
        return self.sort_key < other.sort_key

    def encode(self) -> str:
        # Shared links and stored data rely on this exact form, e.g. "2024-05-01_1限".
        return f"{self.date.isoformat()}{SLOT_KEY_SEPARATOR}{self.period.value}"

    @staticmethod
    def parse(text: str) -> "SlotKey":
        """Parse "<ISO-date>_<period-label>". Raises ValueError on malformed input."""
        raw_date, sep, label = (text or "").partition(SLOT_KEY_SEPARATOR)
        if not sep:
            raise ValueError(f"Malformed slot key: {text!r}")
        slot = SlotKey(date=date.fromisoformat(raw_date), period=Period(label))
        # Only the canonical form is accepted, e.g. "20240501_1限" is not.
        if slot.encode() != text:
            raise ValueError(f"Malformed slot key: {text!r}")
        return slot

    def __str__(self) -> str:
        return self.encode()
