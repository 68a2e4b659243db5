from __future__ import annotations

from enum import Enum
from typing import Iterable


class Period(str, Enum):
    FIRST = "1限"
    LUNCH = "昼"
    SECOND = "2限"
    THIRD = "3限"
    FOURTH = "4限"
    FIFTH = "5限"
    SIXTH = "6限"
    SEVENTH = "7限"

    @property
    def ordinal(self) -> int:
        return _ORDER[self]

    @staticmethod
    def from_label(label: str) -> "Period":
        return Period((label or "").strip())


_ORDER: dict[Period, int] = {period: i for i, period in enumerate(Period)}


def sort_periods(periods: Iterable[Period]) -> tuple[Period, ...]:
    """Unique periods in timetable order."""
    return tuple(sorted(set(periods), key=lambda p: p.ordinal))
