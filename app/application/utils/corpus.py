from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.practice_session import PracticeSession


@dataclass(frozen=True)
class CorpusEntry:
    session_id: str
    session_title: str
    entry: FinalizedEntry
    batch_id: str | None = None  # set only for entries pending in the current confirmation


@dataclass(frozen=True)
class GroupSnapshot:
    """Read-only view of one group's finalized entries, indexed by date."""

    group_code: str
    by_date: Mapping[date, tuple[CorpusEntry, ...]]

    def entries_on(self, day: date) -> tuple[CorpusEntry, ...]:
        return self.by_date.get(day, ())

    @staticmethod
    def build(
        group_code: str,
        sessions: Iterable[PracticeSession],
        pending: Sequence[CorpusEntry] = (),
    ) -> "GroupSnapshot":
        index: dict[date, list[CorpusEntry]] = {}
        for session in sessions:
            # Cross-group sessions never conflict.
            if session.group_code != group_code:
                continue
            for entry in session.finalized:
                index.setdefault(entry.date, []).append(
                    CorpusEntry(session_id=session.id, session_title=session.title, entry=entry)
                )
        for item in pending:
            index.setdefault(item.entry.date, []).append(item)
        return GroupSnapshot(
            group_code=group_code,
            by_date=MappingProxyType({day: tuple(items) for day, items in index.items()}),
        )
