from __future__ import annotations

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any

from app.application.ports.session_store import SessionStorePort
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.period import Period
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey


class JsonSessionStore(SessionStorePort):
    """All sessions in a single JSON document, rewritten atomically on every change."""

    def __init__(self, data_dir: str = "./data") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "sessions.json"
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def get_session(self, session_id: str) -> PracticeSession | None:
        raw = self._load()["sessions"].get(session_id)
        return self._deserialize_session(raw) if raw else None

    def put_session(self, session: PracticeSession) -> None:
        with self._lock:
            data = self._load()
            data["sessions"][session.id] = self._serialize_session(session)
            self._save(data)

    def list_sessions(self, group_code: str) -> list[PracticeSession]:
        return [
            self._deserialize_session(raw)
            for raw in self._load()["sessions"].values()
            if raw.get("group_code") == group_code
        ]

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            data = self._load()
            if data["sessions"].pop(session_id, None) is None:
                return False
            self._save(data)
            return True

    def _load(self) -> dict[str, Any]:
        """Load the document, return an empty one if missing."""
        if not self._file_path.exists():
            return {"sessions": {}, "version": 1}
        with open(self._file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("sessions", {})
        data.setdefault("version", 1)
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Write to a temp file, then rename over the document."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError:
            self._logger.exception("Failed to write session store", extra={"reason": str(self._file_path)})
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _serialize_session(self, session: PracticeSession) -> dict[str, Any]:
        return {
            "id": session.id,
            "creator": session.creator,
            "group_code": session.group_code,
            "title": session.title,
            "start_date": session.start_date.isoformat(),
            "end_date": session.end_date.isoformat(),
            "participants": list(session.participants),
            "availability": {
                member: [slot.encode() for slot in slots]
                for member, slots in session.availability.items()
            },
            "finalized": [self._serialize_entry(entry) for entry in session.finalized],
        }

    def _deserialize_session(self, data: dict[str, Any]) -> PracticeSession:
        return PracticeSession(
            id=data["id"],
            creator=data["creator"],
            group_code=data["group_code"],
            title=data["title"],
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            participants=tuple(data.get("participants", [])),
            availability={
                member: tuple(SlotKey.parse(key) for key in keys)
                for member, keys in (data.get("availability") or {}).items()
            },
            finalized=tuple(self._deserialize_entry(e) for e in data.get("finalized", [])),
        )

    def _serialize_entry(self, entry: FinalizedEntry) -> dict[str, Any]:
        return {
            "date": entry.date.isoformat(),
            "periods": [p.value for p in entry.periods],
            "room": entry.room,
            "equipment": list(entry.equipment),
            "participants": list(entry.participants),
            "warnings": list(entry.warnings),
        }

    def _deserialize_entry(self, data: dict[str, Any]) -> FinalizedEntry:
        return FinalizedEntry(
            date=date.fromisoformat(data["date"]),
            periods=tuple(Period.from_label(p) for p in data["periods"]),
            room=data["room"],
            equipment=tuple(data.get("equipment", [])),
            participants=tuple(data.get("participants", [])),
            warnings=tuple(data.get("warnings", [])),
        )
