"""
Tests for the JSON session store.
"""

from __future__ import annotations

import json
import tempfile
from datetime import date
from pathlib import Path

from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.period import Period
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey
from app.infrastructure.store.json_store import JsonSessionStore


def _session(session_id: str = "circle-1", group_code: str = "circle") -> PracticeSession:
    return PracticeSession(
        id=session_id,
        creator="Alice",
        group_code=group_code,
        title="Song A",
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 3),
        participants=("Alice", "Bob"),
        availability={"Bob": (SlotKey.parse("2024-05-01_1限"), SlotKey.parse("2024-05-01_昼"))},
        finalized=(
            FinalizedEntry(
                date=date(2024, 5, 1),
                periods=(Period.FIRST, Period.LUNCH),
                room="A",
                equipment=("ベーアン",),
                participants=("Bob",),
                warnings=("⚠️ 機材「ベーアン」の在庫が不足しています (他曲と重複)。",),
            ),
        ),
    )


def test_json_store_round_trips_session():
    """A stored session comes back equal, from a fresh store instance too."""
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonSessionStore(data_dir=tmpdir).put_session(_session())

        retrieved = JsonSessionStore(data_dir=tmpdir).get_session("circle-1")

        assert retrieved == _session()


def test_json_store_writes_slot_keys_in_text_form():
    with tempfile.TemporaryDirectory() as tmpdir:
        JsonSessionStore(data_dir=tmpdir).put_session(_session())

        raw = json.loads((Path(tmpdir) / "sessions.json").read_text(encoding="utf-8"))
        stored = raw["sessions"]["circle-1"]
        assert stored["availability"]["Bob"] == ["2024-05-01_1限", "2024-05-01_昼"]
        assert stored["finalized"][0]["periods"] == ["1限", "昼"]
        assert not (Path(tmpdir) / "sessions.json.tmp").exists()


def test_json_store_lists_by_group_and_deletes():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        store.put_session(_session("circle-1"))
        store.put_session(_session("circle-2"))
        store.put_session(_session("other-1", group_code="other"))

        assert [s.id for s in store.list_sessions("circle")] == ["circle-1", "circle-2"]

        assert store.delete_session("circle-1") is True
        assert store.delete_session("circle-1") is False
        assert store.get_session("circle-1") is None
        assert [s.id for s in store.list_sessions("circle")] == ["circle-2"]


def test_missing_store_file_means_no_sessions():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonSessionStore(data_dir=tmpdir)
        assert store.get_session("circle-1") is None
        assert store.list_sessions("circle") == []
