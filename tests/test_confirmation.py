from __future__ import annotations

from datetime import date

import pytest

from app.application.exceptions import BookingValidationError
from app.application.utils.confirmation import finalize_confirmation, group_by_date
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.inventory import EquipmentInventory
from app.domain.entities.period import Period
from app.domain.entities.practice_session import PracticeSession
from app.domain.entities.slot import SlotKey


def _slots(*keys: str) -> tuple[SlotKey, ...]:
    return tuple(SlotKey.parse(k) for k in keys)


def _session(
    session_id: str = "circle-1",
    title: str = "Song A",
    availability: dict[str, tuple[SlotKey, ...]] | None = None,
    finalized: tuple[FinalizedEntry, ...] = (),
) -> PracticeSession:
    return PracticeSession(
        id=session_id,
        creator="Alice",
        group_code="circle",
        title=title,
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 7),
        participants=tuple(availability or {}),
        availability=dict(availability or {}),
        finalized=finalized,
    )


def test_end_to_end_single_date():
    session = _session(
        availability={
            "Alice": _slots("2024-05-01_1限"),
            "Bob": _slots("2024-05-01_1限", "2024-05-01_昼"),
        }
    )

    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-01_1限", "2024-05-01_昼"],
        room="A",
        equipment=[],
        inventory=EquipmentInventory(),
    )

    assert len(outcome.entries) == 1
    entry = outcome.entries[0]
    assert entry.date == date(2024, 5, 1)
    assert entry.periods == (Period.FIRST, Period.LUNCH)
    assert set(entry.participants) == {"Alice", "Bob"}
    assert entry.room == "A"
    assert entry.warnings == ()
    assert outcome.session.finalized == outcome.entries
    assert session.finalized == ()


def test_one_entry_per_distinct_date_in_ascending_order():
    session = _session()
    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-03_2限", "2024-05-01_3限", "2024-05-03_1限", "2024-05-02_昼", "2024-05-03_2限"],
        room="B",
        equipment=None,
        inventory=EquipmentInventory(),
    )
    assert [e.date.isoformat() for e in outcome.entries] == ["2024-05-01", "2024-05-02", "2024-05-03"]
    assert outcome.entries[2].periods == (Period.FIRST, Period.SECOND)


def test_group_by_date_sorts_periods_by_timetable():
    grouped = group_by_date(_slots("2024-05-01_3限", "2024-05-01_昼", "2024-05-01_1限"))
    assert grouped == {date(2024, 5, 1): (Period.FIRST, Period.LUNCH, Period.THIRD)}


def test_batch_entries_never_warn_about_each_other():
    # Two dates confirmed in one call, sharing members and equipment.
    session = _session(
        availability={"Bob": _slots("2024-05-01_1限", "2024-05-02_1限")},
    )
    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-01_1限", "2024-05-02_1限"],
        room="A",
        equipment=["ベーアン"],
        inventory=EquipmentInventory.from_mapping({"ベーアン": 1}),
    )
    assert all(e.warnings == () for e in outcome.entries)


def test_previous_confirmations_of_same_session_still_conflict():
    earlier = FinalizedEntry(
        date=date(2024, 5, 1),
        periods=(Period.LUNCH,),
        room="B",
        equipment=("キーボード",),
        participants=("Bob",),
    )
    session = _session(
        availability={"Bob": _slots("2024-05-01_1限", "2024-05-01_昼")},
        finalized=(earlier,),
    )
    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-01_1限", "2024-05-01_昼"],
        room="A",
        equipment=["キーボード"],
        inventory=EquipmentInventory.from_mapping({"キーボード": 1}),
    )
    assert outcome.entries[0].warnings == (
        "⚠️ Bobさんは「Song A」と練習がかぶっています。",
        "⚠️ 機材「キーボード」の在庫が不足しています (他曲と重複)。",
    )
    assert outcome.session.finalized == (earlier, outcome.entries[0])


def test_warnings_from_other_sessions_in_group():
    other = _session(
        session_id="circle-2",
        title="Song B",
        finalized=(
            FinalizedEntry(date=date(2024, 5, 1), periods=(Period.FIRST,), room="C", participants=("Alice",)),
        ),
    )
    outsider = PracticeSession(
        id="other-1",
        creator="Zed",
        group_code="other",
        title="Song Z",
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 1),
        finalized=(
            FinalizedEntry(date=date(2024, 5, 1), periods=(Period.FIRST,), room="C", participants=("Alice",)),
        ),
    )
    session = _session(availability={"Alice": _slots("2024-05-01_1限")})

    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session, other, outsider],
        slot_keys=["2024-05-01_1限"],
        room="A",
        equipment=[],
        inventory=EquipmentInventory(),
    )
    assert outcome.entries[0].warnings == ("⚠️ Aliceさんは「Song B」と練習がかぶっています。",)
    assert outcome.warning_count == 1


def test_stale_stored_copy_is_replaced_by_session_being_confirmed():
    stored = _session()
    current = _session(
        finalized=(
            FinalizedEntry(date=date(2024, 5, 1), periods=(Period.FIRST,), room="A", participants=("Bob",)),
        ),
        availability={"Bob": _slots("2024-05-01_1限")},
    )
    outcome = finalize_confirmation(
        session=current,
        group_sessions=[stored],
        slot_keys=["2024-05-01_1限"],
        room="A",
        equipment=[],
        inventory=EquipmentInventory(),
    )
    assert len(outcome.entries[0].warnings) == 1


def test_equipment_is_trimmed_and_deduplicated():
    session = _session()
    outcome = finalize_confirmation(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-01_1限"],
        room="  A  ",
        equipment=["ベーアン", " ", "ベーアン", "ハイハット"],
        inventory=EquipmentInventory(),
    )
    assert outcome.entries[0].equipment == ("ベーアン", "ハイハット")
    assert outcome.entries[0].room == "A"


@pytest.mark.parametrize(
    "slot_keys, room",
    [
        ([], "A"),
        (["2024-05-01_1限"], ""),
        (["2024-05-01_1限"], "   "),
        (["2024-05-01-1限"], "A"),
        (["20240501_1限"], "A"),
    ],
)
def test_invalid_requests_are_rejected(slot_keys, room):
    session = _session()
    with pytest.raises(BookingValidationError):
        finalize_confirmation(
            session=session,
            group_sessions=[session],
            slot_keys=slot_keys,
            room=room,
            equipment=[],
            inventory=EquipmentInventory(),
        )
    assert session.finalized == ()


def test_same_inputs_reach_same_outcome():
    session = _session(availability={"Alice": _slots("2024-05-01_1限")})
    kwargs = dict(
        session=session,
        group_sessions=[session],
        slot_keys=["2024-05-01_1限"],
        room="A",
        equipment=["タンバリン"],
        inventory=EquipmentInventory(),
    )
    assert finalize_confirmation(**kwargs).entries == finalize_confirmation(**kwargs).entries
