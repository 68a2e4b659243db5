from __future__ import annotations

from app.application.utils.corpus import GroupSnapshot
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.warning import PersonOverlap


def detect_person_overlaps(
    proposed: FinalizedEntry,
    snapshot: GroupSnapshot,
    batch_id: str | None = None,
) -> list[PersonOverlap]:
    """
    Members of the proposed entry already booked into an overlapping finalized entry.
    Entries tagged with batch_id belong to the confirmation being checked and are skipped.
    One result per (member, conflicting entry); duplicates are kept.
    """
    overlaps: list[PersonOverlap] = []
    candidates = snapshot.entries_on(proposed.date)
    for member in proposed.participants:
        for item in candidates:
            if batch_id is not None and item.batch_id == batch_id:
                continue
            if not item.entry.overlaps(proposed):
                continue
            if member in item.entry.participants:
                overlaps.append(PersonOverlap(member=member, session_title=item.session_title))
    return overlaps
