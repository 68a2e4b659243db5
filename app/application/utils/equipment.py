from __future__ import annotations

from app.application.utils.corpus import GroupSnapshot
from app.domain.entities.finalized_entry import FinalizedEntry
from app.domain.entities.inventory import EquipmentInventory
from app.domain.entities.warning import EquipmentShortage


def count_concurrent_use(
    item: str,
    proposed: FinalizedEntry,
    snapshot: GroupSnapshot,
    batch_id: str | None = None,
) -> int:
    used_count = 1  # the proposed entry itself
    for existing in snapshot.entries_on(proposed.date):
        if batch_id is not None and existing.batch_id == batch_id:
            continue
        if existing.entry.overlaps(proposed) and item in existing.entry.equipment:
            used_count += 1
    return used_count


def check_equipment_stock(
    proposed: FinalizedEntry,
    snapshot: GroupSnapshot,
    inventory: EquipmentInventory,
    batch_id: str | None = None,
) -> list[EquipmentShortage]:
    shortages: list[EquipmentShortage] = []
    for item in proposed.equipment:
        used_count = count_concurrent_use(item, proposed, snapshot, batch_id)
        stock = inventory.stock_for(item)
        if used_count > stock:
            shortages.append(EquipmentShortage(item=item, used_count=used_count, stock=stock))
    return shortages
