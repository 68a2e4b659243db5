from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_EQUIPMENT_STOCK: dict[str, int] = {
    "ベーアン": 3,
    "キーボード": 3,
    "スプラッシュ": 3,
    "ハイハット": 3,
}


@dataclass(frozen=True)
class EquipmentInventory:
    stock: Mapping[str, int] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_EQUIPMENT_STOCK)))

    @staticmethod
    def from_mapping(stock: Mapping[str, int] | None) -> "EquipmentInventory":
        source = DEFAULT_EQUIPMENT_STOCK if stock is None else stock
        return EquipmentInventory(stock=MappingProxyType({str(k): int(v) for k, v in source.items()}))

    def stock_for(self, item: str) -> int:
        # Items missing from the inventory have no stock at all.
        return self.stock.get(item, 0)
