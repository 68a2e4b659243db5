from dataclasses import dataclass


@dataclass(frozen=True)
class PersonOverlap:
    member: str
    session_title: str

    @property
    def message(self) -> str:
        return f"⚠️ {self.member}さんは「{self.session_title}」と練習がかぶっています。"


@dataclass(frozen=True)
class EquipmentShortage:
    item: str
    used_count: int
    stock: int

    @property
    def message(self) -> str:
        return f"⚠️ 機材「{self.item}」の在庫が不足しています (他曲と重複)。"
