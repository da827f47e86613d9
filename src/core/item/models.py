"""아이템 도메인 모델 (I/O 무관)"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class ItemType(str, Enum):
    POTION = "potion"
    WEAPON = "weapon"
    ARMOR = "armor"


@dataclass(frozen=True)
class ItemPrototype:
    """아이템 원형: 불변. items.json에서 로드."""

    name: str  # "Steel Sword"
    item_type: ItemType
    cost: int  # 상점 가격 (gold)
    effect: int  # potion=회복량, weapon=공격력, armor=방어력
    description: str = ""

    def __post_init__(self) -> None:
        if self.cost < 0:
            raise ValueError(f"cost must be >= 0: {self.name}")
        if self.effect < 0:
            raise ValueError(f"effect must be >= 0: {self.name}")

    def instantiate(self) -> ItemInstance:
        """구매 시 호출. 원형과 독립된 인스턴스를 새로 만든다."""
        return ItemInstance(
            name=self.name,
            item_type=self.item_type,
            cost=self.cost,
            effect=self.effect,
            description=self.description,
        )


@dataclass
class ItemInstance:
    """인벤토리에 들어가는 아이템 개체. 원형의 복사본."""

    name: str
    item_type: ItemType
    cost: int
    effect: int
    description: str = ""
    instance_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        return {
            "instance_id": self.instance_id,
            "name": self.name,
            "type": self.item_type.value,
            "cost": self.cost,
            "effect": self.effect,
            "description": self.description,
        }
