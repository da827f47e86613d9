"""플레이어 인벤토리: 획득 순서 유지 + 타입별 조회"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .models import ItemInstance, ItemType

logger = logging.getLogger(__name__)

STEEL_SWORD = "Steel Sword"


class Inventory:
    """
    아이템 인스턴스의 순서 있는 목록.
    삽입 순서 = 획득 순서 (표시 순서 고정용).
    """

    def __init__(self, items: Optional[list[ItemInstance]] = None) -> None:
        self._items: list[ItemInstance] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemInstance]:
        return iter(self._items)

    @property
    def items(self) -> list[ItemInstance]:
        """읽기 전용 복사본"""
        return list(self._items)

    def add(self, item: ItemInstance) -> None:
        self._items.append(item)
        logger.debug("Inventory add: %s (%d items)", item.name, len(self._items))

    def get(self, index: int) -> Optional[ItemInstance]:
        """0-based 조회. 범위 밖이면 None (음수 인덱스 허용 안 함)."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def remove_at(self, index: int) -> ItemInstance:
        """0-based 제거. 범위 밖이면 IndexError."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"inventory index out of range: {index}")
        return self._items.pop(index)

    def filter_by_type(self, item_type: ItemType) -> list[ItemInstance]:
        return [i for i in self._items if i.item_type == item_type]

    def best_of_type(self, item_type: ItemType) -> Optional[ItemInstance]:
        """effect 최대 아이템. 동률이면 먼저 획득한 것. 없으면 None."""
        best: Optional[ItemInstance] = None
        for item in self._items:
            if item.item_type != item_type:
                continue
            if best is None or item.effect > best.effect:
                best = item
        return best

    def has_type(self, item_type: ItemType) -> bool:
        return any(i.item_type == item_type for i in self._items)

    def has_item(self, name: str, item_type: ItemType) -> bool:
        return any(i.name == name and i.item_type == item_type for i in self._items)

    def has_good_equipment(self) -> bool:
        """드래곤 동굴 진입 조건: Steel Sword + 방어구 1개 이상"""
        return self.has_item(STEEL_SWORD, ItemType.WEAPON) and self.has_type(
            ItemType.ARMOR
        )

    def to_list(self) -> list[dict]:
        return [i.to_dict() for i in self._items]
