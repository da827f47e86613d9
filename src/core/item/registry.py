"""아이템 카탈로그: JSON 로드 + 동적 등록"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from .models import ItemPrototype, ItemType

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "items.json"


class ItemCatalog:
    """
    아이템 원형 저장소.
    상점이 파는 물건의 템플릿. 로드 후에는 읽기 전용으로 취급한다.
    """

    def __init__(self) -> None:
        self._prototypes: dict[str, ItemPrototype] = {}

    @classmethod
    def default(cls) -> ItemCatalog:
        """패키지에 포함된 items.json으로 채운 카탈로그."""
        catalog = cls()
        catalog.load_from_json(DEFAULT_CATALOG_PATH)
        return catalog

    def load_from_json(self, path: str | Path) -> int:
        """items.json 로드. 반환: 로드된 수량.

        item_type은 문자열 → ItemType enum 변환.
        잘못된 항목은 경고 로그 후 건너뛴다.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: list = json.load(f)

        count = 0
        for raw in raw_list:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object catalog entry: %r", raw)
                continue
            try:
                proto = ItemPrototype(
                    name=raw["name"],
                    item_type=ItemType(raw["item_type"]),
                    cost=int(raw["cost"]),
                    effect=int(raw["effect"]),
                    description=raw.get("description", ""),
                )
                self._prototypes[proto.name] = proto
                count += 1
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to load item %s: %s", raw.get("name", "?"), e
                )

        logger.info("Loaded %d items from %s", count, path)
        return count

    def register(self, prototype: ItemPrototype) -> None:
        """원형 등록. 같은 이름이면 경고 로그 후 덮어쓴다."""
        if prototype.name in self._prototypes:
            logger.warning("Overwriting existing item: %s", prototype.name)
        self._prototypes[prototype.name] = prototype

    def get(self, name: str) -> Optional[ItemPrototype]:
        """O(1) 조회. 없으면 None."""
        return self._prototypes.get(name)

    def get_all(self) -> list[ItemPrototype]:
        return list(self._prototypes.values())

    def by_type(self, item_type: ItemType) -> list[ItemPrototype]:
        return [p for p in self._prototypes.values() if p.item_type == item_type]

    def count(self) -> int:
        return len(self._prototypes)

    def __contains__(self, name: object) -> bool:
        return name in self._prototypes
