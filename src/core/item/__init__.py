"""아이템 시스템 Core: 순수 Python, I/O 무관"""

from .models import ItemType, ItemPrototype, ItemInstance
from .registry import ItemCatalog
from .inventory import Inventory

__all__ = [
    "ItemType",
    "ItemPrototype",
    "ItemInstance",
    "ItemCatalog",
    "Inventory",
]
