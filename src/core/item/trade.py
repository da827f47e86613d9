"""거래/사용 시스템: 구매 판정 + 아이템 사용"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from src.core.errors import GameError, GameErrorKind

from .models import ItemInstance, ItemPrototype, ItemType

if TYPE_CHECKING:
    from src.core.player import GameState

logger = logging.getLogger(__name__)


@dataclass
class TradeResult:
    """구매/사용 결과"""

    success: bool
    message: str
    item: Optional[ItemInstance] = None
    error: Optional[GameError] = None
    health_restored: int = 0


def purchase(state: GameState, prototype: ItemPrototype) -> TradeResult:
    """gold >= cost 이면 구매. 실패 시 상태 변경 없음."""
    player = state.player
    if not player.spend_gold(prototype.cost):
        logger.debug(
            "Purchase rejected: %s costs %d, %s has %d",
            prototype.name,
            prototype.cost,
            player.name,
            player.gold,
        )
        return TradeResult(
            success=False,
            message=(
                f"You can't afford the {prototype.name}. "
                f"It costs {prototype.cost} gold and you have {player.gold}."
            ),
            error=GameError(GameErrorKind.INSUFFICIENT_FUNDS, "Not enough gold."),
        )

    item = prototype.instantiate()
    state.inventory.add(item)
    logger.info("%s bought %s for %d gold", player.name, item.name, prototype.cost)
    return TradeResult(
        success=True,
        message=f"You bought a {item.name} for {prototype.cost} gold.",
        item=item,
    )


def use_item(state: GameState, index: int) -> TradeResult:
    """0-based index의 아이템 사용.

    potion: 체력 회복 후 소모 (정확히 한 번)
    weapon/armor: 서술만 있고 상태 변화 없음.
    전투 장비는 항상 best_of_type 으로 새로 고른다.
    """
    inventory = state.inventory
    if len(inventory) == 0:
        return TradeResult(
            success=False,
            message="Your inventory is empty.",
            error=GameError(GameErrorKind.EMPTY_SELECTION, "Nothing to use."),
        )

    item = inventory.get(index)
    if item is None:
        return TradeResult(
            success=False,
            message=f"Invalid item number. Choose 1-{len(inventory)}.",
            error=GameError(GameErrorKind.INVALID_INPUT, "Item index out of range."),
        )

    if item.item_type == ItemType.POTION:
        before = state.player.health
        after = state.player.update_health(item.effect)
        inventory.remove_at(index)
        logger.info("%s drank %s (%d -> %d)", state.player.name, item.name, before, after)
        return TradeResult(
            success=True,
            message=f"You drink the {item.name}. Health: {after}.",
            item=item,
            health_restored=after - before,
        )

    if item.item_type == ItemType.WEAPON:
        message = f"You ready the {item.name}. It feels good in your hand."
    else:
        message = f"You adjust the {item.name}. You are already wearing it."
    return TradeResult(success=True, message=message, item=item)
