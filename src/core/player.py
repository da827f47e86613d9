"""
Village Adventure - 플레이어 상태
=================================
한 판의 게임 상태를 하나의 GameState 값으로 묶는다.
모듈 전역 변수 없이 모든 연산에 명시적으로 전달된다.
"""

import uuid
from dataclasses import dataclass, field

from src.core.item.inventory import Inventory
from src.core.locations import STARTING_LOCATION, Location
from src.core.logging import get_logger

logger = get_logger(__name__)

MIN_HEALTH = 0
MAX_HEALTH = 100
DEFAULT_STARTING_GOLD = 20


@dataclass
class PlayerState:
    """플레이어 상태. health는 모든 변경마다 [0, 100]으로 고정된다."""

    name: str
    health: int = MAX_HEALTH
    gold: int = DEFAULT_STARTING_GOLD
    location: Location = STARTING_LOCATION

    def __post_init__(self):
        self.health = max(MIN_HEALTH, min(MAX_HEALTH, self.health))
        if self.gold < 0:
            raise ValueError(f"gold must be >= 0: {self.gold}")

    @property
    def is_alive(self) -> bool:
        return self.health > MIN_HEALTH

    def update_health(self, delta: int) -> int:
        """체력 증감 후 [0, 100]으로 clamp. 반환: 새 체력."""
        before = self.health
        self.health = max(MIN_HEALTH, min(MAX_HEALTH, self.health + delta))
        logger.debug("Health %s: %d -> %d (delta=%d)", self.name, before, self.health, delta)
        return self.health

    def spend_gold(self, amount: int) -> bool:
        """골드 지불. 부족하면 False, 상태 변경 없음."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0: {amount}")
        if self.gold < amount:
            return False
        self.gold -= amount
        return True

    def earn_gold(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"amount must be >= 0: {amount}")
        self.gold += amount
        return self.gold

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "health": self.health,
            "gold": self.gold,
            "location": self.location.key,
        }


@dataclass
class GameState:
    """한 판의 게임 전체 상태"""

    player: PlayerState
    inventory: Inventory = field(default_factory=Inventory)
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    turn: int = 0

    # "Use item" 선택 후 아이템 번호 입력 대기 중
    awaiting_item: bool = False

    # 종료 플래그
    game_over: bool = False
    victory: bool = False
    quit: bool = False

    @property
    def is_running(self) -> bool:
        return not (self.game_over or self.quit)

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "turn": self.turn,
            "awaiting_item": self.awaiting_item,
            "player": self.player.to_dict(),
            "inventory": self.inventory.to_list(),
            "game_over": self.game_over,
            "victory": self.victory,
            "quit": self.quit,
        }
