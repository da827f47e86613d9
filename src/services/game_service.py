"""게임 세션 Service: 엔진 ↔ API 연결, EventBus 구독

세션은 프로세스 메모리에만 존재한다 (저장/복원 없음).
세션별 통계는 엔진이 발행하는 이벤트로 집계한다.
"""

from dataclasses import dataclass, field

from src.core.engine import ActionResult, GameEngine
from src.core.event_bus import GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.player import GameState

logger = get_logger(__name__)


class SessionNotFoundError(KeyError):
    """존재하지 않는 game_id"""

    def __init__(self, game_id: str):
        super().__init__(game_id)
        self.game_id = game_id

    def __str__(self) -> str:
        return f"Game not found: {self.game_id}"


@dataclass
class SessionStats:
    """세션 통계 (이벤트 집계)"""

    turns: int = 0
    monsters_defeated: int = 0
    potions_used: int = 0
    items_bought: int = 0
    gold_spent: int = 0
    dragon_slain: bool = False
    outcomes: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "turns": self.turns,
            "monsters_defeated": self.monsters_defeated,
            "potions_used": self.potions_used,
            "items_bought": self.items_bought,
            "gold_spent": self.gold_spent,
            "dragon_slain": self.dragon_slain,
            "combat_outcomes": dict(self.outcomes),
        }


class GameService:
    """게임 세션 관리 + 통계"""

    def __init__(self, engine: GameEngine):
        self._engine = engine
        self._sessions: dict[str, GameState] = {}
        self._stats: dict[str, SessionStats] = {}
        self._register_event_handlers()

    @property
    def engine(self) -> GameEngine:
        return self._engine

    def _register_event_handlers(self) -> None:
        """EventBus 구독"""
        bus = self._engine.event_bus
        bus.subscribe(EventTypes.TURN_PROCESSED, self._on_turn_processed)
        bus.subscribe(EventTypes.COMBAT_ENDED, self._on_combat_ended)
        bus.subscribe(EventTypes.ITEM_PURCHASED, self._on_item_purchased)
        bus.subscribe(EventTypes.ITEM_USED, self._on_item_used)
        bus.subscribe(EventTypes.DRAGON_SLAIN, self._on_dragon_slain)

    # === 세션 ===

    def start_game(self, player_name: str) -> GameState:
        state = self._engine.new_game(player_name)
        self._sessions[state.game_id] = state
        self._stats[state.game_id] = SessionStats()
        logger.info("Session opened: %s (%d active)", state.game_id, len(self._sessions))
        return state

    def get_session(self, game_id: str) -> GameState:
        state = self._sessions.get(game_id)
        if state is None:
            raise SessionNotFoundError(game_id)
        return state

    def end_game(self, game_id: str) -> GameState:
        """세션 제거. 반환: 마지막 상태."""
        state = self.get_session(game_id)
        del self._sessions[game_id]
        self._stats.pop(game_id, None)
        logger.info("Session closed: %s", game_id)
        return state

    def active_count(self) -> int:
        return len(self._sessions)

    # === 행동 ===

    def choose(self, game_id: str, raw: str) -> ActionResult:
        """메뉴 선택 (원시 입력)"""
        state = self.get_session(game_id)
        return self._engine.dispatch(state, raw)

    def use_item(self, game_id: str, raw_index: str) -> ActionResult:
        """아이템 번호 선택 (원시 입력, 1-based)"""
        state = self.get_session(game_id)
        return self._engine.use_item(state, raw_index)

    def stats(self, game_id: str) -> SessionStats:
        self.get_session(game_id)
        return self._stats[game_id]

    # === 이벤트 핸들러 ===

    def _stats_for(self, event: GameEvent) -> SessionStats | None:
        return self._stats.get(event.data.get("game_id", ""))

    def _on_turn_processed(self, event: GameEvent) -> None:
        stats = self._stats_for(event)
        if stats:
            stats.turns += 1

    def _on_combat_ended(self, event: GameEvent) -> None:
        stats = self._stats_for(event)
        if not stats:
            return
        outcome = event.data["outcome"]
        stats.outcomes[outcome] = stats.outcomes.get(outcome, 0) + 1
        if outcome == "won" and event.data["opponent"] == "Monster":
            stats.monsters_defeated += 1

    def _on_item_purchased(self, event: GameEvent) -> None:
        stats = self._stats_for(event)
        if stats:
            stats.items_bought += 1
            stats.gold_spent += event.data["cost"]

    def _on_item_used(self, event: GameEvent) -> None:
        stats = self._stats_for(event)
        if stats and event.data.get("consumed"):
            stats.potions_used += 1

    def _on_dragon_slain(self, event: GameEvent) -> None:
        stats = self._stats_for(event)
        if stats:
            stats.dragon_slain = True
            logger.info("Dragon slain in session %s", event.data["game_id"])
