"""
Village Adventure - Main Entry Point
====================================
게임 엔진 통합 모듈

장소별 메뉴에서 검증된 선택을 받아
이동/거래/아이템 사용/전투 핸들러로 분기하고,
매 행동 후 장소와 무관한 패배 판정을 수행한다.
"""

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from src.core.combat import CombatEngine, CombatResult, OpponentKind, RandomSource
from src.core.errors import GameError, GameErrorKind
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.item.models import ItemType
from src.core.item.registry import ItemCatalog
from src.core.item.trade import purchase, use_item
from src.core.locations import Location
from src.core.logging import get_logger
from src.core.menu import (
    ActionType,
    InputError,
    MenuOption,
    get_menu,
    parse_choice,
    render_menu,
)
from src.core.navigator import Navigator
from src.core.player import MAX_HEALTH, GameState, PlayerState

logger = get_logger(__name__)

HELP_TEXT = {
    Location.VILLAGE: [
        "The Village is your home base. Every road leads back here.",
        "Buy a weapon at the Blacksmith before entering the Forest.",
        "The Dragon Cave needs a Steel Sword and some armor.",
        "Potions from the Market restore health. Use them from the item menu.",
    ],
    Location.DRAGON_CAVE: [
        "The dragon hits hard (20 damage). Armor reduces each hit.",
        "Drink potions before the fight if your health is low.",
        "Slay the dragon to win the game.",
    ],
}


@dataclass
class ActionResult:
    """행동 결과"""

    success: bool
    action_type: str
    message: str
    error: Optional[GameError] = None
    data: Optional[dict] = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "success": self.success,
            "action": self.action_type,
            "message": self.message,
        }
        if self.error:
            result["error"] = self.error.to_dict()
        if self.data:
            result["data"] = self.data
        return result


Handler = Callable[[GameState, MenuOption], ActionResult]


class GameEngine:
    """
    Village Adventure 메인 엔진

    엔진 자체는 게임 상태를 갖지 않는다.
    모든 연산은 호출자가 넘긴 GameState 를 변경한다.
    """

    VERSION = "1.0.0"

    def __init__(
        self,
        catalog: Optional[ItemCatalog] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
        starting_health: int = MAX_HEALTH,
        starting_gold: int = 20,
    ):
        """
        엔진 초기화

        Args:
            catalog: 아이템 카탈로그 (기본: 패키지 items.json)
            rng: 전투 난수원 (재현성)
            event_bus: 이벤트 버스 (기본: 새 버스)
            starting_health: 새 게임 시작 체력
            starting_gold: 새 게임 시작 골드
        """
        self.catalog = catalog if catalog is not None else ItemCatalog.default()
        self.combat_engine = CombatEngine(rng if rng is not None else random.Random())
        self.navigator = Navigator(self.combat_engine)
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.starting_health = starting_health
        self.starting_gold = starting_gold

        self._handlers: Dict[ActionType, Handler] = {
            ActionType.TRAVEL: self._handle_travel,
            ActionType.BUY: self._handle_buy,
            ActionType.USE_ITEM: self._handle_use_prompt,
            ActionType.FIGHT: self._handle_fight,
            ActionType.STATUS: self._handle_status,
            ActionType.HELP: self._handle_help,
            ActionType.QUIT: self._handle_quit,
        }

        logger.info("Engine v%s ready. %d items in catalog.", self.VERSION, self.catalog.count())

    # === 세션 ===

    def new_game(self, player_name: str) -> GameState:
        """새 게임 상태 생성"""
        name = player_name.strip() or "Adventurer"
        state = GameState(
            player=PlayerState(
                name=name, health=self.starting_health, gold=self.starting_gold
            )
        )
        logger.info("New game %s for %s", state.game_id, name)
        self._emit(EventTypes.GAME_STARTED, state, player_name=name)
        return state

    # === 메뉴 ===

    def get_menu(self, state: GameState) -> list[MenuOption]:
        return get_menu(state.player.location)

    def render_menu(self, state: GameState) -> list[str]:
        prices = {p.name: p.cost for p in self.catalog.get_all()}
        return render_menu(state.player.location, prices)

    # === 핵심 진입점 ===

    def dispatch(self, state: GameState, raw: str) -> ActionResult:
        """원시 입력 한 줄을 검증 후 현재 장소 메뉴의 핸들러로 분기"""
        if not state.is_running:
            return self._game_over_result("choose")

        menu = self.get_menu(state)
        choice = parse_choice(raw, len(menu))
        if isinstance(choice, InputError):
            logger.debug("Rejected input %r at %s", raw, state.player.location.key)
            return ActionResult(
                success=False,
                action_type="choose",
                message=choice.message,
                error=choice.to_error(),
            )

        return self.perform(state, menu[choice.index])

    def perform(self, state: GameState, option: MenuOption) -> ActionResult:
        """메뉴 항목 실행 + 패배 판정"""
        if not state.is_running:
            return self._game_over_result(option.action.value)

        # 메뉴 선택이 받아들여지면 아이템 번호 대기는 끝난다
        state.awaiting_item = False
        state.turn += 1
        result = self._handlers[option.action](state, option)
        self._finish_turn(state, option.action, result)
        return result

    def use_item(self, state: GameState, raw_index: str) -> ActionResult:
        """아이템 사용 2단계: 1-based 아이템 번호 입력

        직전 행동이 "Use item" 메뉴였을 때만 받는다.
        잘못된 번호는 상태를 바꾸지 않고 대기를 유지한다 (같은 프롬프트 재시도).
        """
        if not state.is_running:
            return self._game_over_result(ActionType.USE_ITEM.value)

        if not state.awaiting_item:
            logger.debug("Item use without prompt at %s", state.player.location.key)
            return ActionResult(
                success=False,
                action_type=ActionType.USE_ITEM.value,
                message="Choose 'Use item' from the menu first.",
                error=GameError(GameErrorKind.INVALID_INPUT, "No item selection pending."),
            )

        choice = parse_choice(raw_index, len(state.inventory))
        if isinstance(choice, InputError):
            return ActionResult(
                success=False,
                action_type=ActionType.USE_ITEM.value,
                message=choice.message,
                error=choice.to_error(),
            )

        state.awaiting_item = False
        state.turn += 1
        trade = use_item(state, choice.index)
        if trade.success and trade.item is not None:
            self._emit(
                EventTypes.ITEM_USED,
                state,
                item=trade.item.name,
                item_type=trade.item.item_type.value,
                consumed=trade.item.item_type == ItemType.POTION,
            )
        result = ActionResult(
            success=trade.success,
            action_type=ActionType.USE_ITEM.value,
            message=trade.message,
            error=trade.error,
            data={"health": state.player.health, "inventory_size": len(state.inventory)},
        )
        self._finish_turn(state, ActionType.USE_ITEM, result)
        return result

    # === 핸들러 ===

    def _handle_travel(self, state: GameState, option: MenuOption) -> ActionResult:
        destination: Location = option.params["destination"]
        travel = self.navigator.travel(state, destination)

        lines = []
        data: dict[str, Any] = {"location": state.player.location.key}
        if travel.combat is not None:
            lines.extend(travel.combat.messages)
            data["combat"] = travel.combat.to_dict()
            self._emit_combat(state, travel.combat)
        lines.append(travel.message)

        if travel.success and travel.destination != travel.origin:
            self._emit(
                EventTypes.PLAYER_MOVED,
                state,
                origin=travel.origin.key,
                destination=travel.destination.key,
            )

        return ActionResult(
            success=travel.success,
            action_type=ActionType.TRAVEL.value,
            message="\n".join(lines),
            error=travel.error,
            data=data,
        )

    def _handle_buy(self, state: GameState, option: MenuOption) -> ActionResult:
        item_name: str = option.params["item"]
        prototype = self.catalog.get(item_name)
        if prototype is None:
            logger.error("Shop item missing from catalog: %s", item_name)
            return ActionResult(
                success=False,
                action_type=ActionType.BUY.value,
                message=f"The {item_name} is sold out.",
                error=GameError(GameErrorKind.UNKNOWN_ITEM, item_name),
            )

        trade = purchase(state, prototype)
        if trade.success:
            self._emit(
                EventTypes.ITEM_PURCHASED, state, item=prototype.name, cost=prototype.cost
            )
        return ActionResult(
            success=trade.success,
            action_type=ActionType.BUY.value,
            message=trade.message,
            error=trade.error,
            data={"gold": state.player.gold, "inventory_size": len(state.inventory)},
        )

    def _handle_use_prompt(self, state: GameState, option: MenuOption) -> ActionResult:
        """아이템 목록 표시. 실제 사용은 use_item() 으로 이어진다."""
        if len(state.inventory) == 0:
            return ActionResult(
                success=False,
                action_type=ActionType.USE_ITEM.value,
                message="Your inventory is empty.",
                error=GameError(GameErrorKind.EMPTY_SELECTION, "Nothing to use."),
            )

        state.awaiting_item = True
        lines = ["Which item do you want to use?"]
        lines.extend(self._inventory_lines(state))
        return ActionResult(
            success=True,
            action_type=ActionType.USE_ITEM.value,
            message="\n".join(lines),
            data={"awaiting_item_index": True, "items": state.inventory.to_list()},
        )

    def _handle_fight(self, state: GameState, option: MenuOption) -> ActionResult:
        kind = OpponentKind[option.params["opponent"].upper()]
        origin = state.player.location
        combat = self.combat_engine.fight(state, kind)
        self._emit_combat(state, combat)

        lines = list(combat.messages)
        if kind == OpponentKind.MONSTER and not combat.won and state.player.is_alive:
            state.player.location = Location.VILLAGE
            lines.append("You stumble back to the Village.")
            self._emit(
                EventTypes.PLAYER_MOVED,
                state,
                origin=origin.key,
                destination=Location.VILLAGE.key,
            )

        return ActionResult(
            success=combat.won,
            action_type=ActionType.FIGHT.value,
            message="\n".join(lines),
            data={"combat": combat.to_dict(), "location": state.player.location.key},
        )

    def _handle_status(self, state: GameState, option: MenuOption) -> ActionResult:
        return ActionResult(
            success=True,
            action_type=ActionType.STATUS.value,
            message="\n".join(self.status_lines(state)),
            data=state.to_dict(),
        )

    def _handle_help(self, state: GameState, option: MenuOption) -> ActionResult:
        lines = HELP_TEXT.get(state.player.location, HELP_TEXT[Location.VILLAGE])
        return ActionResult(
            success=True, action_type=ActionType.HELP.value, message="\n".join(lines)
        )

    def _handle_quit(self, state: GameState, option: MenuOption) -> ActionResult:
        state.quit = True
        logger.info("%s quit the game on turn %d", state.player.name, state.turn)
        self._emit(EventTypes.GAME_QUIT, state)
        return ActionResult(
            success=True,
            action_type=ActionType.QUIT.value,
            message=f"Thanks for playing, {state.player.name}! Farewell.",
        )

    # === 표시 ===

    def status_lines(self, state: GameState) -> list[str]:
        player = state.player
        lines = [
            f"=== {player.name} ===",
            f"Health: {player.health}/{MAX_HEALTH}",
            f"Gold: {player.gold}",
            f"Location: {player.location.display_name}",
            "Inventory:",
        ]
        if len(state.inventory) == 0:
            lines.append("  (empty)")
        else:
            lines.extend(f"  {line}" for line in self._inventory_lines(state))
        return lines

    @staticmethod
    def _inventory_lines(state: GameState) -> list[str]:
        return [
            f"{i}. {item.name} ({item.item_type.value}, effect {item.effect})"
            for i, item in enumerate(state.inventory, start=1)
        ]

    # === 내부 ===

    def _finish_turn(
        self, state: GameState, action: ActionType, result: ActionResult
    ) -> None:
        """행동 한 번의 마무리: 패배 판정 + 턴 이벤트"""
        self._check_defeat(state, result)
        self._emit(
            EventTypes.TURN_PROCESSED,
            state,
            action=action.value,
            success=result.success,
        )

    def _check_defeat(self, state: GameState, result: ActionResult) -> None:
        """장소와 무관한 패배 판정. 매 행동 후 호출."""
        if state.player.is_alive or state.game_over:
            return
        state.game_over = True
        result.message = "\n".join(
            [result.message, "Your health has reached 0. You have been defeated. Game over."]
        )
        logger.info("%s was defeated on turn %d", state.player.name, state.turn)
        self._emit(EventTypes.PLAYER_DEFEATED, state, location=state.player.location.key)

    def _emit_combat(self, state: GameState, combat: CombatResult) -> None:
        self._emit(
            EventTypes.COMBAT_ENDED,
            state,
            opponent=combat.opponent_name,
            outcome=combat.outcome.value,
            rounds=combat.rounds,
            gold_earned=combat.gold_earned,
        )
        if combat.won and state.victory:
            self._emit(EventTypes.DRAGON_SLAIN, state, turn=state.turn)

    def _game_over_result(self, action: str) -> ActionResult:
        return ActionResult(
            success=False,
            action_type=action,
            message="The game is over.",
            error=GameError(GameErrorKind.GAME_OVER, "The game is over."),
        )

    def _emit(self, event_type: str, state: GameState, **data: Any) -> None:
        self.event_bus.emit(
            GameEvent(
                event_type=event_type,
                data={"game_id": state.game_id, **data},
                source="engine",
            )
        )


def build_engine(
    catalog_path: Optional[str] = None,
    seed: Optional[int] = None,
    starting_health: int = MAX_HEALTH,
    starting_gold: int = 20,
    event_bus: Optional[EventBus] = None,
) -> GameEngine:
    """설정값으로 엔진 구성. catalog_path 미지정 시 패키지 카탈로그."""
    if catalog_path:
        catalog = ItemCatalog()
        catalog.load_from_json(catalog_path)
    else:
        catalog = ItemCatalog.default()
    return GameEngine(
        catalog=catalog,
        rng=random.Random(seed),
        event_bus=event_bus,
        starting_health=starting_health,
        starting_gold=starting_gold,
    )


# === CLI 인터페이스 ===


def run_cli(engine: Optional[GameEngine] = None) -> int:
    """콘솔 게임 루프. 종료/패배/승리 모두 정상 종료(0)."""
    engine = engine or GameEngine()

    try:
        name = input("Enter your name, adventurer: ")
    except (EOFError, KeyboardInterrupt):
        print()
        return 0

    state = engine.new_game(name)
    player = state.player

    print("\n" + "=" * 50)
    print("  Welcome to the Adventure Game!")
    print("  Prepare yourself for an epic journey!")
    print("=" * 50)
    print(f"Welcome, {player.name}! You start your journey in the {player.location.display_name}.")
    print(f"Health: {player.health}, Gold: {player.gold}")

    try:
        while state.is_running:
            location = state.player.location
            print(f"\n--- {location.display_name} ---")
            print(location.description)
            for line in engine.render_menu(state):
                print(line)

            raw = input(f"\n[Health: {state.player.health} | Gold: {state.player.gold}] > ")
            result = engine.dispatch(state, raw)
            print(f"\n{result.message}")

            # 잘못된 번호면 같은 프롬프트를 다시 띄운다
            while state.awaiting_item:
                raw_index = input("Item number > ")
                print(engine.use_item(state, raw_index).message)
    except (EOFError, KeyboardInterrupt):
        print("\n\nFarewell, adventurer.")

    if state.victory:
        print(f"\n*** {state.player.name} the Dragonslayer. Final gold: {state.player.gold} ***")
    return 0


# === 메인 실행 ===


def main() -> int:
    from src.config import settings
    from src.core.logging import setup_logging

    setup_logging(settings.LOG_LEVEL)
    return run_cli(
        build_engine(
            catalog_path=settings.ITEM_CATALOG_PATH,
            seed=settings.RNG_SEED,
            starting_health=settings.STARTING_HEALTH,
            starting_gold=settings.STARTING_GOLD,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
