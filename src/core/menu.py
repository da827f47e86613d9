"""
Village Adventure - 장소별 메뉴 + 입력 검증
==========================================
(장소, 선택 번호) → 행동 테이블.
입력 검증은 순수 함수이며 예외 대신 결과값을 돌려준다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from src.core.errors import GameError, GameErrorKind
from src.core.locations import Location


class ActionType(str, Enum):
    """행동 종류 (핸들러 분기 키)"""

    TRAVEL = "travel"
    BUY = "buy"
    USE_ITEM = "use_item"
    FIGHT = "fight"
    STATUS = "status"
    HELP = "help"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuOption:
    """메뉴 한 줄"""

    label: str
    action: ActionType
    params: Dict[str, Any] = field(default_factory=dict)


def _travel(label: str, destination: Location) -> MenuOption:
    return MenuOption(label, ActionType.TRAVEL, {"destination": destination})


def _buy(item_name: str) -> MenuOption:
    return MenuOption(f"Buy {item_name}", ActionType.BUY, {"item": item_name})


STATUS = MenuOption("Check status", ActionType.STATUS)
USE_ITEM = MenuOption("Use item", ActionType.USE_ITEM)
HELP = MenuOption("Help", ActionType.HELP)
QUIT = MenuOption("Quit game", ActionType.QUIT)
RETURN = _travel("Return to the Village", Location.VILLAGE)


MENUS: Dict[Location, List[MenuOption]] = {
    Location.VILLAGE: [
        _travel("Visit the Blacksmith", Location.BLACKSMITH),
        _travel("Visit the Market", Location.MARKET),
        _travel("Enter the Forest", Location.FOREST),
        _travel("Enter the Dragon Cave", Location.DRAGON_CAVE),
        STATUS,
        USE_ITEM,
        HELP,
        QUIT,
    ],
    Location.BLACKSMITH: [
        _buy("Sword"),
        _buy("Steel Sword"),
        _buy("Iron Armor"),
        RETURN,
        STATUS,
        QUIT,
    ],
    Location.MARKET: [
        _buy("Health Potion"),
        _buy("Wooden Shield"),
        RETURN,
        STATUS,
        USE_ITEM,
        QUIT,
    ],
    Location.FOREST: [
        MenuOption("Hunt another monster", ActionType.FIGHT, {"opponent": "monster"}),
        RETURN,
        STATUS,
        USE_ITEM,
        QUIT,
    ],
    Location.DRAGON_CAVE: [
        MenuOption("Fight the dragon", ActionType.FIGHT, {"opponent": "dragon"}),
        RETURN,
        STATUS,
        USE_ITEM,
        HELP,
        QUIT,
    ],
}


def get_menu(location: Location) -> List[MenuOption]:
    return MENUS[location]


def render_menu(location: Location, prices: Optional[Dict[str, int]] = None) -> List[str]:
    """번호 붙은 메뉴 줄 목록. prices가 있으면 구매 항목에 가격 표시."""
    prices = prices or {}
    lines = []
    for i, opt in enumerate(MENUS[location], start=1):
        label = opt.label
        item_name = opt.params.get("item")
        if opt.action == ActionType.BUY and item_name in prices:
            label = f"{label} ({prices[item_name]} gold)"
        lines.append(f"{i}. {label}")
    return lines


@dataclass(frozen=True)
class ParsedChoice:
    """검증된 선택. index는 0-based."""

    index: int

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class InputError:
    """검증 실패. 상태를 건드리지 않고 같은 프롬프트를 다시 띄운다."""

    kind: GameErrorKind
    message: str

    def to_error(self) -> GameError:
        return GameError(self.kind, self.message)


ChoiceResult = Union[ParsedChoice, InputError]


def parse_choice(raw: str, menu_size: int) -> ChoiceResult:
    """1..menu_size 범위의 양의 정수만 허용"""
    text = (raw or "").strip()
    if not (text.isascii() and text.isdigit()):
        return InputError(
            GameErrorKind.INVALID_INPUT,
            f"Invalid input. Please enter a number between 1 and {menu_size}.",
        )

    number = int(text)
    if not 1 <= number <= menu_size:
        return InputError(
            GameErrorKind.INVALID_INPUT,
            f"Please enter a number between 1 and {menu_size}.",
        )
    return ParsedChoice(index=number - 1)
