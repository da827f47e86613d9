"""
Village Adventure - 장소 이동 (상태 기계)
=========================================
허브 구조: 마을에서 각 장소로, 각 장소에서 마을로만 이동 가능.
일부 이동은 인벤토리 조건(가드)을 만족해야 한다.

숲 진입은 몬스터 전투를 즉시 일으키며,
승리하지 못하면 위치가 마을로 되돌아간다.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from src.core.combat import CombatEngine, CombatResult, OpponentKind
from src.core.errors import GameError, GameErrorKind
from src.core.item.inventory import Inventory
from src.core.item.models import ItemType
from src.core.locations import Location
from src.core.logging import get_logger
from src.core.player import GameState

logger = get_logger(__name__)

# 가드: 인벤토리 → 통과 여부
Guard = Callable[[Inventory], bool]


def has_weapon(inventory: Inventory) -> bool:
    return inventory.has_type(ItemType.WEAPON)


def has_good_equipment(inventory: Inventory) -> bool:
    return inventory.has_good_equipment()


@dataclass(frozen=True)
class Transition:
    """이동 간선"""

    source: Location
    destination: Location
    guard: Optional[Guard] = None
    blocked_message: str = ""
    encounter: Optional[OpponentKind] = None  # 진입 즉시 전투


# 전체 전이표. 여기 없는 (출발, 도착) 쌍은 불법 이동.
TRANSITIONS: Dict[Tuple[Location, Location], Transition] = {
    (t.source, t.destination): t
    for t in [
        Transition(Location.VILLAGE, Location.BLACKSMITH),
        Transition(Location.VILLAGE, Location.MARKET),
        Transition(
            Location.VILLAGE,
            Location.FOREST,
            guard=has_weapon,
            blocked_message="It's too dangerous to enter the forest without a weapon!",
            encounter=OpponentKind.MONSTER,
        ),
        Transition(
            Location.VILLAGE,
            Location.DRAGON_CAVE,
            guard=has_good_equipment,
            blocked_message=(
                "You need a Steel Sword and some armor before facing the dragon!"
            ),
        ),
        Transition(Location.BLACKSMITH, Location.VILLAGE),
        Transition(Location.MARKET, Location.VILLAGE),
        Transition(Location.FOREST, Location.VILLAGE),
        Transition(Location.DRAGON_CAVE, Location.VILLAGE),
    ]
}


@dataclass
class TravelResult:
    """이동 결과"""

    success: bool
    origin: Location
    destination: Location  # 최종 위치 (숲 패배 시 마을)
    message: str
    error: Optional[GameError] = None
    combat: Optional[CombatResult] = None


class Navigator:
    """
    장소 이동 시스템

    전이표는 프로세스 전역 읽기 전용 설정이고,
    현재 위치는 GameState.player.location 이 가진다.
    """

    def __init__(self, combat_engine: CombatEngine):
        self.combat_engine = combat_engine

    @staticmethod
    def get_transition(source: Location, destination: Location) -> Optional[Transition]:
        return TRANSITIONS.get((source, destination))

    @staticmethod
    def destinations(source: Location) -> list[Location]:
        return [dst for (src, dst) in TRANSITIONS if src == source]

    def can_travel(self, state: GameState, destination: Location) -> bool:
        """가드까지 포함한 이동 가능 여부 (상태 변경 없음)"""
        transition = self.get_transition(state.player.location, destination)
        if transition is None:
            return False
        return transition.guard is None or transition.guard(state.inventory)

    def travel(self, state: GameState, destination: Location) -> TravelResult:
        """이동 실행"""
        origin = state.player.location
        transition = self.get_transition(origin, destination)

        if transition is None:
            logger.debug("Illegal move: %s -> %s", origin.key, destination.key)
            return TravelResult(
                success=False,
                origin=origin,
                destination=origin,
                message=(
                    f"You can't go to the {destination.display_name} "
                    f"from the {origin.display_name}."
                ),
                error=GameError(GameErrorKind.ILLEGAL_TRANSITION, "No such path."),
            )

        if transition.guard is not None and not transition.guard(state.inventory):
            logger.info(
                "Move blocked by guard: %s -> %s", origin.key, destination.key
            )
            return TravelResult(
                success=False,
                origin=origin,
                destination=origin,
                message=transition.blocked_message,
                error=GameError(
                    GameErrorKind.ILLEGAL_TRANSITION, transition.blocked_message
                ),
            )

        state.player.location = destination
        logger.info("%s moved: %s -> %s", state.player.name, origin.key, destination.key)

        if transition.encounter is None:
            return TravelResult(
                success=True,
                origin=origin,
                destination=destination,
                message=f"You travel to the {destination.display_name}.",
            )

        combat = self.combat_engine.fight(state, transition.encounter)
        if not combat.won:
            # 패배/도주 시 숲에 남겨두지 않는다
            state.player.location = origin
            logger.info(
                "%s did not win in the %s, back to %s",
                state.player.name,
                destination.key,
                origin.key,
            )
            return TravelResult(
                success=True,
                origin=origin,
                destination=origin,
                message=f"You stumble back to the {origin.display_name}.",
                combat=combat,
            )

        return TravelResult(
            success=True,
            origin=origin,
            destination=destination,
            message=f"You venture into the {destination.display_name}.",
            combat=combat,
        )
