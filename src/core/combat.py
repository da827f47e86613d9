"""
Village Adventure - 전투 엔진
=============================
플레이어 vs 상대(몬스터/드래곤) 턴제 교전 판정

[라운드 규칙]
1. 플레이어 공격: random() < 0.7 이면 명중, 상대 체력 -= 무기 effect
   상대 체력이 0이 되면 즉시 승리 (반격 없음)
2. 상대 공격: random() < 상대 명중률 이면 명중
   피해 = max(1, 공격력 - 방어구 effect)
3. 둘 다 살아있는 동안 반복

무기/방어구는 전투 시작 시점의 best_of_type 으로 결정한다.
난수원은 random() 를 가진 객체면 무엇이든 주입 가능 (테스트 재현성).
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from src.core.item.models import ItemType
from src.core.logging import get_logger
from src.core.player import GameState

logger = get_logger(__name__)

PLAYER_HIT_CHANCE = 0.7
DRAGON_NO_EQUIPMENT_PENALTY = 70
MIN_DAMAGE = 1
MAX_ROUNDS = 1000


class RandomSource(Protocol):
    """[0, 1) 균등 난수원 (random.Random 호환)"""

    def random(self) -> float: ...


class OpponentKind(Enum):
    """상대 원형 (이름, 공격력, 체력, 명중률, 보상 골드)"""

    MONSTER = ("Monster", 10, 10, 0.6, 10)
    DRAGON = ("Dragon", 20, 50, 0.7, 100)

    def __init__(
        self, display_name: str, damage: int, health: int, hit_chance: float, reward: int
    ):
        self.display_name = display_name
        self.damage = damage
        self.base_health = health
        self.hit_chance = hit_chance
        self.reward = reward


@dataclass
class Opponent:
    """전투 한 번 동안만 존재하는 상대"""

    kind: OpponentKind
    name: str
    attack_damage: int
    health: int
    hit_chance: float
    gold_reward: int

    @classmethod
    def spawn(cls, kind: OpponentKind) -> "Opponent":
        return cls(
            kind=kind,
            name=kind.display_name,
            attack_damage=kind.damage,
            health=kind.base_health,
            hit_chance=kind.hit_chance,
            gold_reward=kind.reward,
        )

    @property
    def is_alive(self) -> bool:
        return self.health > 0


class CombatOutcome(Enum):
    """전투 결과"""

    WON = "won"  # 상대 체력 0
    LOST = "lost"  # 플레이어 체력 0
    FLED = "fled"  # 드래곤: 장비 부족으로 화상 입고 도주
    REFUSED = "refused"  # 몬스터: 무기 없음, 전투 불성립
    RETREATED = "retreated"  # 라운드 상한 도달


@dataclass
class CombatRound:
    """한 번의 공격 기록"""

    round_number: int
    attacker: str
    hit: bool
    damage: int
    target_health: int

    def to_dict(self) -> dict:
        return {
            "round": self.round_number,
            "attacker": self.attacker,
            "hit": self.hit,
            "damage": self.damage,
            "target_health": self.target_health,
        }


@dataclass
class CombatResult:
    """전투 결과 데이터"""

    outcome: CombatOutcome
    opponent_name: str
    rounds: int = 0
    damage_dealt: int = 0
    damage_taken: int = 0
    gold_earned: int = 0
    weapon: Optional[str] = None
    armor: Optional[str] = None
    log: List[CombatRound] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.outcome == CombatOutcome.WON

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "opponent": self.opponent_name,
            "rounds": self.rounds,
            "damage_dealt": self.damage_dealt,
            "damage_taken": self.damage_taken,
            "gold_earned": self.gold_earned,
            "weapon": self.weapon,
            "armor": self.armor,
            "log": [r.to_dict() for r in self.log],
        }


def mitigate_damage(raw_damage: int, armor_effect: int) -> int:
    """방어구 경감. 최소 1."""
    return max(MIN_DAMAGE, raw_damage - armor_effect)


class CombatEngine:
    """
    전투 판정 엔진

    전투 상태는 호출 사이에 남지 않는다.
    매 호출이 GameState 만으로 시작되는 독립 시뮬레이션이다.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def fight(self, state: GameState, kind: OpponentKind) -> CombatResult:
        """
        전투 실행

        Args:
            state: 게임 상태 (체력/골드/플래그가 변경됨)
            kind: 상대 원형

        Returns:
            CombatResult
        """
        inventory = state.inventory
        player = state.player

        if kind == OpponentKind.DRAGON and not inventory.has_good_equipment():
            return self._flee_scorched(state)

        weapon = inventory.best_of_type(ItemType.WEAPON)
        if weapon is None:
            logger.warning("Combat refused: %s has no weapon", player.name)
            return CombatResult(
                outcome=CombatOutcome.REFUSED,
                opponent_name=kind.display_name,
                messages=[f"You have no weapon to fight the {kind.display_name}."],
            )

        armor = inventory.best_of_type(ItemType.ARMOR)
        armor_effect = armor.effect if armor else 0
        opponent = Opponent.spawn(kind)

        result = CombatResult(
            outcome=CombatOutcome.RETREATED,
            opponent_name=opponent.name,
            weapon=weapon.name,
            armor=armor.name if armor else None,
        )
        result.messages.append(
            f"A {opponent.name} appears! You fight with your {weapon.name}."
        )
        logger.info(
            "Combat start: %s (hp=%d, weapon=%s, armor=%s) vs %s (hp=%d)",
            player.name,
            player.health,
            weapon.name,
            result.armor,
            opponent.name,
            opponent.health,
        )

        while opponent.is_alive and player.is_alive:
            if result.rounds >= MAX_ROUNDS:
                result.messages.append(f"The {opponent.name} slinks away. You retreat.")
                logger.warning("Combat hit round cap (%d)", MAX_ROUNDS)
                return result
            result.rounds += 1

            # 1. 플레이어 턴
            if self.rng.random() < PLAYER_HIT_CHANCE:
                dealt = min(weapon.effect, opponent.health)
                opponent.health -= dealt
                result.damage_dealt += dealt
                result.log.append(
                    CombatRound(result.rounds, player.name, True, dealt, opponent.health)
                )
                result.messages.append(
                    f"You hit the {opponent.name} for {weapon.effect} damage."
                )
            else:
                result.log.append(
                    CombatRound(result.rounds, player.name, False, 0, opponent.health)
                )
                result.messages.append("You miss!")

            if not opponent.is_alive:
                break

            # 2. 상대 턴
            if self.rng.random() < opponent.hit_chance:
                damage = mitigate_damage(opponent.attack_damage, armor_effect)
                before = player.health
                player.update_health(-damage)
                result.damage_taken += before - player.health
                result.log.append(
                    CombatRound(result.rounds, opponent.name, True, damage, player.health)
                )
                result.messages.append(
                    f"The {opponent.name} hits you for {damage} damage. "
                    f"Health: {player.health}."
                )
            else:
                result.log.append(
                    CombatRound(result.rounds, opponent.name, False, 0, player.health)
                )
                result.messages.append(f"The {opponent.name} misses!")

            logger.debug(
                "Round %d: player=%d, %s=%d",
                result.rounds,
                player.health,
                opponent.name,
                opponent.health,
            )

        if not opponent.is_alive:
            self._resolve_victory(state, opponent, result)
        else:
            result.outcome = CombatOutcome.LOST
            result.messages.append(f"The {opponent.name} has defeated you...")

        logger.info(
            "Combat end: %s vs %s -> %s in %d rounds",
            player.name,
            opponent.name,
            result.outcome.value,
            result.rounds,
        )
        return result

    def _resolve_victory(
        self, state: GameState, opponent: Opponent, result: CombatResult
    ) -> None:
        """승리 보상. 드래곤 처치는 유일한 게임 승리 조건."""
        result.outcome = CombatOutcome.WON
        result.gold_earned = opponent.gold_reward
        state.player.earn_gold(opponent.gold_reward)
        result.messages.append(
            f"You defeated the {opponent.name}! You found {opponent.gold_reward} gold."
        )

        if opponent.kind == OpponentKind.DRAGON:
            state.victory = True
            state.game_over = True
            result.messages.extend(
                [
                    "The dragon crashes to the cave floor.",
                    f"The village will sing of {state.player.name} the Dragonslayer!",
                    "Congratulations, you have won the game!",
                ]
            )

    def _flee_scorched(self, state: GameState) -> CombatResult:
        """장비 없이 드래곤에 도전 → 고정 피해 후 도주"""
        before = state.player.health
        after = state.player.update_health(-DRAGON_NO_EQUIPMENT_PENALTY)
        logger.info(
            "%s fled the dragon without proper equipment (%d -> %d)",
            state.player.name,
            before,
            after,
        )
        return CombatResult(
            outcome=CombatOutcome.FLED,
            opponent_name=OpponentKind.DRAGON.display_name,
            damage_taken=before - after,
            messages=[
                "The dragon's fire is too strong without proper equipment!",
                f"You flee, scorched. Health: {after}.",
            ],
        )
