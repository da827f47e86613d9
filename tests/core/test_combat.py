"""CombatEngine 테스트 (난수원 주입으로 재현)"""

import pytest

from src.core.combat import (
    DRAGON_NO_EQUIPMENT_PENALTY,
    MAX_ROUNDS,
    CombatEngine,
    CombatOutcome,
    Opponent,
    OpponentKind,
    mitigate_damage,
)
from src.core.item.models import ItemPrototype, ItemType
from src.core.item.registry import ItemCatalog
from src.core.player import GameState


def _give(state: GameState, catalog: ItemCatalog, *names: str) -> None:
    for name in names:
        state.inventory.add(catalog.get(name).instantiate())


class TestOpponents:
    def test_monster_stats(self):
        monster = Opponent.spawn(OpponentKind.MONSTER)
        assert monster.attack_damage == 10
        assert monster.health == 10
        assert monster.hit_chance == 0.6

    def test_dragon_stats(self):
        dragon = Opponent.spawn(OpponentKind.DRAGON)
        assert dragon.attack_damage == 20
        assert dragon.health == 50
        assert dragon.hit_chance == 0.7

    def test_spawn_is_fresh(self):
        a = Opponent.spawn(OpponentKind.MONSTER)
        a.health = 0
        assert Opponent.spawn(OpponentKind.MONSTER).health == 10


class TestMitigation:
    def test_no_armor(self):
        assert mitigate_damage(20, 0) == 20

    def test_armor_reduces(self):
        assert mitigate_damage(20, 10) == 10

    def test_floor_of_one(self):
        assert mitigate_damage(10, 15) == 1
        assert mitigate_damage(10, 10) == 1


class TestMonsterCombat:
    def test_one_hit_kill(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        state.player.gold = 10
        rng = make_rng([0.5, 0.5, 0.5, 0.5])

        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)

        assert result.outcome == CombatOutcome.WON
        assert result.rounds == 1
        assert state.player.gold == 20
        assert state.player.health == 100
        # 승리 즉시 종료, 반격 판정 없음
        assert rng.calls == 1

    def test_miss_then_hit(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        # 플레이어 빗나감, 몬스터 명중(10), 플레이어 명중
        rng = make_rng([0.8, 0.1, 0.2])

        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)

        assert result.outcome == CombatOutcome.WON
        assert result.rounds == 2
        assert state.player.health == 90
        assert result.damage_taken == 10
        assert [r.attacker for r in result.log] == ["Tester", "Monster", "Tester"]
        assert [r.hit for r in result.log] == [False, True, True]

    def test_hit_chance_boundaries(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        # 0.7 은 플레이어 빗나감, 0.6 은 몬스터 빗나감 (strict <)
        rng = make_rng([0.7, 0.6, 0.0])

        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)

        assert result.outcome == CombatOutcome.WON
        assert state.player.health == 100

    def test_player_loses(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        state.player.health = 10
        rng = make_rng([0.9, 0.1])

        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)

        assert result.outcome == CombatOutcome.LOST
        assert state.player.health == 0
        assert state.player.gold == 20

    def test_armor_floor_one(self, state, make_rng):
        state.inventory.add(ItemPrototype("Stick", ItemType.WEAPON, 0, 5).instantiate())
        state.inventory.add(ItemPrototype("Tower", ItemType.ARMOR, 0, 15).instantiate())
        # 미스, 명중(1), 명중, 명중 → 몬스터 체력 10 = 5 + 5
        rng = make_rng([0.9, 0.0, 0.0, 0.9, 0.0])

        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)

        assert result.outcome == CombatOutcome.WON
        assert state.player.health == 99

    def test_uses_best_weapon(self, state, catalog, make_rng):
        _give(state, catalog, "Sword", "Steel Sword")
        result = CombatEngine(make_rng([0.0])).fight(state, OpponentKind.MONSTER)
        assert result.weapon == "Steel Sword"
        assert result.damage_dealt == 10  # 몬스터 체력 이상으로는 집계하지 않음

    def test_refused_without_weapon(self, state, make_rng):
        rng = make_rng([])
        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)
        assert result.outcome == CombatOutcome.REFUSED
        assert state.player.health == 100
        assert rng.calls == 0

    def test_zero_weapon_loses(self, state, make_rng):
        state.inventory.add(ItemPrototype("Twig", ItemType.WEAPON, 0, 0).instantiate())
        rng = make_rng([], default=0.0)
        # 무기 0, 방어구 없음 → 플레이어가 먼저 쓰러진다
        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)
        assert result.outcome == CombatOutcome.LOST

    def test_round_cap_stalemate(self, state, make_rng):
        state.inventory.add(ItemPrototype("Twig", ItemType.WEAPON, 0, 0).instantiate())
        rng = make_rng([], default=0.99)
        result = CombatEngine(rng).fight(state, OpponentKind.MONSTER)
        assert result.outcome == CombatOutcome.RETREATED
        assert result.rounds == MAX_ROUNDS
        assert rng.calls == MAX_ROUNDS * 2


class TestDragonCombat:
    def test_flee_without_equipment(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        rng = make_rng([])

        result = CombatEngine(rng).fight(state, OpponentKind.DRAGON)

        assert result.outcome == CombatOutcome.FLED
        assert state.player.health == 100 - DRAGON_NO_EQUIPMENT_PENALTY
        assert result.damage_taken == 70
        assert rng.calls == 0
        assert state.game_over is False

    def test_flee_penalty_clamped(self, state, make_rng):
        state.player.health = 50
        CombatEngine(make_rng([])).fight(state, OpponentKind.DRAGON)
        assert state.player.health == 0

    def test_unarmored_hit_is_full_damage(self, state, catalog, make_rng):
        # 방어력 0 → 드래곤 공격력 그대로
        _give(state, catalog, "Steel Sword", "Wooden Shield")
        state.inventory.remove_at(1)
        state.inventory.add(ItemPrototype("Paper", ItemType.ARMOR, 0, 0).instantiate())
        rng = make_rng([0.9], default=0.0)

        result = CombatEngine(rng).fight(state, OpponentKind.DRAGON)

        dragon_hits = [r for r in result.log if r.attacker == "Dragon" and r.hit]
        assert dragon_hits[0].damage == 20

    def test_victory(self, state, catalog, make_rng):
        _give(state, catalog, "Steel Sword", "Iron Armor")
        rng = make_rng([0.5] * 5)

        result = CombatEngine(rng).fight(state, OpponentKind.DRAGON)

        assert result.outcome == CombatOutcome.WON
        assert result.rounds == 3
        assert state.player.health == 80  # 두 번 피격, 20 - 10 = 10씩
        assert state.player.gold == 120
        assert state.victory is True
        assert state.game_over is True

    @pytest.mark.parametrize("roll, hit", [(0.65, True), (0.7, False)])
    def test_dragon_hit_chance(self, state, catalog, make_rng, roll, hit):
        _give(state, catalog, "Steel Sword", "Iron Armor")
        state.player.health = 100
        rng = make_rng([0.9, roll, 0.0, 0.0, 0.0, 0.0, 0.0])
        result = CombatEngine(rng).fight(state, OpponentKind.DRAGON)
        assert result.log[1].hit is hit
