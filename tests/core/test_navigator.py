"""Tests for navigator module (location state machine)."""

import pytest

from src.core.combat import CombatEngine, CombatOutcome
from src.core.errors import GameErrorKind
from src.core.locations import Location
from src.core.navigator import TRANSITIONS, Navigator


def _navigator(make_rng, values=(), default=None) -> Navigator:
    return Navigator(CombatEngine(make_rng(values, default=default)))


def _give(state, catalog, *names):
    for name in names:
        state.inventory.add(catalog.get(name).instantiate())


class TestTransitionTable:
    def test_hub_topology(self):
        """모든 장소는 마을로 돌아올 수 있다"""
        for location in Location:
            if location is Location.VILLAGE:
                continue
            assert (location, Location.VILLAGE) in TRANSITIONS
            assert (Location.VILLAGE, location) in TRANSITIONS

    def test_edge_count(self):
        assert len(TRANSITIONS) == 8

    def test_destinations(self):
        assert Navigator.destinations(Location.MARKET) == [Location.VILLAGE]
        assert set(Navigator.destinations(Location.VILLAGE)) == {
            Location.BLACKSMITH,
            Location.MARKET,
            Location.FOREST,
            Location.DRAGON_CAVE,
        }


class TestUnconditional:
    @pytest.mark.parametrize("destination", [Location.BLACKSMITH, Location.MARKET])
    def test_village_to_shop(self, state, make_rng, destination):
        result = _navigator(make_rng).travel(state, destination)
        assert result.success is True
        assert state.player.location == destination

    def test_return_to_village(self, state, make_rng):
        state.player.location = Location.MARKET
        result = _navigator(make_rng).travel(state, Location.VILLAGE)
        assert result.success is True
        assert state.player.location == Location.VILLAGE

    def test_illegal_pair(self, state, make_rng):
        state.player.location = Location.MARKET
        result = _navigator(make_rng).travel(state, Location.BLACKSMITH)
        assert result.success is False
        assert result.error.kind == GameErrorKind.ILLEGAL_TRANSITION
        assert state.player.location == Location.MARKET

    def test_self_loop_illegal(self, state, make_rng):
        result = _navigator(make_rng).travel(state, Location.VILLAGE)
        assert result.success is False


class TestForest:
    def test_blocked_without_weapon(self, state, catalog, make_rng):
        _give(state, catalog, "Health Potion", "Wooden Shield")
        rng_nav = _navigator(make_rng)

        result = rng_nav.travel(state, Location.FOREST)

        assert result.success is False
        assert result.error.kind == GameErrorKind.ILLEGAL_TRANSITION
        assert "weapon" in result.message
        assert state.player.location == Location.VILLAGE
        assert result.combat is None

    def test_enter_and_win(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        result = _navigator(make_rng, [0.5, 0.5, 0.5, 0.5]).travel(state, Location.FOREST)

        assert result.success is True
        assert result.combat.outcome == CombatOutcome.WON
        assert state.player.location == Location.FOREST
        assert state.player.gold == 30

    def test_loss_reverts_to_village(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        state.player.health = 10
        result = _navigator(make_rng, [0.9, 0.1]).travel(state, Location.FOREST)

        assert result.combat.outcome == CombatOutcome.LOST
        assert result.destination == Location.VILLAGE
        assert state.player.location == Location.VILLAGE

    def test_can_travel(self, state, catalog, make_rng):
        nav = _navigator(make_rng)
        assert nav.can_travel(state, Location.FOREST) is False
        _give(state, catalog, "Sword")
        assert nav.can_travel(state, Location.FOREST) is True
        assert state.player.location == Location.VILLAGE


class TestDragonCave:
    def test_basic_sword_rejected(self, state, catalog, make_rng):
        _give(state, catalog, "Sword")
        result = _navigator(make_rng).travel(state, Location.DRAGON_CAVE)

        assert result.success is False
        assert state.player.location == Location.VILLAGE
        assert state.player.health == 100

    def test_steel_sword_without_armor_rejected(self, state, catalog, make_rng):
        _give(state, catalog, "Steel Sword")
        result = _navigator(make_rng).travel(state, Location.DRAGON_CAVE)
        assert result.success is False
        assert state.player.location == Location.VILLAGE

    def test_good_equipment(self, state, catalog, make_rng):
        _give(state, catalog, "Steel Sword", "Wooden Shield")
        rng = make_rng([])
        result = Navigator(CombatEngine(rng)).travel(state, Location.DRAGON_CAVE)

        assert result.success is True
        assert state.player.location == Location.DRAGON_CAVE
        # 동굴 진입 자체는 전투를 일으키지 않는다
        assert result.combat is None
        assert rng.calls == 0
