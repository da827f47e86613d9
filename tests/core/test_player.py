"""PlayerState / GameState 테스트"""

import pytest

from src.core.locations import Location
from src.core.player import GameState, PlayerState


class TestHealthClamp:
    def test_huge_damage_floors_at_zero(self):
        player = PlayerState(name="p")
        assert player.update_health(-1000) == 0
        assert player.is_alive is False

    def test_overheal_caps_at_100(self):
        player = PlayerState(name="p", health=90)
        assert player.update_health(1000) == 100

    def test_normal_change(self):
        player = PlayerState(name="p", health=50)
        assert player.update_health(-20) == 30
        assert player.update_health(15) == 45

    def test_construction_clamped(self):
        assert PlayerState(name="p", health=150).health == 100
        assert PlayerState(name="p", health=-5).health == 0


class TestGold:
    def test_spend(self):
        player = PlayerState(name="p", gold=20)
        assert player.spend_gold(15) is True
        assert player.gold == 5

    def test_spend_rejected(self):
        player = PlayerState(name="p", gold=5)
        assert player.spend_gold(6) is False
        assert player.gold == 5

    def test_earn(self):
        player = PlayerState(name="p", gold=0)
        assert player.earn_gold(100) == 100

    def test_negative_amounts(self):
        player = PlayerState(name="p")
        with pytest.raises(ValueError):
            player.spend_gold(-1)
        with pytest.raises(ValueError):
            player.earn_gold(-1)

    def test_negative_start_gold(self):
        with pytest.raises(ValueError):
            PlayerState(name="p", gold=-1)


class TestGameState:
    def test_defaults(self):
        state = GameState(player=PlayerState(name="Hero"))
        assert state.player.health == 100
        assert state.player.gold == 20
        assert state.player.location == Location.VILLAGE
        assert len(state.inventory) == 0
        assert state.is_running is True

    def test_flags_stop_running(self):
        state = GameState(player=PlayerState(name="Hero"))
        state.quit = True
        assert state.is_running is False

    def test_to_dict(self):
        state = GameState(player=PlayerState(name="Hero"))
        data = state.to_dict()
        assert data["player"]["location"] == "village"
        assert data["inventory"] == []
        assert data["game_id"] == state.game_id

    def test_location_key_roundtrip(self):
        assert Location.from_key("dragon_cave") is Location.DRAGON_CAVE
        with pytest.raises(ValueError):
            Location.from_key("castle")
