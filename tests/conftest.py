"""Shared test fixtures."""

from typing import Iterable, Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from src.api.game import get_game_service
from src.core.engine import GameEngine
from src.core.item.registry import ItemCatalog
from src.core.player import GameState, PlayerState
from src.main import app
from src.services.game_service import GameService


class ScriptedRandom:
    """미리 정한 순서대로 값을 돌려주는 난수원.

    값이 바닥나면 default 를 반환하고, default 도 없으면 IndexError.
    """

    def __init__(self, values: Iterable[float], default: Optional[float] = None):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        if self.default is None:
            raise IndexError("ScriptedRandom exhausted")
        return self.default


@pytest.fixture()
def make_rng():
    """ScriptedRandom 팩토리"""
    return ScriptedRandom


@pytest.fixture()
def catalog() -> ItemCatalog:
    """패키지 기본 카탈로그"""
    return ItemCatalog.default()


@pytest.fixture()
def state() -> GameState:
    """새 게임 상태 (체력 100, 골드 20, 마을)"""
    return GameState(player=PlayerState(name="Tester"))


@pytest.fixture()
def engine(catalog: ItemCatalog) -> GameEngine:
    """모든 판정이 명중하는 엔진 (0.5 고정)"""
    return GameEngine(catalog=catalog, rng=ScriptedRandom([], default=0.5))


@pytest.fixture()
def game_service(engine: GameEngine) -> GameService:
    return GameService(engine)


@pytest.fixture()
def client(game_service: GameService) -> Iterator[TestClient]:
    """FastAPI TestClient wired to an in-memory GameService."""
    app.state.game_service = game_service
    app.dependency_overrides[get_game_service] = lambda: game_service
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.game_service = None
