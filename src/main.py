"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.game import router as game_router
from src.api.health import router as health_router
from src.config import settings
from src.core.engine import build_engine
from src.core.logging import get_logger, setup_logging
from src.services.game_service import GameService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # 게임 엔진 초기화
    logger.info("Initializing game engine...")
    engine = build_engine(
        catalog_path=settings.ITEM_CATALOG_PATH,
        seed=settings.RNG_SEED,
        starting_health=settings.STARTING_HEALTH,
        starting_gold=settings.STARTING_GOLD,
    )
    logger.info("Game engine initialized.")

    # GameService 초기화
    app.state.game_service = GameService(engine)
    logger.info("GameService initialized.")

    yield

    # 종료 시 정리
    logger.info("Shutting down (%d sessions discarded)...", app.state.game_service.active_count())
    app.state.game_service = None


app = FastAPI(title="Village Adventure", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
