"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Game balance
    STARTING_HEALTH: int = 100
    STARTING_GOLD: int = 20

    # None = nondeterministic combat rolls
    RNG_SEED: Optional[int] = None

    # Override for the packaged src/data/items.json
    ITEM_CATALOG_PATH: Optional[str] = None


settings = Settings()
