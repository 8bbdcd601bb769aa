"""Application configuration loaded from environment variables and .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # New character defaults
    HOME_LOCATION: str = "home"
    DEFAULT_ARCHETYPE: str = "balanced"
    STARTING_MONEY: int = 200
    MAX_ENERGY: int = 100
    STARTING_TIME: str = "08:00"

    # Activity catalog
    ACTIVITY_CATALOG_PATH: str = str(DATA_DIR / "activities.json")

    # Fixed seed for the app-level random.Random (None = nondeterministic)
    RNG_SEED: Optional[int] = None


settings = Settings()
