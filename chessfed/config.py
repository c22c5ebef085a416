from pydantic_settings import BaseSettings
from functools import lru_cache
import os

from chessfed.constants import BYE_SCORE, DEFAULT_RATING


class Settings(BaseSettings):
    # App
    app_name: str = "ChessFed"
    debug: bool = False  # Set to False in production
    environment: str = "development"  # development, staging, production, testing
    log_level: str = "INFO"

    # Database - can be overridden with DATABASE_URL env var
    # Note: SQLite absolute paths need 4 slashes (sqlite:////path)
    database_url: str = (
        "sqlite+aiosqlite:///:memory:"
        if os.environ.get("TESTING") == "1"
        else (
            "sqlite+aiosqlite:////data/chessfed.db"
            if os.path.exists("/data")
            else "sqlite+aiosqlite:///./chessfed.db"
        )
    )

    # Ratings
    default_rating: int = DEFAULT_RATING  # Floor rating for unrated players

    # Swiss pairing
    bye_score: float = BYE_SCORE  # 1.0 full point, 0.5 half point

    class Config:
        env_file = ".env"

    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
