from functools import lru_cache
from typing import List, Set

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATA_FILE: str = "data/data.json"
    ADMIN_IDS: str = ""  # Comma-separated user ids
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: str = "public"
    CORS_ORIGINS: str = "*"
    LEADERBOARD_LIMIT: int = 50
    STARTING_RATING: int = 1000

    @property
    def admin_ids(self) -> Set[int]:
        return {int(part) for part in self.ADMIN_IDS.split(",") if part.strip()}

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
