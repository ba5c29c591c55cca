"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Study Planner Backend"
    debug: bool = False
    log_level: str = "INFO"
    scheduling_log_level: str | None = None
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "study-planner"
    default_max_hours_per_day: float = 6.0
    default_horizon_days: int = 7
    max_horizon_days: int = 60


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
