"""Client configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from NOTES_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote collection
    base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0

    # Editor behaviour
    autosave_delay_ms: int = 2000
    notification_ms: int = 3000
    preview_length: int = 100

    stylesheet: Path = Path("style.qss")
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
