"""Library configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ROOT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Library settings read from ``PARTIAL_*`` environment variables."""

    default_tag: str = "db"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PARTIAL_",
        env_file=str(_ROOT_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, built on first use."""

    return Settings()
