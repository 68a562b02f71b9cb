from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Default pool, per color
    bees: int = 1
    beetles: int = 2
    grasshoppers: int = 3
    spiders: int = 2
    ants: int = 3

    model_config = SettingsConfigDict(
        env_prefix="HIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a root handler at *level* (defaults to settings.log_level)."""
    logging.basicConfig(level=(level or settings.log_level).upper())
