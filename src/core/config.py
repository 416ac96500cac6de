"""
Centralized application configuration.

All settings are read from environment variables prefixed with CHESS3D_ (or a .env.chess3d file).
Every setting has a default, so nothing is required to start.
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHESS3D_",
        env_file=".env.chess3d",
        env_file_encoding="utf-8",
    )

    # Persistence
    database_url: str = "sqlite:///./chess3d.db"
    database_echo: bool = False

    # Rules: discard moves that leave your own king in check (off = the classic simplified rules)
    filter_self_check: bool = False

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
