"""
Application settings.

Read from environment variables prefixed with PCN_ (ex. PCN_DATABASE_URL, PCN_LOG_LEVEL).
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PCN_")

    database_url: str = Field(
        default="sqlite:///./pcn.db", description="SQLAlchemy URL of the record store"
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    log_level: LogLevel = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
