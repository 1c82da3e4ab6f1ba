"""
Runtime settings for the CLI and the HTTP service.
Values come from INVOICE_VALIDATOR_* environment variables or a .env file.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INVOICE_VALIDATOR_", env_file=".env", extra="ignore")

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    report_indent: int = 2


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logging for entry points; library modules only create loggers."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
