"""Package settings from environment variables and logging setup."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"
    log_format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"

    model_config = {"env_prefix": "TERNARYPLOT_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a root handler using the configured level and format.

    Library code only logs through module loggers; hosts call this once.
    """
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=settings.log_format,
    )
