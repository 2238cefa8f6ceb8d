"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the csvx validation engine.

    Values are read from ``CSVX_``-prefixed environment variables and from
    a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="CSVX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # csvx dialect targeted by filename and schema parsing (1 or 4)
    csvx_version: int = 4

    # Row checks
    validation_workers: int = Field(default=1, ge=1)  # 1 = sequential
    rows_per_task: int = Field(default=2000, ge=1)


def configure_logging(settings: Settings) -> None:
    """Apply ``log_level`` to the ``csvx`` logger hierarchy."""
    logging.getLogger("csvx").setLevel(settings.log_level.upper())
