"""Configuration utilities for the dialplan translator."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    environment: str = Field(
        default="development",
        description="Name of the current environment (development, staging, production).",
    )
    data_path: Path = Field(
        default=Path("data/dialplan.json"),
        description="Filesystem location of the JSON document holding scripts and contexts.",
    )
    fastagi_host: str = Field(
        default="127.0.0.1",
        description="FastAGI host used when the store has no configured value.",
    )
    generator_name: str = Field(
        default="Dialplan Translator",
        description="Name written into the footer of every generated dialplan.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def ensure_data_directory(path: Path) -> None:
    """Ensure the directory containing the data file exists."""

    path.parent.mkdir(parents=True, exist_ok=True)
