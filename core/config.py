# core/config.py
from __future__ import annotations
from datetime import timedelta
from pathlib import Path
import sys

from loguru import logger
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PWGEN_")

    default_length: int = 16
    min_length: int = 4
    max_length: int = 64
    history_capacity: int = 7
    default_quantity: int = 1
    max_quantity: int = 20
    log_level: str = "INFO"
    log_file_path: Path | None = None

    @model_validator(mode="after")
    def _check_ranges(self) -> "Config":
        if not 1 <= self.min_length <= self.default_length <= self.max_length:
            raise ValueError(
                f"Expected 1 <= min_length <= default_length <= max_length, got "
                f"{self.min_length}/{self.default_length}/{self.max_length}"
            )
        if self.history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")
        if not 1 <= self.default_quantity <= self.max_quantity:
            raise ValueError("Expected 1 <= default_quantity <= max_quantity")
        return self


config = Config()


def setup_logging(cfg: Config = config) -> None:
    """Replace loguru sinks: stderr at cfg.log_level, plus a rotating file when configured."""
    logger.remove()
    logger.add(sys.stderr, level=cfg.log_level, backtrace=True, diagnose=False)

    if cfg.log_file_path is not None:
        cfg.log_file_path.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            cfg.log_file_path.resolve(),
            rotation="10 MB",
            retention=timedelta(days=7),
            backtrace=True,
            diagnose=False,
            level=cfg.log_level,
        )
