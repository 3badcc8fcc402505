"""Tests for settings and logging setup."""

import pytest
from loguru import logger
from pydantic import ValidationError

from core.config import Config, setup_logging


def test_config_defaults():
    cfg = Config()
    assert cfg.default_length == 16
    assert cfg.history_capacity == 7
    assert cfg.log_file_path is None


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("PWGEN_DEFAULT_LENGTH", "24")
    monkeypatch.setenv("PWGEN_HISTORY_CAPACITY", "3")
    cfg = Config()
    assert cfg.default_length == 24
    assert cfg.history_capacity == 3


def test_config_rejects_inverted_length_range():
    with pytest.raises(ValidationError):
        Config(min_length=20, default_length=16)


def test_config_rejects_empty_history():
    with pytest.raises(ValidationError):
        Config(history_capacity=0)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    setup_logging(Config(log_file_path=log_file, log_level="DEBUG"))
    try:
        logger.debug("hello from test")
        assert "hello from test" in log_file.read_text()
    finally:
        setup_logging(Config())
