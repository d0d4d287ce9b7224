"""Tests for the config module."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from termtimer.config import (
    configure_debug_logging,
    load_config,
    reset_config,
    save_config,
    set_bell,
    set_default_minutes,
)
from termtimer.models import AppConfig


@pytest.fixture(autouse=True)
def _tmp_config(tmp_path: Path):
    """Redirect config dir/file to tmp_path."""
    cfg_dir = tmp_path / "config"
    with patch("termtimer.config._CONFIG_DIR", cfg_dir), \
            patch("termtimer.config._CONFIG_FILE", cfg_dir / "config.json"):
        yield cfg_dir


class TestLoadSaveConfig:
    def test_load_default_when_missing(self) -> None:
        config = load_config()
        assert config.default_minutes == 25
        assert config.bell is True

    def test_save_and_load_roundtrip(self) -> None:
        path = save_config(AppConfig(default_minutes=50, bell=False))
        assert path.exists()

        loaded = load_config()
        assert loaded.default_minutes == 50
        assert loaded.bell is False

    def test_load_handles_corrupt_file(self, _tmp_config: Path) -> None:
        _tmp_config.mkdir(parents=True)
        (_tmp_config / "config.json").write_text("not valid json{{{")
        assert load_config().default_minutes == 25

    def test_load_handles_invalid_values(self, _tmp_config: Path) -> None:
        _tmp_config.mkdir(parents=True)
        (_tmp_config / "config.json").write_text('{"default_minutes": -3}')
        assert load_config().default_minutes == 25

    def test_load_handles_non_object(self, _tmp_config: Path) -> None:
        _tmp_config.mkdir(parents=True)
        (_tmp_config / "config.json").write_text("[1, 2]")
        assert load_config() == AppConfig()


class TestSettings:
    def test_set_default_minutes(self) -> None:
        cfg = set_default_minutes(45)
        assert cfg.default_minutes == 45
        assert load_config().default_minutes == 45

    def test_set_default_minutes_keeps_bell(self) -> None:
        set_bell(False)
        set_default_minutes(10)
        assert load_config().bell is False

    def test_set_default_minutes_rejects_zero(self) -> None:
        with pytest.raises(ValidationError):
            set_default_minutes(0)
        assert load_config().default_minutes == 25

    def test_reset(self) -> None:
        set_default_minutes(45)
        set_bell(False)
        assert reset_config() == AppConfig()
        assert load_config() == AppConfig()


class TestDebugLogging:
    def test_disabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TERMTIMER_DEBUG", raising=False)
        assert configure_debug_logging() is None

    def test_writes_log_file(self, monkeypatch: pytest.MonkeyPatch, _tmp_config: Path) -> None:
        monkeypatch.setenv("TERMTIMER_DEBUG", "1")
        logger = logging.getLogger("termtimer")
        before = list(logger.handlers)
        try:
            path = configure_debug_logging()
            assert path == _tmp_config / "debug.log"
            logging.getLogger("termtimer.driver").debug("hello")
            for handler in logger.handlers:
                handler.flush()
            assert "hello" in path.read_text(encoding="utf-8")
        finally:
            for handler in logger.handlers[len(before):]:
                handler.close()
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)


class TestUnreadableConfig:
    def test_invalid_utf8_uses_defaults(self, _tmp_config: Path) -> None:
        _tmp_config.mkdir(parents=True)
        (_tmp_config / "config.json").write_bytes(b'{"default_minutes": 5\xff}')
        assert load_config() == AppConfig()

    def test_unreadable_path_uses_defaults(self, _tmp_config: Path) -> None:
        (_tmp_config / "config.json").mkdir(parents=True)
        assert load_config() == AppConfig()
