"""Application configuration management."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from termtimer.models import AppConfig

_CONFIG_DIR = Path.home() / ".config" / "termtimer"
_CONFIG_FILE = _CONFIG_DIR / "config.json"
_DEBUG_LOG = "debug.log"

DEBUG_ENV = "TERMTIMER_DEBUG"


def load_config() -> AppConfig:
    """Load config from disk, returning defaults if none exists."""
    if _CONFIG_FILE.exists():
        try:
            data = json.loads(_CONFIG_FILE.read_text(encoding="utf-8"))
            return AppConfig(**data)
        except (OSError, ValueError, TypeError, ValidationError):
            pass
    return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Write config to disk. Returns the config file path."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2), encoding="utf-8")
    return _CONFIG_FILE


def set_default_minutes(minutes: int) -> AppConfig:
    """Change the duration used when none (or an invalid one) is given.

    Raises ``ValidationError`` for values outside 1..1440.
    """
    config = load_config()
    config = AppConfig(**{**config.model_dump(), "default_minutes": minutes})
    save_config(config)
    return config


def set_bell(enabled: bool) -> AppConfig:
    config = load_config()
    config.bell = enabled
    save_config(config)
    return config


def reset_config() -> AppConfig:
    """Reset every setting to its default."""
    config = AppConfig()
    save_config(config)
    return config


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV) == "1"


def configure_debug_logging() -> Path | None:
    """Send DEBUG logs to a file when ``TERMTIMER_DEBUG=1``.

    The screen belongs to the countdown, so nothing is logged to the
    terminal. Returns the log file path, or None when debugging is off.
    """
    if not debug_enabled():
        return None
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    path = _CONFIG_DIR / _DEBUG_LOG
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger = logging.getLogger("termtimer")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return path
