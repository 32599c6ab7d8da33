"""Logging utilities for the lift training engine.

Every engine module logs through a named child of ``lift-training``. The
level is shared: ``configure_logging`` applies ``EngineSettings.log_level``
to the loggers already handed out and to any created afterwards.
"""

from __future__ import annotations

import logging
from typing import Optional

from liftcore.config import DEFAULT_SETTINGS, EngineSettings

_LOGGERS: dict[str, logging.Logger] = {}
_level: int = logging.getLevelName(DEFAULT_SETTINGS.log_level)

DEFAULT_LOGGER = "lift-training"


def get_logger(name: str = DEFAULT_LOGGER) -> logging.Logger:
    """Return a cached logger with a single stream handler."""
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(_level)
    logger.propagate = False

    _LOGGERS[name] = logger
    return logger


def configure_logging(settings: EngineSettings) -> int:
    """Apply the settings' log level to every engine logger. Returns the level."""
    global _level
    _level = logging.getLevelName(settings.log_level)
    for logger in _LOGGERS.values():
        logger.setLevel(_level)
    return _level


def reset_logger(name: str) -> None:
    """Remove cached loggers, useful for testing."""
    existing: Optional[logging.Logger] = _LOGGERS.pop(name, None)
    if existing:
        for handler in list(existing.handlers):
            existing.removeHandler(handler)
            handler.close()
