"""Shared logging helpers for aptintel."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_LEVEL_ENV = "APTINTEL_LOG_LEVEL"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Set up root logging for the CLI: timestamped lines tagged with logger name.

    A no-op once the root logger has handlers, unless ``force`` replaces them.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level(default: int = logging.INFO) -> int:
    """Log level from ``APTINTEL_LOG_LEVEL`` (a level name such as ``DEBUG``)."""

    raw = os.getenv(LOG_LEVEL_ENV)
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be a logging level name, got {raw!r}")
    return level
