"""Logging setup shared by the web service and the headless CLI.

Everything this project logs sits under the ``creatures`` (simulation core)
and ``backend`` (API) logger trees, plus the CLI module. Those trees get the
resolved level; the root logger only receives the handler.
"""

from __future__ import annotations

import logging
import os

from creatures.exceptions import ConfigurationError

LOG_LEVEL_ENV = "CREATURES_LOG_LEVEL"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

SERVICE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
SERVICE_DATEFMT = "%Y-%m-%d %H:%M:%S"
# Headless runs log the simulated clock themselves
HEADLESS_FORMAT = "%(levelname)-7s %(name)s: %(message)s"

PROJECT_LOGGERS = ("creatures", "backend", "main", "__main__")
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str | None = None) -> str:
    """Level name from ``level``, else ``CREATURES_LOG_LEVEL``, else INFO."""
    raw = level if level is not None else os.getenv(LOG_LEVEL_ENV)
    name = (raw or "INFO").strip().upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level {raw!r}; expected one of {LOG_LEVELS}")
    return name


def configure_logging(*, level: str | None = None, headless: bool = False) -> logging.Logger:
    """Install the stderr handler and set the project loggers' level.

    Args:
        level: Explicit level name; overrides the environment.
        headless: Use the compact CLI format and leave uvicorn's loggers alone.

    Returns:
        The ``backend`` logger.
    """
    resolved = resolve_level(level)
    if headless:
        logging.basicConfig(level=resolved, format=HEADLESS_FORMAT)
    else:
        logging.basicConfig(level=resolved, format=SERVICE_FORMAT, datefmt=SERVICE_DATEFMT)

    names = PROJECT_LOGGERS if headless else PROJECT_LOGGERS + UVICORN_LOGGERS
    for name in names:
        logging.getLogger(name).setLevel(resolved)

    backend_logger = logging.getLogger("backend")
    backend_logger.debug("Logging configured at %s (headless=%s)", resolved, headless)
    return backend_logger
