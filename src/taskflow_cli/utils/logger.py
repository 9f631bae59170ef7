"""Application-wide logger writing to platformdirs user_log_dir.

Every CLI invocation is its own process and they all append to the same
rotating file, so each record carries the process id. Layers log through
components of the root application logger, e.g. ``get_logger("services")``
writes as ``taskflow_cli.services``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskflow_cli"
_LOG_FILE = "taskflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(process)d %(levelname)-8s [%(name)s] %(message)s"

LEVEL_ENV_VAR = "TASKFLOW_LOG_LEVEL"

_logger: logging.Logger | None = None


def _file_handler(log_dir: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or one of its components.

    The root application logger is initialised on first call. Handlers left
    on it from an earlier initialisation are closed and replaced so that the
    logger always writes to the current log directory.
    """
    global _logger
    if _logger is None:
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)

        logger = logging.getLogger(_APP_NAME)
        for stale in list(logger.handlers):
            logger.removeHandler(stale)
            stale.close()
        logger.addHandler(_file_handler(log_dir))
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.disabled = False
        _logger = logger

    if component:
        return _logger.getChild(component)
    return _logger


def log_file_path() -> Path:
    """Path of the file the application logger currently writes to."""
    for handler in get_logger().handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def set_level(level: str) -> None:
    """Apply a level name (e.g. "INFO") to the application logger.

    ``TASKFLOW_LOG_LEVEL`` in the environment takes precedence over *level*.
    Unknown names fall back to INFO.
    """
    name = os.environ.get(LEVEL_ENV_VAR) or level
    resolved = logging.getLevelName(name.strip().upper())
    get_logger().setLevel(resolved if isinstance(resolved, int) else logging.INFO)
