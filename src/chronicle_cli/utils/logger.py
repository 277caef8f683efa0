"""Application logger.

Everything under the ``chronicle_cli`` package logs to one rotating file in
the platformdirs user log directory. Set ``CHRONICLE_LOG_LEVEL`` (for example
``INFO``) to log less; the default is ``DEBUG``, so phase transitions show up.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "chronicle_cli"
_LOG_FILE = "chronicle.log"
_LEVEL_ENV = "CHRONICLE_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _level() -> int:
    name = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def get_logger() -> logging.Logger:
    """Return the ``chronicle_cli`` logger, adding its file handler on first call.

    Module loggers from ``logging.getLogger(__name__)`` are its children and
    write through the same handler.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(_level())
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        logger.propagate = False
        _logger = logger
    return _logger
