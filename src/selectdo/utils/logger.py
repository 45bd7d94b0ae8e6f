"""Application-wide file logger.

Records go to one rotating file per user. The ``logging`` section of the
config picks the level and the directory; until the config has been loaded
the logger writes DEBUG records to the platformdirs user_log_dir.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "selectdo"
_LOG_FILE = "selectdo.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None
_log_path: Path | None = None


def log_file_path(log_dir: str | Path | None = None) -> Path:
    """Where the log file lives for ``log_dir`` (None means the platform default)."""
    if log_dir:
        return Path(log_dir).expanduser() / _LOG_FILE
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def configure_logging(
    level: str = "DEBUG", log_dir: str | Path | None = None
) -> logging.Logger:
    """Point the application logger at ``log_dir`` and set its level.

    The file handler is only replaced when the target file changes, so
    calling this again with the same directory just adjusts the level.
    """
    global _logger, _log_path

    path = log_file_path(log_dir)
    logger = logging.getLogger(_APP_NAME)

    if path != _log_path or not logger.handlers:
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()

        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
        _log_path = path

    logger.setLevel(level.upper())
    logger.propagate = False

    _logger = logger
    return _logger


def get_logger() -> logging.Logger:
    """Return the application logger, setting up the default file on first call."""
    if _logger is not None:
        return _logger
    return configure_logging()
