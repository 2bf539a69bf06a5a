"""Logging setup for pickercraft.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and the CLI calls ``setup_logging()`` once. Records go to a rotating file in the
config directory because the picker TUI owns the terminal while it runs.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config.constants import LOG_FILE_NAME
from ..config.settings import get_config_dir

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_log_file() -> Path:
    """Path of the rotating log file."""
    return get_config_dir() / LOG_FILE_NAME


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Attach a rotating file handler to the ``pickercraft`` logger.

    Calling it again replaces the handler instead of stacking a second one.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Override the log file location

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("pickercraft")
    level = logging.DEBUG if verbose else logging.INFO

    log_file = log_file or get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    for handler in list(logger.handlers):
        if getattr(handler, "_pickercraft", False):
            logger.removeHandler(handler)
            handler.close()

    handler = RotatingFileHandler(
        log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    handler._pickercraft = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
