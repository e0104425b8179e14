"""Rotating file logger for composewiz — keeps max ~1 MB on disk."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from composewiz.config import config_dir


def log_path() -> Path:
    """Return the log file path, next to the settings file."""
    return config_dir() / "composewiz.log"


def setup_logging() -> logging.Logger:
    """Configure and return the ``composewiz`` logger.

    * 512 KB max per file, 1 backup = **1 MB total** on disk.
    * Idempotent: safe to call multiple times (checks for existing handlers).
    """
    logger = logging.getLogger("composewiz")

    # Avoid adding duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    log_file = log_path()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(log_file),
            maxBytes=512 * 1024,  # 512 KB
            backupCount=1,
        )
    except OSError:
        # Unwritable config dir: run without a log file.
        logger.addHandler(logging.NullHandler())
        return logger

    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(message)s",
                          datefmt="%Y-%m-%d %H:%M:%S")
    )

    logger.addHandler(handler)
    return logger
