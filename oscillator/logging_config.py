"""Logging setup for the command-line entry point.

Library modules only call ``logging.getLogger(__name__)``; handlers are attached
here, once, by whoever runs the program.
"""

from __future__ import annotations
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(name: str = "oscillator", log_level: str = "INFO",
                  log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the ``name`` logger.

    Args:
        name: logger to configure; its children (``oscillator.engine``, ...) inherit it
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_dir: when set, also write ``<name>.log`` and ``<name>_errors.log`` there,
            rotated at 10 MB

    Returns:
        The configured logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # already configured
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # stderr keeps stdout clean for JSON output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=logs_dir / f"{name}.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        error_handler = RotatingFileHandler(
            filename=logs_dir / f"{name}_errors.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger.debug("Logging configured: %s [%s]", name, log_level)
    return logger
