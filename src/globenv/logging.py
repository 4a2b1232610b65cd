"""
Logging Configuration for globenv

Provides library logging with:
- Per-module loggers under the "globenv" namespace
- Console logging with configurable verbosity
- Optional daily file logging to data_dir/logs/
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from globenv.config import get_data_dir

# Module loggers
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Usage:
        from globenv.logging import get_logger
        logger = get_logger(__name__)
        logger.debug("Resolved init file")
    """
    if name.startswith("globenv."):
        name = name[len("globenv."):]
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(f"globenv.{name}")
    _loggers[name] = logger
    return logger


def setup_logging(
    level: str = "WARNING",
    log_file: bool = False,
    console: bool = True,
    debug_mode: bool = False,
) -> None:
    """
    Configure logging for globenv.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Whether to log to file
        console: Whether to log to console
        debug_mode: Enable verbose debug logging
    """
    if debug_mode:
        level = "DEBUG"

    root_logger = logging.getLogger("globenv")
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    if debug_mode:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%H:%M:%S",
        )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = get_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging initialized (level={level}, debug={debug_mode})")


def get_log_path() -> Path:
    """Path of today's log file."""
    date_str = datetime.now().strftime("%Y-%m-%d")
    return get_data_dir() / "logs" / f"globenv_{date_str}.log"
