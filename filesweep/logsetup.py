"""Logging setup and context-aware logging helpers."""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOGGER_NAME = "filesweep"

_logger = logging.getLogger(LOGGER_NAME)

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 1,
}

_FORMAT = "[%(asctime)s] %(levelname)s [%(module)s] %(message)s"


def init_logging(config):
    """Send the service's log to a file, and optionally to stdout.

    Returns the path of the log file. Raises ValueError for an unknown level.
    """
    level = _LEVELS.get(config.level.strip().lower())
    if level is None:
        raise ValueError(f"unknown log level: {config.level!r}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_path = log_dir / f"{config.log_basename}_{stamp}.log"

    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)
    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)
    _logger.addHandler(file_handler)

    if config.duplicate_to_stdout:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.INFO)
        console.setFormatter(formatter)
        _logger.addHandler(console)

    _logger.setLevel(level)
    _logger.propagate = False
    _logger.info("Logging system initialized successfully")
    return log_path


def log_error(context, error):
    """Log an error with context."""
    _logger.error("%s | %s", context, error)


def log_warning(context, message):
    """Log a warning with context."""
    _logger.warning("%s | %s", context, message)


def log_debug(context, message):
    """Log debug information with context."""
    _logger.debug("%s | %s", context, message)


def log_info(context, message):
    """Log an informational message with context."""
    _logger.info("%s | %s", context, message)


def log_info_simple(message):
    """Log an informational message without context."""
    _logger.info("%s", message)


def log_error_simple(message):
    """Log an error message without context."""
    _logger.error("%s", message)