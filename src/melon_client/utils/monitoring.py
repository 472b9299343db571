"""
Logging setup for Melon Client.

Handlers are attached to the "melon_client" package logger, never to the
root logger, so embedding the launcher does not change the host's logging.
Records still propagate to the root logger.

Usage:
    from melon_client.utils.monitoring import get_logger

    logger = get_logger(__name__)
    logger.info("Launch requested")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


# ============================================================================
# Configuration
# ============================================================================

PACKAGE_LOGGER = "melon_client"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FILE = Path("logs") / "melon_client.log"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_FORMAT = "{asctime} | {levelname} | {name}:{funcName}:{lineno} - {message}"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# The game can be started many times a day; keep the file bounded.
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


# ============================================================================
# Logger Setup
# ============================================================================

def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure the package logger. Safe to call again; previous handlers are closed.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        log_file: Rotating log file. None disables file logging.
        console: Whether to log to stderr

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    _drop_handlers(package_logger)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, CONSOLE_DATE_FORMAT))
        package_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        # The file always keeps debug detail, whatever the console shows.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATE_FORMAT, style="{"))
        package_logger.addHandler(file_handler)
        package_logger.setLevel(min(log_level, logging.DEBUG))

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__ so it sits under the package logger."""
    return logging.getLogger(name)
