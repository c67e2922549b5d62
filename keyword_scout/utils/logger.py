"""Logging setup for the Keyword Scout CLI and API."""

import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_config

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class StorageLogBridge(logging.Handler):
    """Forwards stdlib records from the storage layer to loguru."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(exception=record.exc_info).log(level, f"[{record.name}] {record.getMessage()}")


def setup_logging(
    settings: Optional[LoggingConfig] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
):
    """Configure loguru sinks for a Keyword Scout run.

    Args:
        settings: Logging section of the config (global config by default)
        log_level: Overrides ``settings.level``
        log_file: Overrides ``settings.file``; an empty string disables the file sink
    """
    if settings is None:
        settings = get_config().logging

    level = (log_level or settings.level).upper()
    if log_file is None:
        log_file = settings.file

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    storage_logger = logging.getLogger("keyword_scout.storage")
    storage_logger.handlers = [StorageLogBridge()]
    storage_logger.setLevel(level)
    storage_logger.propagate = False

    logger.debug(f"Logging initialized at {level} level")
