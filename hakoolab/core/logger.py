"""
HakooLab Logging System
=======================
Centralized logging with Loguru.

Features:
- Colored console output
- Optional file rotation (<HAKOOLAB_LOG_DIR>/hakoolab.log)
- Standard library interception
"""

from __future__ import annotations
import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_settings

LOG_FILE_NAME = "hakoolab.log"


def log_dir() -> Path:
    """Configured log directory, resolved against the current working directory."""
    return Path(get_settings().log_dir).expanduser().resolve()


class InterceptHandler(logging.Handler):
    """
    Intercept standard library logging and redirect to Loguru.
    Keeps uvicorn, fastapi and sqlalchemy output in one stream.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logger(
    level: str = "INFO",
    console: bool = True,
    file: bool = False,
    rotation: str = "10 MB",
    retention: str = "10 days",
    directory: Optional[Path] = None,
) -> None:
    """
    Configure the centralized logging system.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console: Enable colored console output
        file: Enable file logging
        rotation: File rotation size
        retention: Log file retention period
        directory: Where the log file goes (defaults to log_dir())
    """
    # Remove default handler
    logger.remove()

    if console:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if file:
        directory = directory or log_dir()
        directory.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(directory / LOG_FILE_NAME),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            enqueue=True,  # Thread-safe
        )

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]

    logger.debug(f"HakooLab logger initialized (level={level}, file={file})")


def get_logger(name: str = "hakoolab"):
    """
    Get a named logger instance.

    Usage:
        from hakoolab.core.logger import get_logger
        log = get_logger(__name__)
        log.info("Favorites hydrated")
    """
    return logger.bind(name=name)


def configure_from_settings() -> None:
    """Apply the logging options from the environment settings."""
    settings = get_settings()
    setup_logger(level=settings.log_level, file=settings.log_to_file)
