"""Centralized logging configuration for the chaptermark package.

All modules obtain their logger through :func:`get_logger`, which places
them under the ``chaptermark`` namespace so one call to
:func:`setup_logging` controls the whole package.
"""

import logging
import sys
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Simple format for console output
CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"

LOGGER_PREFIX: Final[str] = "chaptermark"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
    console: bool = True,
    verbose: bool = False,
) -> None:
    """Configure logging for the application.

    Call once at application startup. Calling it again replaces the
    handlers installed by the previous call.

    Console output goes to stderr so chapter text written to stdout can be
    piped or pasted without log lines mixed in.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        console: Whether to log to console
        verbose: If True, use detailed format for console output

    Example:
        >>> setup_logging(level="DEBUG", log_file="chapters.log")
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting conversion")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    root_logger = logging.getLogger(LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if verbose:
            console_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
        else:
            console_formatter = logging.Formatter(CONSOLE_FORMAT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Unlike setup_logging, this never installs handlers: library code stays
    silent until the application configures logging.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the chaptermark namespace

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Resolved 12 entries")
    """
    if name.startswith(LOGGER_PREFIX):
        logger_name = name
    else:
        logger_name = f"{LOGGER_PREFIX}.{name}"

    return logging.getLogger(logger_name)


def set_level(level: int | str) -> None:
    """Change the logging level for all chaptermark loggers.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(LOGGER_PREFIX)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setLevel(level)


def disable_logging() -> None:
    """Disable all logging output."""
    logging.getLogger(LOGGER_PREFIX).setLevel(logging.CRITICAL + 1)


def enable_logging() -> None:
    """Re-enable logging after it was disabled."""
    logging.getLogger(LOGGER_PREFIX).setLevel(logging.INFO)
