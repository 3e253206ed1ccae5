"""
Logging Module
==============

Unified logging setup for the attendance ingestion package.

Usage:
    from attendance.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Parsing workbook: %s", filename)
    logger.debug("Row %d skipped", row_num)
"""

import logging
import sys
from typing import Optional, Union

# Default log format with timestamp, level, and module name
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO

PACKAGE_LOGGER = "attendance"

# Global flag to track if the package logger has been configured
_root_configured = False


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the package logger.

    Runs once; the ``_root_configured`` flag guards against duplicate
    handlers when many modules call :func:`get_logger`.
    """
    global _root_configured
    if _root_configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(DEFAULT_LEVEL)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger for *name*, configuring the package logger on first use.

    Args:
        name: logger name, usually the calling module's ``__name__``
        level: optional level; inherits from the package logger when omitted
    """
    _configure_root_logger()

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Set the level of *logger_name*, or of the package logger when omitted.

    Example:
        set_level(logging.DEBUG)                       # whole package
        set_level("DEBUG", "attendance.parser")        # parser only
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger(logger_name or PACKAGE_LOGGER)
    logger.setLevel(level)
