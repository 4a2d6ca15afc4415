"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the harness.

Every page object logs through a logger bound to its own class name, so the
console format shows which page object emitted an interaction record.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[page_object]}</cyan> | "
    "<level>{message}</level>"
)

# Value used for records that are not emitted by a page object
DEFAULT_SCOPE = "harness"

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR), usually the
               `logging.level` setting. The LOG_LEVEL environment variable
               overrides it; INFO when neither is set.
        format_string: Log format string. Uses DEFAULT_FORMAT if not provided.
        log_file: Optional file path to write logs to. Defaults to LOG_FILE
                  environment variable.

    Example:
        init_logger()  # Use defaults
        init_logger(level=settings.log_level, log_file="logs/ui.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()
    logger.configure(extra={"page_object": DEFAULT_SCOPE})

    level = (os.getenv("LOG_LEVEL") or level or "INFO").upper()
    format_string = format_string or DEFAULT_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or os.getenv("LOG_FILE")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def page_logger(name: str):
    """Return a logger scoped to one page object type."""
    return logger.bind(page_object=name)


__all__ = [
    "DEFAULT_FORMAT",
    "init_logger",
    "page_logger",
]
