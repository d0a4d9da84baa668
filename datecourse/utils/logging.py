"""
Logging utilities for the date course backend.

RULES:
- NEVER log GOOGLE_API_KEY or other secrets
- Log the full model response text at DEBUG only

Acceptable logging:
- High-level events (e.g., "Course search attempt 2/2, temperature=0.8")
- Counts (evidence records, places per category)
- Sanitized error messages from the model call
"""

import logging
from typing import Optional, Union

from datecourse.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[int, str, None] = None) -> int:
    """Accept a level number or name; fall back to settings.LOG_LEVEL, then INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName((level or settings.LOG_LEVEL or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO


def get_logger(name: str, level: Union[int, str, None] = None) -> logging.Logger:
    """
    Get a logger for a module, with a stream handler if the root logger has none.

    Args:
        name: Module name (typically __name__)
        level: Level number or name (defaults to settings.LOG_LEVEL)

    Usage:
        >>> from datecourse.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Course search started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # Under uvicorn/main.py the root logger is configured; avoid double output
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def configure_root_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the app and the CLI."""
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT, datefmt=DATE_FORMAT)
