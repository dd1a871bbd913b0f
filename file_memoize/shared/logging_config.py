"""Logging configuration for file_memoize.

Library modules only create module loggers; applications call
configure_logging() once to route them to stdout at the configured level.
"""

import logging
import sys

from file_memoize.shared.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None, settings: Settings | None = None) -> int:
    """Configure logging for the file_memoize package.

    Args:
        level: Logging level name; overrides settings when given
        settings: Settings to take FILE_MEMOIZE_LOG_LEVEL from (default: get_settings())

    Returns:
        The numeric level applied to the package logger
    """
    if level is not None:
        numeric_level = getattr(logging, level.upper(), logging.INFO)
    else:
        numeric_level = (settings or get_settings()).numeric_log_level

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # aiofiles runs file I/O in the loop's executor; asyncio's own debug output is noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("file_memoize").setLevel(numeric_level)
    return numeric_level


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
