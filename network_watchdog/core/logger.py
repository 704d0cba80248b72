import sys
from typing import Optional

from loguru import logger

from network_watchdog.core.constants import LOG_FILE, LOG_LEVEL

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Replace loguru's default handler with the watchdog's sinks.

    Args:
        level: Minimum level for all sinks (defaults to LOG_LEVEL)
        log_file: Optional path of a rotating log file (defaults to LOG_FILE)
    """
    level = (level or LOG_LEVEL).upper()
    log_file = log_file or LOG_FILE

    logger.remove()  # Remove default handler

    # Add stderr handler only if available (not in windowed exe)
    if sys.stderr:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 MB",
            retention="10 days",
            format=FILE_FORMAT,
            level=level,
        )

    return logger
