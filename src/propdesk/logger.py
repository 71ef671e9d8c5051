"""
Logging setup for propdesk, built on loguru.

Usage:
    from propdesk.logger import get_logger
    logger = get_logger(__name__)
"""

import sys
from typing import Optional

from loguru import logger as _logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_logger.configure(extra={"name": "propdesk"})


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the global loguru sinks.

    Args:
        level: Minimum level for the stderr sink.
        log_file: Optional path for a rotating file sink.
    """
    _logger.remove()
    _logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)

    if log_file:
        _logger.add(
            log_file,
            level="DEBUG",
            format=LOG_FORMAT,
            rotation="10 MB",
            retention=2,
            encoding="utf-8",
        )


def get_logger(name: str):
    """Return a logger bound to a module name."""
    return _logger.bind(name=name)
