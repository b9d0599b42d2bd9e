"""Centralized logging configuration."""

import logging
import sys
from typing import Optional

LOG_FORMATS = {
    # Development - human readable
    "standard": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    # Production - structured logging
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}',
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: str = "INFO", format_style: str = "standard", log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Logs go to stderr so that stdout stays free for command output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_style: 'standard' for dev, 'json' for production
        log_file: Optional file path to write logs

    Returns:
        Root logger
    """
    fmt = LOG_FORMATS.get(format_style, LOG_FORMATS["standard"])

    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,  # Override any existing config
    )

    # botocore is chatty at DEBUG and can echo request parameters
    logging.getLogger("botocore").setLevel(max(logging.INFO, logging.root.level))

    return logging.getLogger()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Usage:
        from envconfig.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Something happened")
    """
    return logging.getLogger(name)
