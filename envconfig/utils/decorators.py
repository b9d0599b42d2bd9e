"""Reusable decorators for the application."""

import functools
import time
from typing import Callable

from envconfig.utils.logging import get_logger

logger = get_logger(__name__)


def log_time(func: Callable) -> Callable:
    """
    Log execution time of a function.

    The time is logged even when the function raises.

    Usage:
        @log_time
        def slow_function():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.info(f"{func.__name__} completed in {elapsed:.3f}s")

    return wrapper


def log_call(func: Callable) -> Callable:
    """
    Log when function is called and returns.

    Usage:
        @log_call
        def my_function(x, y):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f"Calling {func.__name__}")
        result = func(*args, **kwargs)
        logger.debug(f"{func.__name__} returned")
        return result

    return wrapper
