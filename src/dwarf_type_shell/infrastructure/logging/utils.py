#!/usr/bin/env python3

"""Logging helpers shared by every module."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Decorator logging how long ``func`` took, at DEBUG level.

    Failures are logged at ERROR with the elapsed time and re-raised.

    Args:
        func: Function to decorate

    Returns:
        Wrapped function
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        started = perf_counter()
        logger.debug(f"Entering {func.__qualname__}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__qualname__} failed after {perf_counter() - started:.2f}s: {e}")
            raise
        logger.debug(f"{func.__qualname__} finished in {perf_counter() - started:.2f}s")
        return result

    return cast("F", wrapper)
