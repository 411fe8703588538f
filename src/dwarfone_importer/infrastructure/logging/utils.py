#!/usr/bin/env python3

"""Logging helpers shared by all modules."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Log how long a coarse operation (parse, import pass) took.

    Failures are logged with their elapsed time and re-raised unchanged.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        start = perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__qualname__} failed after {perf_counter() - start:.2f}s: {e}")
            raise
        logger.debug(f"{func.__qualname__} finished in {perf_counter() - start:.2f}s")
        return result

    return cast("F", wrapper)
