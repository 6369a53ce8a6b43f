"""Reusable decorators for encoder utilities."""

import time
import functools
import logging
from typing import Callable

from ._timing import _is_enabled

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """Log execution time for the wrapped callable."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        """Call ``func`` and log elapsed time when timing is enabled."""
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        # log execution time even if the decorated function throws error
        finally:
            if _is_enabled():
                elapsed = time.perf_counter() - start
                log.info(f"{func.__qualname__} completed in {elapsed:.4f} s")

    return wrapper
