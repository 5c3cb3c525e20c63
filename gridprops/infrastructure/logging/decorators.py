"""Operation logging for deck processing entry points."""

import functools
import time
from typing import Any, Callable, Optional, TypeVar

from .structured_logger import get_logger

F = TypeVar('F', bound=Callable[..., Any])


def log_operation(operation_name: Optional[str] = None, log_performance: bool = True):
    """Log start, duration and failure of the decorated call.

    Failures are logged with the context carried by the exception (keyword,
    bounds, deck location) and re-raised unchanged.

    Example:
        @log_operation("load_field_properties")
        def load(self, keywords):
            ...
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            logger.debug(f"Starting {name}", extra={'context': {'operation': name}})
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.log_error_with_context(
                    e, operation=name,
                    performance={
                        'duration_seconds': round(time.perf_counter() - started, 3),
                        'status': 'failed',
                        'error_type': type(e).__name__,
                    }
                )
                raise
            if log_performance:
                logger.log_performance(name, time.perf_counter() - started, status='success')
            return result

        return wrapper  # type: ignore
    return decorator
