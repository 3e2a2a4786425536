"""
Timing decorators for performance monitoring
"""

import time
from functools import wraps
from typing import Any, Callable, Optional

from bundle_builder.core.logging import get_logger

logger = get_logger(__name__)


def async_timing(threshold_ms: Optional[float] = None):
    """
    Timing decorator for asynchronous functions

    Args:
        threshold_ms: Log warning if execution time exceeds this threshold (in milliseconds)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            start_time = time.monotonic()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                execution_time = (time.monotonic() - start_time) * 1000
                logger.debug(
                    "Async function execution failed",
                    function=func.__qualname__,
                    execution_time_ms=round(execution_time, 2),
                    error=type(e).__name__,
                )
                raise

            execution_time = (time.monotonic() - start_time) * 1000
            if threshold_ms and execution_time > threshold_ms:
                logger.warning(
                    "Async function execution time exceeded threshold",
                    function=func.__qualname__,
                    execution_time_ms=round(execution_time, 2),
                    threshold_ms=threshold_ms,
                )
            else:
                logger.debug(
                    "Async function execution completed",
                    function=func.__qualname__,
                    execution_time_ms=round(execution_time, 2),
                )
            return result

        return wrapper

    return decorator
