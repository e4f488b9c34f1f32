"""Logger utilities and helpers.

Provides convenience functions for logging throughout the application.
"""

from functools import wraps
from time import perf_counter
from typing import Any, Callable, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to calling module)

    Returns:
        Configured structlog logger

    Example:
        >>> from resource_policy_remediation_cdk.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("policy_staged", policy="s3-rbp")
    """
    return structlog.get_logger(name)


def log_function_call(logger: Any | None = None) -> Callable[[F], F]:
    """Decorator to log function calls with arguments and execution time.

    Args:
        logger: Optional logger instance (creates one if not provided)

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        nonlocal logger
        if logger is None:
            logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = perf_counter()
            logger.debug(
                "function_call_start",
                function=func.__name__,
                args_count=len(args),
                kwargs_keys=list(kwargs.keys()),
            )

            try:
                result = func(*args, **kwargs)
                duration = perf_counter() - start
                logger.debug(
                    "function_call_success",
                    function=func.__name__,
                    duration_ms=round(duration * 1000, 2),
                )
                return result
            except Exception as e:
                duration = perf_counter() - start
                logger.error(
                    "function_call_error",
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    duration_ms=round(duration * 1000, 2),
                )
                raise

        return wrapper  # type: ignore

    return decorator


__all__ = ["get_logger", "log_function_call"]
