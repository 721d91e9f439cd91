"""
Exceptions and error boundaries for zenwidget.

Nothing in the render path is fatal: loaders, composers and the renderer
degrade to defaults or a placeholder and log what went wrong. Storage and
validation problems surface as the exceptions below; the boundaries turn
unexpected failures into a logged fallback value.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    context: Optional[str] = None,
    fallback: Optional[Callable[..., Any]] = None,
    reraise: bool = False,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator that logs any exception raised by the wrapped function.

    Args:
        context: What the function was doing, for the log message
            (defaults to the function name)
        fallback: Called with the wrapped function's arguments to build
            the return value after a failure; ``None`` is returned when
            no fallback is given
        reraise: Re-raise after logging instead of falling back
        log_level: Level the failure is logged at

    Example:
        >>> @error_boundary(context="loading events", fallback=lambda path: [])
        ... def load_events(path):
        ...     return parse_events(path.read_text())
    """

    def decorator(func: F) -> F:
        label = context or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(log_level, f"Failed {label}: {e}", exc_info=True, extra={"function": func.__name__})
                if reraise:
                    raise
                return fallback(*args, **kwargs) if fallback is not None else None

        return wrapper  # type: ignore

    return decorator


def safe_execute(
    func: Callable[[], Any],
    *,
    context: str = "operation",
    on_error: Optional[Callable[[Exception], Any]] = None,
    default: Any = None,
    log_level: int = logging.ERROR,
) -> Any:
    """
    Run a zero-argument callable, logging and absorbing any failure.

    Returns:
        The callable's result, or ``default`` if it raised
    """
    try:
        return func()
    except Exception as e:
        logger.log(log_level, f"Failed {context}: {e}", exc_info=True)
        if on_error:
            on_error(e)
        return default


class ZenWidgetError(Exception):
    """Base exception for all zenwidget-specific errors."""


class ValidationError(ZenWidgetError, ValueError):
    """A stored record (item, theme, event, callback URL) is malformed."""


class StorageError(ZenWidgetError):
    """A stored file exists but cannot be read or parsed."""
