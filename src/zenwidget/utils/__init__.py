"""
Utility modules for zenwidget.
"""

from .errors import (
    StorageError,
    ValidationError,
    ZenWidgetError,
    error_boundary,
    safe_execute,
)

__all__ = [
    "ZenWidgetError",
    "ValidationError",
    "StorageError",
    "error_boundary",
    "safe_execute",
]
