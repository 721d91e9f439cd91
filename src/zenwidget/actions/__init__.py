"""
Dispatch actions for zenwidget
"""

from .application import ApplicationAction
from .base import BaseAction
from .registry import ActionRegistry, default_registry
from .url import URLAction

__all__ = [
    "BaseAction",
    "ActionRegistry",
    "default_registry",
    "ApplicationAction",
    "URLAction",
]
