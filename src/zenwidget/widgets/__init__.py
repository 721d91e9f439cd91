"""
Widgets: a launcher sized by usage and a calendar sized by proximity.
"""

from .base import BaseWidget
from .calendar import CalendarWidget, format_relative_time
from .launcher import LauncherWidget
from .registry import WidgetRegistry, registry

__all__ = [
    "BaseWidget",
    "LauncherWidget",
    "CalendarWidget",
    "format_relative_time",
    "WidgetRegistry",
    "registry",
]
