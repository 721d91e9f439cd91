"""
Configuration records and file stores for zenwidget
"""

from .loader import ConfigStore, EventStore, ThemeStore, default_home
from .models import (
    DEFAULT_THEME,
    CalendarEvent,
    DisplayGroup,
    Item,
    SortPolicy,
    Theme,
    TimeOfDay,
    WidgetConfig,
)

__all__ = [
    "ConfigStore",
    "ThemeStore",
    "EventStore",
    "default_home",
    "Item",
    "WidgetConfig",
    "Theme",
    "DEFAULT_THEME",
    "CalendarEvent",
    "DisplayGroup",
    "SortPolicy",
    "TimeOfDay",
]
