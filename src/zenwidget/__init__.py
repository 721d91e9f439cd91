"""
zenwidget - adaptive launcher and calendar widgets
"""

__version__ = "0.1.0"

from .managers import InteractionBridge, UsageStore
from .widgets import CalendarWidget, LauncherWidget

__all__ = ["LauncherWidget", "CalendarWidget", "InteractionBridge", "UsageStore"]
