"""
Registry of widget types.
"""

import logging
from typing import Any, Dict, Optional, Type

from .base import BaseWidget
from .calendar import CalendarWidget
from .launcher import LauncherWidget

logger = logging.getLogger(__name__)


class WidgetRegistry:
    """Maps widget type identifiers to widget classes."""

    def __init__(self):
        self._widgets: Dict[str, Type[BaseWidget]] = {}

    def register(self, widget_class: Type[BaseWidget]) -> None:
        """
        Register a widget class.

        Raises:
            TypeError: If widget_class doesn't inherit from BaseWidget
            ValueError: If widget_type is not defined
        """
        if not issubclass(widget_class, BaseWidget):
            raise TypeError(f"{widget_class} must inherit from BaseWidget")

        widget_type = widget_class.widget_type
        if not widget_type:
            raise ValueError(f"{widget_class.__name__} must define widget_type class attribute")

        if widget_type in self._widgets:
            logger.warning(f"Overwriting existing widget type: {widget_type}")

        self._widgets[widget_type] = widget_class
        logger.debug(f"Registered widget type: {widget_type}")

    def get_widget_class(self, widget_type: str) -> Optional[Type[BaseWidget]]:
        return self._widgets.get(widget_type)

    def list_widgets(self) -> list:
        return list(self._widgets.keys())

    def create(self, widget_type: str, config: Optional[Dict[str, Any]] = None) -> BaseWidget:
        """
        Instantiate a widget by type.

        Raises:
            ValueError: If the type is not registered
        """
        widget_class = self.get_widget_class(widget_type)
        if not widget_class:
            raise ValueError(f"Unknown widget type: {widget_type}")
        return widget_class(config)


registry = WidgetRegistry()
registry.register(LauncherWidget)
registry.register(CalendarWidget)
