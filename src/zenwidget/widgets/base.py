"""
Base classes for all widget types.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from PIL import Image

from ..config.loader import (
    CONFIG_FILENAME,
    EVENTS_FILENAME,
    THEME_FILENAME,
    USAGE_FILENAME,
    ThemeStore,
    default_home,
)
from ..config.models import DEFAULT_THEME, Theme
from ..device.renderer import WIDGET_FAMILIES, CanvasRenderer
from ..device.theme import ThemeResolver
from ..engine.layout import PlacementPlan, empty_plan
from ..utils.errors import error_boundary

logger = logging.getLogger(__name__)


class BaseWidget(ABC):
    """
    Base class for all widgets.

    A widget loads its inputs, runs them through the content engine and
    hands the resulting placement plan to the canvas renderer. Loading
    failures fall back to cached or default data, and composition
    failures fall back to a placeholder plan, so rendering always
    produces an image.

    Class Attributes:
        widget_type: Unique identifier for this widget type (e.g., "launcher")
        default_family: Canvas size used when the config does not set one
        canvas_padding: (top, left, bottom, right) padding in pixels
        placeholder: Message shown when nothing is eligible for display

    Example:
        >>> class NoteWidget(BaseWidget):
        ...     widget_type = "note"
        ...
        ...     def fetch_data(self):
        ...         return {"theme": self.theme_store.load()}
        ...
        ...     def compose(self, data, now):
        ...         return empty_plan(self.capacity, "Nothing to note")
    """

    # Widget type identifier (must be unique)
    widget_type: str = None

    default_family: str = "small"
    canvas_padding: Tuple[int, int, int, int] = (8, 12, 8, 12)
    placeholder: str = "No items to show"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize widget with configuration.

        Args:
            config: Widget options. ``home`` selects the directory holding
                the stored files and ``family`` the canvas size.

        Raises:
            ValueError: If widget_type is not defined or the family is unknown
        """
        if not self.widget_type:
            raise ValueError(f"{self.__class__.__name__} must define widget_type")

        self.config = dict(config or {})
        self.home = Path(self.config.get("home") or default_home()).expanduser()

        family = self.config.get("family", self.default_family)
        if family not in WIDGET_FAMILIES:
            raise ValueError(f"Unknown widget family '{family}' (expected one of {sorted(WIDGET_FAMILIES)})")
        self.family = family

        self.theme_store = ThemeStore(self.home / THEME_FILENAME)
        self._cached_data: Optional[Any] = None

    @property
    def config_path(self) -> Path:
        return self.home / CONFIG_FILENAME

    @property
    def usage_path(self) -> Path:
        return self.home / USAGE_FILENAME

    @property
    def events_path(self) -> Path:
        return self.home / EVENTS_FILENAME

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return WIDGET_FAMILIES[self.family]

    @property
    def capacity(self) -> int:
        """Vertical pixel budget inside the canvas padding."""
        top, _left, bottom, _right = self.canvas_padding
        return self.canvas_size[1] - top - bottom

    @abstractmethod
    def fetch_data(self) -> Dict[str, Any]:
        """
        Load the widget's inputs from storage.

        Returns:
            Dictionary with at least a ``theme`` entry
        """
        pass

    @abstractmethod
    def compose(self, data: Dict[str, Any], now: datetime) -> PlacementPlan:
        """
        Turn loaded inputs into a placement plan for the given instant.

        Args:
            data: Data from fetch_data()
            now: Reference instant for visibility windows

        Returns:
            Placement plan (a placeholder plan when nothing is eligible)
        """
        pass

    def safe_fetch_data(self) -> Dict[str, Any]:
        """
        Safely fetch data with standardized error handling.

        Returns:
            Fetched data on success, cached data on failure
        """
        try:
            data = self.fetch_data()
            self._cached_data = data
            return data
        except Exception as e:
            logger.error(f"Error fetching data for {self.widget_type} widget: {e}", exc_info=True)
            if self._cached_data is not None:
                logger.debug(f"Using cached data for {self.widget_type} widget")
                return self._cached_data
            return self.get_fallback_data()

    def get_fallback_data(self) -> Dict[str, Any]:
        """
        Get fallback data when fetch fails and no cache is available.

        Override this to provide widget-specific fallback values.
        """
        return {"theme": DEFAULT_THEME}

    def build_plan(self, now: Optional[datetime] = None, data: Optional[Dict[str, Any]] = None) -> PlacementPlan:
        """Load (unless data is given) and compose, degrading to a placeholder on failure."""
        now = now or datetime.now()
        if data is None:
            data = self.safe_fetch_data()
        return self._safe_compose(data, now)

    @error_boundary(
        context="composing widget",
        fallback=lambda self, data, now: empty_plan(self.capacity, self.placeholder),
    )
    def _safe_compose(self, data: Dict[str, Any], now: datetime) -> PlacementPlan:
        return self.compose(data, now)

    def render(self, now: Optional[datetime] = None) -> Image.Image:
        """Render the widget to an image."""
        data = self.safe_fetch_data()
        theme: Theme = data.get("theme") or DEFAULT_THEME
        plan = self.build_plan(now, data)
        renderer = CanvasRenderer(ThemeResolver(theme))
        return renderer.render(plan, self.canvas_size, self.canvas_padding)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(type={self.widget_type}, family={self.family})>"
