"""
Launcher widget: shortcuts and apps sized by how often they are used.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Sequence

from ..config.loader import ConfigStore
from ..config.models import COLUMN_ORDER, DEFAULT_THEME, LIST_ORDER, Item, WidgetConfig
from ..engine.layout import PlacementPlan, compose_columns, compose_list, entry_for_item
from ..engine.scaling import DEFAULT_DECAY, ScalingStrategy, WeightScaler
from ..engine.sorting import sort_items
from ..engine.visibility import filter_visible
from ..managers.usage import UsageStore
from .base import BaseWidget

logger = logging.getLogger(__name__)

LAYOUTS = ("columns", "list")


class LauncherWidget(BaseWidget):
    """
    Display configured items, emphasizing the most used ones.

    Configuration:
        layout: "columns" (default) packs items into their display-group
            columns; "list" stacks them in one capacity-bounded column
        scaling: "usage" (default) sizes by activation count; "rank"
            sizes by position after sorting
        decay: Decay constant for rank scaling (default 0.5)
        family: Canvas size, "large" by default

    Examples:
        widget = LauncherWidget({"layout": "columns"})
        widget = LauncherWidget({"layout": "list", "scaling": "rank", "decay": 0.35})
    """

    widget_type = "launcher"
    default_family = "large"
    canvas_padding = (0, 8, 0, 8)

    def __init__(self, config=None):
        super().__init__(config)

        self.layout = self.config.get("layout", "columns")
        if self.layout not in LAYOUTS:
            raise ValueError(f"Unknown layout '{self.layout}' (expected one of {LAYOUTS})")

        self.scaler = WeightScaler(
            ScalingStrategy(self.config.get("scaling", ScalingStrategy.USAGE_LINEAR.value)),
            float(self.config.get("decay", DEFAULT_DECAY)),
        )
        self.config_store = ConfigStore(self.config_path)
        self.usage_store = UsageStore(self.usage_path)

    def fetch_data(self) -> Dict[str, Any]:
        """Load items, usage counts and theme."""
        return {
            "config": self.config_store.load(),
            "usage": self.usage_store.load(),
            "theme": self.theme_store.load(),
        }

    def get_fallback_data(self) -> Dict[str, Any]:
        return {"config": WidgetConfig(), "usage": {}, "theme": DEFAULT_THEME}

    def ordered_items(self, data: Dict[str, Any], now: datetime) -> List[Item]:
        """Visible items in display order."""
        config: WidgetConfig = data["config"]
        visible = filter_visible(config.items, now)
        return sort_items(visible, config.sort_policy, data.get("usage"))

    def compose(self, data: Dict[str, Any], now: datetime) -> PlacementPlan:
        theme = data.get("theme") or DEFAULT_THEME
        items = self.ordered_items(data, now)
        sizes = self.scaler.scale(items, data.get("usage"), theme)
        entries = [entry_for_item(item) for item in items]

        logger.debug(f"Launcher showing {len(entries)} of {len(data['config'].items)} items")

        if self.layout == "list":
            return compose_list(entries, sizes, capacity=self.capacity, placeholder=self.placeholder)

        return compose_columns(
            entries,
            sizes,
            order=self._column_order(data["config"].items),
            capacity=self.capacity,
            pad_to=theme.max_font_size,
            placeholder=self.placeholder,
        )

    @staticmethod
    def _column_order(items: Sequence[Item]) -> List[str]:
        """Fixed column positions: left/center/right, then the list groups in use."""
        groups = {item.group for item in items}
        order = list(COLUMN_ORDER) if groups & set(COLUMN_ORDER) else []
        order += [group for group in LIST_ORDER if group in groups]
        return [group.value for group in order]
