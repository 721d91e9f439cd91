"""
Calendar widget: upcoming events, the soonest drawn largest.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, List

from ..config.loader import EventStore
from ..config.models import DEFAULT_THEME, CalendarEvent
from ..engine.layout import Entry, PlacementPlan, compose_list, compose_simultaneous, entry_for_event, partition
from ..engine.scaling import DEFAULT_DECAY, ScalingStrategy, WeightScaler
from ..engine.visibility import DEFAULT_HORIZON, filter_upcoming
from .base import BaseWidget

logger = logging.getLogger(__name__)

DAY = 24 * 60 * 60
HOUR = 60 * 60
MINUTE = 60


def format_relative_time(event: CalendarEvent, now: datetime, today_label: str = "today") -> str:
    """
    Short time-until label: ``3d``, ``5h``, ``20m``, or the today label.

    Events already in progress and events starting within the current
    minute get the today label.
    """
    diff = (event.start - now).total_seconds()
    if diff <= 0:
        return today_label

    days = math.floor(diff / DAY)
    hours = math.floor((diff % DAY) / HOUR)
    minutes = math.floor((diff % HOUR) / MINUTE)

    if days > 0:
        return f"{days}d"
    if hours > 0:
        return f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return today_label


class CalendarWidget(BaseWidget):
    """
    Display upcoming events with rank-decayed font sizes.

    Configuration:
        decay: Decay constant for font sizes (default 0.5)
        horizon_days: How far ahead to look (default 365)
        group_simultaneous: Put events with identical start times side by side
        today_label: Label for events happening now (default "today")
        max_items: Upper bound on listed events (default 10)
        family: Canvas size, "small" by default
    """

    widget_type = "calendar"
    placeholder = "No upcoming events"

    def __init__(self, config=None):
        super().__init__(config)
        self.scaler = WeightScaler(
            ScalingStrategy.RANK_DECAY, float(self.config.get("decay", DEFAULT_DECAY))
        )
        horizon_days = self.config.get("horizon_days")
        self.horizon = timedelta(days=horizon_days) if horizon_days else DEFAULT_HORIZON
        self.group_simultaneous = bool(self.config.get("group_simultaneous", False))
        self.today_label = self.config.get("today_label", "today")
        self.max_items = int(self.config.get("max_items", 10))
        self.event_store = EventStore(self.events_path)

    def fetch_data(self) -> Dict[str, Any]:
        """Load events and theme."""
        return {"events": self.event_store.load(), "theme": self.theme_store.load()}

    def get_fallback_data(self) -> Dict[str, Any]:
        return {"events": [], "theme": DEFAULT_THEME}

    def entries(self, events: List[CalendarEvent], now: datetime) -> List[Entry]:
        return [
            entry_for_event(event, f"{index}:{event.title}", format_relative_time(event, now, self.today_label))
            for index, event in enumerate(events)
        ]

    def compose(self, data: Dict[str, Any], now: datetime) -> PlacementPlan:
        theme = data.get("theme") or DEFAULT_THEME
        events = filter_upcoming(data.get("events", []), now, self.horizon)
        entries = self.entries(events, now)
        low, high = theme.min_font_size, theme.max_font_size

        if self.group_simultaneous:
            # Events sharing a start time share a rank
            sizes = {}
            for rank, group in enumerate(partition(entries, lambda entry: entry.start)):
                for entry in group:
                    sizes[entry.key] = self.scaler.size_for(rank, low, high)
            return compose_simultaneous(
                entries, sizes, capacity=self.capacity, max_items=self.max_items, placeholder=self.placeholder
            )

        sizes = {entry.key: self.scaler.size_for(rank, low, high) for rank, entry in enumerate(entries)}
        return compose_list(
            entries, sizes, capacity=self.capacity, max_items=self.max_items, placeholder=self.placeholder
        )
