"""
Adaptive content engine: visibility, ordering, weighting and layout.
"""

from .layout import (
    Entry,
    Placement,
    PlacementPlan,
    PlacementRow,
    compose_columns,
    compose_list,
    compose_simultaneous,
    entry_for_event,
    entry_for_item,
)
from .scaling import ScalingStrategy, WeightScaler, rank_decay_size, usage_linear_size
from .sorting import sort_items
from .visibility import filter_upcoming, filter_visible, is_visible

__all__ = [
    "is_visible",
    "filter_visible",
    "filter_upcoming",
    "sort_items",
    "ScalingStrategy",
    "WeightScaler",
    "rank_decay_size",
    "usage_linear_size",
    "Entry",
    "Placement",
    "PlacementRow",
    "PlacementPlan",
    "entry_for_event",
    "entry_for_item",
    "compose_list",
    "compose_columns",
    "compose_simultaneous",
]
