"""
Font size weighting.

Two strategies map a signal to a size between the theme's minimum and
maximum font size:

- rank decay: ``max(min, max * e^(-k * rank))`` for items ordered by
  presentation (soonest event first). Rank 0 always gets ``max``.
- usage linear: ``min + count / max_observed * (max - min)``, rounded
  half up, for items weighted by activation count. With no usage at all
  every item gets ``min``.
"""

import math
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence

from ..config.models import Item, Theme

DEFAULT_DECAY = 0.5


class ScalingStrategy(str, Enum):
    RANK_DECAY = "rank"
    USAGE_LINEAR = "usage"


def rank_decay_size(
    rank: int, min_size: float, max_size: float, decay: float = DEFAULT_DECAY
) -> float:
    """Size for a zero-based rank; non-increasing as rank grows."""
    if decay <= 0:
        raise ValueError(f"Decay constant must be positive, got {decay}")
    if rank <= 0:
        return float(max_size)
    return max(float(min_size), max_size * math.exp(-decay * rank))


def usage_linear_size(count: int, max_observed: int, min_size: float, max_size: float) -> int:
    """Size for an activation count; non-decreasing as count grows."""
    ceiling = max(1, max_observed)
    ratio = min(max(count, 0), ceiling) / ceiling
    return int(math.floor(min_size + ratio * (max_size - min_size) + 0.5))


def vertical_padding(size: float, max_size: float) -> float:
    """Extra top/bottom padding that keeps smaller text aligned with the largest."""
    return max(0.0, (max_size - size) / 2)


class WeightScaler:
    """
    Assigns a font size to every item.

    Args:
        strategy: Which signal drives the size
        decay: Decay constant for :attr:`ScalingStrategy.RANK_DECAY`

    Example:
        >>> scaler = WeightScaler(ScalingStrategy.USAGE_LINEAR)
        >>> scaler.size_for(5, 8, 36, max_observed=10)
        22
    """

    def __init__(
        self, strategy: ScalingStrategy = ScalingStrategy.USAGE_LINEAR, decay: float = DEFAULT_DECAY
    ):
        if decay <= 0:
            raise ValueError(f"Decay constant must be positive, got {decay}")
        self.strategy = ScalingStrategy(strategy)
        self.decay = decay

    def size_for(self, value: int, min_size: float, max_size: float, max_observed: int = 1) -> float:
        """
        Size for a single signal value.

        Args:
            value: Rank for rank decay, activation count for usage linear
            min_size: Smallest allowed size
            max_size: Largest allowed size
            max_observed: Highest count in the usage map (usage linear only)
        """
        if self.strategy == ScalingStrategy.RANK_DECAY:
            return rank_decay_size(value, min_size, max_size, self.decay)
        return usage_linear_size(value, max_observed, min_size, max_size)

    def scale(
        self,
        items: Sequence[Item],
        usage: Optional[Mapping[str, int]],
        theme: Theme,
    ) -> Dict[str, float]:
        """
        Sizes for already ordered items, keyed by item name.

        Under usage linear the maximum is taken over the whole usage map,
        including items that are currently hidden.
        """
        usage = usage or {}
        low, high = theme.min_font_size, theme.max_font_size

        if self.strategy == ScalingStrategy.RANK_DECAY:
            return {item.name: self.size_for(rank, low, high) for rank, item in enumerate(items)}

        max_observed = max(usage.values(), default=0)
        return {
            item.name: self.size_for(usage.get(item.name, 0), low, high, max_observed)
            for item in items
        }
