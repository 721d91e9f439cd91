"""
Rendering surface for zenwidget
"""

from .renderer import WIDGET_FAMILIES, CanvasRenderer
from .theme import ThemeResolver

__all__ = ["CanvasRenderer", "ThemeResolver", "WIDGET_FAMILIES"]
