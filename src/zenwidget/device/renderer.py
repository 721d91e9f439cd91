"""
Canvas rendering for placement plans
"""

import logging
from typing import Tuple

from PIL import Image, ImageDraw

from ..engine.layout import Placement, PlacementPlan
from ..utils.errors import safe_execute
from .theme import ThemeResolver

logger = logging.getLogger(__name__)

# Widget canvas sizes in pixels (width, height)
WIDGET_FAMILIES = {
    "small": (155, 155),
    "medium": (329, 155),
    "large": (329, 345),
}

# Text may shrink to this fraction of its size before being ellipsized
MINIMUM_SCALE_FACTOR = 0.5


class CanvasRenderer:
    """
    Draws a placement plan onto a Pillow image.

    Rows are drawn top to bottom, each as tall as the plan says. Columns
    share the width equally: the first column is left-aligned, the last
    right-aligned and any middle column centered. A single column is
    left-aligned with its secondary text pushed to the right edge.

    Attributes:
        resolver: Colors and fonts for the active theme
    """

    def __init__(self, resolver: ThemeResolver):
        self.resolver = resolver

    def render(
        self,
        plan: PlacementPlan,
        size: Tuple[int, int] = WIDGET_FAMILIES["small"],
        padding: Tuple[int, int, int, int] = (8, 12, 8, 12),
    ) -> Image.Image:
        """
        Render a plan.

        Args:
            plan: Placement plan from the layout composer
            size: Canvas (width, height) in pixels
            padding: Canvas padding as (top, left, bottom, right)

        Returns:
            RGB image of the requested size
        """
        image = Image.new("RGB", size, self.resolver.background)
        draw = ImageDraw.Draw(image)

        if plan.is_empty:
            self._draw_placeholder(draw, plan.placeholder, size)
            return image

        top, left, _bottom, right = padding
        inner_width = size[0] - left - right
        columns = max(1, plan.columns)
        column_width = inner_width / columns

        y = float(top)
        for row in plan.rows:
            for placement in row.cells:
                if placement is None:
                    continue
                x = left + placement.column * column_width
                safe_execute(
                    lambda p=placement, cx=x, cy=y: self._draw_cell(draw, p, cx, cy, column_width, columns),
                    context=f"drawing '{placement.text}'",
                    log_level=logging.WARNING,
                )
            y += row.height

        return image

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        placement: Placement,
        x: float,
        y: float,
        width: float,
        columns: int,
    ) -> None:
        color = self.resolver.text_color
        text_y = y + placement.padding

        detail_width = 0.0
        if placement.detail:
            detail_font = self.resolver.font(placement.detail_size)
            detail_width = draw.textlength(placement.detail, font=detail_font)
            draw.text(
                (x + width - detail_width, text_y + placement.size - placement.detail_size),
                placement.detail,
                font=detail_font,
                fill=color,
            )
            detail_width += 4

        text, font = self._fit_text(draw, placement.text, placement.size, width - detail_width)
        text_width = draw.textlength(text, font=font)

        if columns == 1 or placement.column == 0:
            text_x = x
        elif placement.column == columns - 1:
            text_x = x + width - text_width
        else:
            text_x = x + (width - text_width) / 2

        draw.text((text_x, text_y), text, font=font, fill=color)

    def _fit_text(self, draw: ImageDraw.ImageDraw, text: str, size: float, max_width: float):
        """Shrink the text down to the minimum scale factor, then ellipsize it."""
        floor = max(1.0, size * MINIMUM_SCALE_FACTOR)
        current = float(size)
        font = self.resolver.font(current)
        while draw.textlength(text, font=font) > max_width and current > floor:
            current = max(floor, current - 1)
            font = self.resolver.font(current)

        if draw.textlength(text, font=font) <= max_width:
            return text, font

        while len(text) > 1 and draw.textlength(text + "…", font=font) > max_width:
            text = text[:-1]
        return text + "…", font

    def _draw_placeholder(self, draw: ImageDraw.ImageDraw, message: str, size: Tuple[int, int]) -> None:
        theme = self.resolver.theme
        placeholder_size = (theme.min_font_size + theme.max_font_size) / 2
        text, font = self._fit_text(draw, message, placeholder_size, size[0] - 16)
        text_width = draw.textlength(text, font=font)
        bbox = draw.textbbox((0, 0), text, font=font)
        text_height = bbox[3] - bbox[1]
        draw.text(
            ((size[0] - text_width) / 2, (size[1] - text_height) / 2 - bbox[1]),
            text,
            font=font,
            fill=self.resolver.text_color,
        )
