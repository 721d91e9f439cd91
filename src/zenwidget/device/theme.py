"""
Theme resolution: turns a stored :class:`Theme` into Pillow colors and fonts.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import ImageColor, ImageFont

from ..config.models import Theme

logger = logging.getLogger(__name__)

# Generic family names from the theme editor mapped to installed font families
FAMILY_ALIASES = {
    "system": "DejaVu Sans",
    "rounded": "DejaVu Sans",
    "serif": "DejaVu Serif",
    "monospaced": "DejaVu Sans Mono",
}

BOLD_WEIGHTS = {"semibold", "bold", "heavy", "black"}

FONT_DIRS = [
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    os.path.expanduser("~/.fonts"),
    os.path.expanduser("~/.local/share/fonts"),
]


def _normalize(name: str) -> str:
    return name.lower().replace(" ", "").replace("-", "").replace("_", "")


class ThemeResolver:
    """
    Resolves colors and fonts for a theme.

    Fonts are looked up by family, weight and italic flag among the
    installed TrueType/OpenType files and cached per size. When nothing
    matches, Pillow's bundled default font is used at the requested size.

    Attributes:
        theme: Theme being resolved
        font_cache: Loaded fonts keyed by (family, weight, italic, size)
    """

    _font_index: Optional[Dict[str, str]] = None

    def __init__(self, theme: Theme):
        self.theme = theme
        self.font_cache: Dict[Tuple[str, str, bool, int], ImageFont.ImageFont] = {}

    @property
    def background(self) -> Tuple[int, int, int]:
        return self.color(self.theme.background_color, (0, 0, 0))

    @property
    def text_color(self) -> Tuple[int, int, int]:
        return self.color(self.theme.text_color, (255, 255, 255))

    @staticmethod
    def color(value: str, fallback: Tuple[int, int, int]) -> Tuple[int, int, int]:
        """Convert a stored hex color (with or without '#') to RGB."""
        hex_value = value if value.startswith("#") else f"#{value}"
        try:
            rgb = ImageColor.getrgb(hex_value)
        except ValueError as e:
            logger.warning(f"Invalid color {value!r}, using fallback: {e}")
            return fallback
        return tuple(rgb[:3])

    def font(self, size: float):
        """Load the theme font at the given size (rounded to whole points)."""
        points = max(1, int(round(size)))
        theme = self.theme
        cache_key = (theme.font_family, theme.font_weight, theme.italic, points)

        if cache_key in self.font_cache:
            return self.font_cache[cache_key]

        font = None
        family = theme.font_family

        if "/" in family or family.lower().endswith((".ttf", ".otf")):
            font_path = os.path.expanduser(family)
            try:
                font = ImageFont.truetype(font_path, points)
            except OSError as e:
                logger.warning(f"Failed to load font from path '{font_path}': {e}")
        else:
            font_path = self._find_font_file(family, theme.font_weight, theme.italic)
            if font_path:
                try:
                    font = ImageFont.truetype(font_path, points)
                    logger.debug(f"Loaded font: {font_path}")
                except OSError as e:
                    logger.debug(f"Cannot load font {font_path}: {e}")

        if not font:
            logger.debug(f"Font '{family}' not found, using default")
            font = ImageFont.load_default(size=points)

        self.font_cache[cache_key] = font
        return font

    def _find_font_file(self, family: str, weight: str, italic: bool) -> Optional[str]:
        """Best installed file for the family, preferring an exact style match."""
        index = self._index_fonts()
        base = _normalize(FAMILY_ALIASES.get(family.lower(), family))
        bold = weight.lower() in BOLD_WEIGHTS

        candidates: List[str] = []
        style = "bold" if bold else ""
        if italic:
            candidates += [base + style + "oblique", base + style + "italic"]
        candidates.append(base + style)
        if bold and not italic:
            candidates.append(base + "bold")
        candidates.append(base)
        candidates.append(base + "regular")

        for stem in candidates:
            if stem in index:
                return index[stem]

        # Loose match, as a last resort
        for stem, path in sorted(index.items()):
            if stem.startswith(base):
                return path
        return None

    @classmethod
    def _index_fonts(cls) -> Dict[str, str]:
        if cls._font_index is not None:
            return cls._font_index

        index: Dict[str, str] = {}
        for font_dir in FONT_DIRS:
            if not os.path.exists(font_dir):
                continue
            for root, _dirs, files in os.walk(font_dir):
                for file in files:
                    if file.lower().endswith((".ttf", ".otf")):
                        stem = _normalize(os.path.splitext(file)[0])
                        index.setdefault(stem, os.path.join(root, file))

        logger.debug(f"Indexed {len(index)} font files")
        cls._font_index = index
        return index
