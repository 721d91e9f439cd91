"""
Tests for theme resolution and canvas rendering
"""

from unittest.mock import patch

import pytest
from PIL import Image

from zenwidget.config.models import DEFAULT_THEME, Theme
from zenwidget.device.renderer import WIDGET_FAMILIES, CanvasRenderer
from zenwidget.device.theme import ThemeResolver
from zenwidget.engine.layout import Entry, compose_columns, compose_list, empty_plan


@pytest.fixture
def no_fonts():
    """Pretend no font files are installed so the bundled default is used"""
    with patch.object(ThemeResolver, "_font_index", {}):
        yield


class TestThemeResolver:
    def test_colors(self):
        resolver = ThemeResolver(Theme(background_color="102030", text_color="#FFFFFF"))
        assert resolver.background == (16, 32, 48)
        assert resolver.text_color == (255, 255, 255)

    def test_short_and_alpha_hex(self):
        assert ThemeResolver.color("fff", (0, 0, 0)) == (255, 255, 255)
        assert ThemeResolver.color("FF000080", (0, 0, 0)) == (255, 0, 0)

    def test_invalid_color_falls_back(self):
        assert ThemeResolver.color("zzzzzz", (1, 2, 3)) == (1, 2, 3)

    def test_font_is_cached(self, no_fonts):
        resolver = ThemeResolver(DEFAULT_THEME)
        assert resolver.font(12) is resolver.font(12.2)
        assert resolver.font(12) is not resolver.font(14)

    def test_missing_font_path_uses_default(self, no_fonts, caplog):
        resolver = ThemeResolver(Theme(font_family="/nonexistent/font.ttf"))
        font = resolver.font(14)
        assert font is not None
        assert "Failed to load font from path" in caplog.text

    def test_family_lookup_prefers_style(self):
        index = {
            "dejavusans": "/fonts/DejaVuSans.ttf",
            "dejavusansbold": "/fonts/DejaVuSans-Bold.ttf",
            "dejavusansboldoblique": "/fonts/DejaVuSans-BoldOblique.ttf",
            "dejavuserif": "/fonts/DejaVuSerif.ttf",
        }
        with patch.object(ThemeResolver, "_font_index", index):
            resolver = ThemeResolver(DEFAULT_THEME)
            assert resolver._find_font_file("system", "bold", False) == "/fonts/DejaVuSans-Bold.ttf"
            assert resolver._find_font_file("system", "regular", False) == "/fonts/DejaVuSans.ttf"
            assert resolver._find_font_file("system", "bold", True) == "/fonts/DejaVuSans-BoldOblique.ttf"
            assert resolver._find_font_file("serif", "bold", False) == "/fonts/DejaVuSerif.ttf"
            assert resolver._find_font_file("Comic Sans", "bold", False) is None


class TestCanvasRenderer:
    @pytest.fixture
    def renderer(self, no_fonts):
        return CanvasRenderer(ThemeResolver(Theme(background_color="000000", text_color="FFFFFF")))

    def test_renders_list(self, renderer):
        entries = [Entry("a", "Dentist", "calshow://", detail="2d"), Entry("b", "Gym", "calshow://")]
        plan = compose_list(entries, {"a": 20, "b": 14})
        image = renderer.render(plan, WIDGET_FAMILIES["small"])

        assert isinstance(image, Image.Image)
        assert image.size == (155, 155)
        # Something other than background was drawn
        assert image.getbbox() is not None

    def test_renders_columns_with_spacers(self, renderer):
        entries = [
            Entry("l", "Left", "l://", group="left"),
            Entry("r", "Right", "r://", group="right"),
            Entry("l2", "Left 2", "l2://", group="left"),
        ]
        plan = compose_columns(entries, {"l": 30, "r": 20, "l2": 10}, order=["left", "center", "right"], pad_to=30)
        image = renderer.render(plan, WIDGET_FAMILIES["large"], (0, 8, 0, 8))
        assert image.size == (329, 345)
        assert image.getbbox() is not None

    def test_background_color(self, no_fonts):
        renderer = CanvasRenderer(ThemeResolver(Theme(background_color="FF0000")))
        image = renderer.render(empty_plan(placeholder=""), (50, 50))
        assert image.getpixel((0, 0)) == (255, 0, 0)

    def test_placeholder_is_drawn(self, renderer):
        image = renderer.render(empty_plan(placeholder="No upcoming events"), WIDGET_FAMILIES["small"])
        assert image.getbbox() is not None

    def test_long_text_is_shortened(self, renderer):
        from PIL import ImageDraw

        draw = ImageDraw.Draw(Image.new("RGB", (10, 10)))
        text, font = renderer._fit_text(draw, "A very long item name that cannot fit", 20, 60)
        assert draw.textlength(text, font=font) <= 60 or len(text) <= 2
        assert text.endswith("…")

    def test_short_text_is_untouched(self, renderer):
        from PIL import ImageDraw

        draw = ImageDraw.Draw(Image.new("RGB", (10, 10)))
        text, _font = renderer._fit_text(draw, "Maps", 12, 200)
        assert text == "Maps"
