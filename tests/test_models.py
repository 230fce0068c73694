"""Tests for the chart models and text style resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from topster.core.models import BackgroundType, Chart, ChartBackground, ChartItem, ChartSize
from topster.core.styles import DEFAULT_LAYOUT, TextStyle, is_hex_color, resolve_text_style

from conftest import FakeImage, make_item


class TestChartItem:
    def test_display_title_with_creator(self):
        item = make_item("OK Computer", creator="Radiohead")
        assert item.display_title == "Radiohead - OK Computer"

    def test_display_title_without_creator(self):
        assert make_item("Untitled").display_title == "Untitled"

    def test_empty_creator_is_ignored(self):
        assert make_item("Untitled", creator="").display_title == "Untitled"

    def test_cover_image_is_kept_as_is(self):
        img = FakeImage(10, 20)
        item = ChartItem(title="t", cover_image=img)
        assert item.cover_image is img


class TestChartValidation:
    def test_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            ChartSize(x=0, y=3)
        with pytest.raises(ValidationError):
            ChartSize(x=3, y=-1)

    def test_gap_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            Chart(size=ChartSize(x=1, y=1), gap=-1)

    def test_defaults(self):
        chart = Chart(size=ChartSize(x=3, y=3))
        assert chart.title == ""
        assert chart.items == []
        assert chart.background.kind == BackgroundType.COLOR
        assert chart.shadows is True
        assert chart.show_titles is False

    def test_background_kind_from_string(self):
        bg = ChartBackground(kind="image", value="")
        assert bg.kind is BackgroundType.IMAGE


class TestVisibleItems:
    def test_capacity(self):
        assert Chart(size=ChartSize(x=4, y=3)).visible_capacity == 12

    def test_skips_empty_and_overflow(self):
        items = [make_item("a"), None, make_item("c"), make_item("d"), make_item("e")]
        chart = Chart(size=ChartSize(x=2, y=2), items=items)
        visible = chart.visible_items()
        assert [i for i, _ in visible] == [0, 2, 3]
        assert len(chart.items) == 5


# ---------------------------------------------------------------------------
# Text style resolution
# ---------------------------------------------------------------------------

class TestResolveTextStyle:
    def _chart(self, **kwargs) -> Chart:
        return Chart(size=ChartSize(x=1, y=1), **kwargs)

    def test_defaults(self):
        style = resolve_text_style(self._chart())
        assert style == TextStyle(font_family="monospace", color="white", shadows=True)

    def test_custom_values(self):
        style = resolve_text_style(self._chart(font="Georgia", text_color="#ff8800", shadows=False))
        assert style == TextStyle(font_family="Georgia", color="#ff8800", shadows=False)

    @pytest.mark.parametrize("color", ["blue", "#fff", "#12345G", "123456", "#1234567", ""])
    def test_invalid_color_falls_back_to_white(self, color):
        assert resolve_text_style(self._chart(text_color=color)).color == "white"

    def test_hex_is_case_insensitive(self):
        assert is_hex_color("#AbCdEf")
        assert not is_hex_color(None)

    def test_shadows_only_off_when_explicitly_false(self):
        assert resolve_text_style(self._chart(shadows=None)).shadows is True

    def test_font_shorthand(self):
        style = resolve_text_style(self._chart(font="Ubuntu Mono"))
        assert style.font(38) == "38pt Ubuntu Mono"

    def test_layout_constants(self):
        assert DEFAULT_LAYOUT.cell_size == 260
        assert DEFAULT_LAYOUT.title_margin == 60
