"""Shared fakes: a surface that records every draw call instead of painting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest

from topster.core.models import Chart, ChartItem, ChartSize
from topster.surface.base import DrawingContext, Surface, TextMetrics

_STATE_FIELDS = (
    "font",
    "fill_style",
    "stroke_style",
    "line_width",
    "text_align",
    "shadow_offset_x",
    "shadow_offset_y",
    "shadow_blur",
    "shadow_color",
)


@dataclass
class FakeImage:
    """Decoded-image stand-in: just pixel dimensions and a load flag."""
    width: int
    height: int
    complete: bool = True


@dataclass
class DrawCall:
    op: str
    args: tuple
    state: dict[str, Any]


class RecordingContext(DrawingContext):
    """Context that logs calls; text is 10px per character wide."""

    def __init__(self, surface: "RecordingSurface") -> None:
        self.surface = surface
        self.measured_with: list[str] = []
        self.reset()

    def reset(self) -> None:
        self.font = "10px sans-serif"
        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0
        self.text_align = "start"
        self.shadow_offset_x = 0
        self.shadow_offset_y = 0
        self.shadow_blur = 0
        self.shadow_color = "rgba(0,0,0,0)"

    def _record(self, op: str, *args: Any) -> None:
        state = {name: getattr(self, name) for name in _STATE_FIELDS}
        self.surface.calls.append(DrawCall(op, args, state))

    def fill_rect(self, x, y, width, height):
        self._record("fill_rect", x, y, width, height)

    def fill_text(self, text, x, y):
        self._record("fill_text", text, x, y)

    def stroke_text(self, text, x, y):
        self._record("stroke_text", text, x, y)

    def draw_image(self, image, x, y, width, height):
        self._record("draw_image", image, x, y, width, height)

    def measure_text(self, text):
        self.measured_with.append(self.font)
        return TextMetrics(width=len(text) * 10)


class RecordingSurface(Surface):
    def __init__(self, has_context: bool = True) -> None:
        self._width = 300
        self._height = 150
        self.calls: list[DrawCall] = []
        self._context: Optional[RecordingContext] = RecordingContext(self) if has_context else None

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value) -> None:
        self._width = int(value)
        self._clear("width")

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value) -> None:
        self._height = int(value)
        self._clear("height")

    def _clear(self, axis: str) -> None:
        self.calls.append(DrawCall("resize", (axis, self._width, self._height), {}))
        if self._context is not None:
            self._context.reset()

    def get_context(self, kind: str = "2d") -> Optional[RecordingContext]:
        return self._context if kind == "2d" else None

    def ops(self, name: str) -> list[DrawCall]:
        return [c for c in self.calls if c.op == name]


def make_item(title: str, width: int = 300, height: int = 300, creator: str | None = None) -> ChartItem:
    return ChartItem(title=title, creator=creator, cover_image=FakeImage(width, height))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def two_by_one_chart() -> Chart:
    """Two covers side by side, no title, no captions."""
    return Chart(
        title="",
        size=ChartSize(x=2, y=1),
        gap=10,
        items=[make_item("A", 300, 300), make_item("B", 100, 100)],
        show_titles=False,
    )
