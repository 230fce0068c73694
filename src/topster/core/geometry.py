"""Pure geometry helpers: caption sidebar width, cover scaling, centering."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from .models import Chart
from .styles import DEFAULT_FONTS, DEFAULT_LAYOUT, resolve_text_style

if TYPE_CHECKING:
    from ..surface.base import DrawingContext


def get_max_title_width(chart: Chart, ctx: "DrawingContext") -> float:
    """Width of the caption sidebar.

    The sidebar is only as wide as the longest visible caption, plus a
    20px minimum margin and the chart gap. Slots beyond the grid are not
    measured. Returns 0 when captions are hidden.
    """
    if not chart.show_titles:
        return 0

    style = resolve_text_style(chart)
    ctx.font = style.font(DEFAULT_FONTS.caption_size_pt)
    ctx.fill_style = style.color

    widest = 0.0
    for _, item in chart.visible_items():
        width = ctx.measure_text(item.display_title).width
        if width > widest:
            widest = width

    return widest + DEFAULT_LAYOUT.sidebar_min_margin + chart.gap


def get_scaled_dimensions(image: Any, cell_size: int) -> dict[str, int]:
    """Fit *image* into a square cell of side *cell_size*.

    Images larger than the cell on either axis are scaled down to fit.
    Images smaller than the cell on both axes are scaled *up* until one
    axis fills it. An image exactly as large as the cell on one axis
    and smaller on the other is left alone. Results are floored.
    """
    width, height = image.width, image.height
    ratio = 1.0

    if width > cell_size and height > cell_size:
        ratio = min(cell_size / width, cell_size / height)
    elif width > cell_size:
        ratio = cell_size / width
    elif height > cell_size:
        ratio = cell_size / height
    elif width < cell_size and height < cell_size:
        ratio = min(cell_size / width, cell_size / height)

    return {
        "width": math.floor(width * ratio),
        "height": math.floor(height * ratio),
    }


def find_centering_offset(dimension: float, cell_size: int) -> int:
    """Margin that centers *dimension* within a cell along one axis."""
    if dimension < cell_size:
        return math.floor((cell_size - dimension) / 2)
    return 0


def cell_coordinates(index: int, columns: int) -> tuple[int, int]:
    """Grid ``(column, row)`` of the item at *index*."""
    return index % columns, index // columns
