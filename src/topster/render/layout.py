"""Layout planning: size the surface and compute the pixel plan."""

from __future__ import annotations

import logging

from ..core.geometry import get_max_title_width
from ..core.models import CanvasInfo, Chart
from ..core.styles import DEFAULT_LAYOUT
from ..surface.base import Surface, get_context

logger = logging.getLogger(__name__)


def setup(surface: Surface, chart: Chart) -> CanvasInfo:
    """Compute the chart's pixel layout and resize *surface* to fit it.

    Resizing clears whatever the surface held before, so nothing painted
    prior to this call survives it. Raises ``RenderContextError`` when the
    surface has no 2D context.
    """
    ctx = get_context(surface)
    gap = chart.gap
    cell_size = DEFAULT_LAYOUT.cell_size

    max_item_title_width = get_max_title_width(chart, ctx)
    chart_title_margin = 0 if chart.title == "" else DEFAULT_LAYOUT.title_margin

    # room for each cell + gap between cells + margins
    width = (chart.size.x * (cell_size + gap)) + gap + max_item_title_width
    height = (chart.size.y * (cell_size + gap)) + gap + chart_title_margin

    surface.width = width
    surface.height = height
    logger.debug(
        "Chart canvas %sx%s (grid %dx%d, gap %s, sidebar %s)",
        width, height, chart.size.x, chart.size.y, gap, max_item_title_width,
    )

    return CanvasInfo(
        width=width,
        height=height,
        cell_size=cell_size,
        chart_title_margin=chart_title_margin,
        max_item_title_width=max_item_title_width,
    )
