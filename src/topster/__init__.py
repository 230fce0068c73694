"""topster: lay out a grid of cover art into a chart image.

Example::

    from topster import Chart, ChartItem, ChartSize, PillowSurface, generate_chart

    chart = Chart(size=ChartSize(x=3, y=3), items=[...], gap=10)
    surface = generate_chart(PillowSurface(), chart)
"""

from .core.geometry import find_centering_offset, get_max_title_width, get_scaled_dimensions
from .core.models import BackgroundType, CanvasInfo, Chart, ChartBackground, ChartItem, ChartSize
from .render import (
    ChartGenerator,
    draw_background,
    draw_cover,
    draw_title,
    generate_chart,
    insert_cover_images,
    setup,
)
from .surface import PillowSurface, RenderContextError, Surface

__version__ = "0.1.0"

__all__ = [
    "BackgroundType",
    "CanvasInfo",
    "Chart",
    "ChartBackground",
    "ChartGenerator",
    "ChartItem",
    "ChartSize",
    "PillowSurface",
    "RenderContextError",
    "Surface",
    "draw_background",
    "draw_cover",
    "draw_title",
    "find_centering_offset",
    "generate_chart",
    "get_max_title_width",
    "get_scaled_dimensions",
    "insert_cover_images",
    "setup",
]
