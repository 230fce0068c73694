"""Layout planning and drawing passes."""

from .chart_generator import ChartGenerator, generate_chart
from .layout import setup
from .passes import draw_background, draw_cover, draw_title, insert_cover_images

__all__ = [
    "ChartGenerator",
    "draw_background",
    "draw_cover",
    "draw_title",
    "generate_chart",
    "insert_cover_images",
    "setup",
]
