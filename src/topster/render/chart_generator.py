"""Chart generator: runs the layout planner and drawing passes in order."""

from __future__ import annotations

import logging
from typing import TypeVar

from ..core.models import Chart
from ..surface.base import Surface
from .layout import setup
from .passes import draw_background, draw_title, insert_cover_images

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Surface)


class ChartGenerator:
    """Chart → painted surface.

    Each ``generate`` call is independent. The surface is the only shared
    state, so callers must not run two generations against one surface
    at the same time.

    Usage::

        surface = ChartGenerator().generate(PillowSurface(), chart)
    """

    def generate(self, surface: S, chart: Chart) -> S:
        info = setup(surface, chart)

        draw_background(surface, chart)
        draw_title(surface, chart)
        insert_cover_images(surface, chart, info)

        logger.debug("Rendered chart %r with %d visible item(s)", chart.title, len(chart.visible_items()))
        return surface


def generate_chart(surface: S, chart: Chart) -> S:
    """Paint *chart* onto *surface* and return the surface."""
    return ChartGenerator().generate(surface, chart)
