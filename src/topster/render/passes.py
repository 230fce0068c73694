"""Drawing passes for a chart.

Passes run in a fixed order, each painting over the previous one:
background, title, then the grid of covers with their captions.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from ..core.geometry import cell_coordinates, find_centering_offset, get_scaled_dimensions
from ..core.models import BackgroundType, CanvasInfo, Chart, ChartItem
from ..core.styles import DEFAULT_EFFECTS, DEFAULT_FONTS, DEFAULT_LAYOUT, TextStyle, resolve_text_style
from ..surface.base import DrawingContext, Surface, get_context, is_image_ready

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------

def draw_background(surface: Surface, chart: Chart) -> None:
    """Flat-fill the surface, or cover it with the background photo.

    A photo that has not finished loading is skipped, leaving the surface
    as it was.
    """
    background = chart.background

    if background.kind == BackgroundType.COLOR:
        ctx = get_context(surface)
        ctx.fill_style = background.value
        ctx.fill_rect(0, 0, surface.width, surface.height)
        return

    img = background.image
    if not is_image_ready(img):
        logger.debug("Background image not ready, skipping background pass")
        return

    ctx = get_context(surface)
    image_ratio = img.height / img.width
    canvas_ratio = surface.height / surface.width

    if image_ratio > canvas_ratio:
        height = surface.width * image_ratio
        ctx.draw_image(
            img,
            0,
            math.floor((surface.height - height) / 2),
            surface.width,
            height,
        )
    else:
        width = surface.width * canvas_ratio / image_ratio
        ctx.draw_image(
            img,
            math.floor((surface.width - width) / 2),
            0,
            width,
            surface.height,
        )


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def _apply_text_effects(ctx: DrawingContext, style: TextStyle, line_width: float) -> None:
    if style.shadows:
        ctx.shadow_offset_x = DEFAULT_EFFECTS.shadow_offset_x
        ctx.shadow_offset_y = DEFAULT_EFFECTS.shadow_offset_y
        ctx.shadow_blur = DEFAULT_EFFECTS.shadow_blur
        ctx.shadow_color = DEFAULT_EFFECTS.shadow_color
    ctx.line_width = line_width
    ctx.stroke_style = DEFAULT_EFFECTS.outline_color


def draw_title(surface: Surface, chart: Chart) -> None:
    """Paint the chart title centered in the title bar."""
    if not chart.title:
        return

    ctx = get_context(surface)
    style = resolve_text_style(chart)
    ctx.font = style.font(DEFAULT_FONTS.title_size_pt)
    ctx.fill_style = style.color
    ctx.text_align = "center"
    _apply_text_effects(ctx, style, DEFAULT_EFFECTS.title_line_width)

    x = surface.width / 2
    y = (chart.gap + DEFAULT_LAYOUT.title_baseline_offset) / 2
    ctx.stroke_text(chart.title, x, y)
    ctx.fill_text(chart.title, x, y)


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

def draw_cover(
    ctx: DrawingContext,
    cover: Any,
    coords: tuple[int, int],
    cell_size: int,
    gap: float,
    dimensions: dict[str, int],
    chart_title_margin: int,
) -> None:
    """Draw an already-scaled cover centered in grid cell *coords*."""
    col, row = coords
    ctx.draw_image(
        cover,
        (col * (cell_size + gap)) + gap + find_centering_offset(dimensions["width"], cell_size),
        (row * (cell_size + gap)) + gap + find_centering_offset(dimensions["height"], cell_size)
        + chart_title_margin,
        dimensions["width"],
        dimensions["height"],
    )


def _draw_caption(
    ctx: DrawingContext,
    surface: Surface,
    item: ChartItem,
    index: int,
    row: int,
    chart: Chart,
    info: CanvasInfo,
) -> None:
    caption = item.display_title
    x = surface.width - info.max_item_title_width + DEFAULT_LAYOUT.caption_inset
    y = (
        (DEFAULT_LAYOUT.caption_line_height * index)
        + (DEFAULT_LAYOUT.caption_line_height + chart.gap)
        + ((row % (index + 1)) * DEFAULT_LAYOUT.caption_row_spacing)
        + info.chart_title_margin
    )
    ctx.stroke_text(caption, x, y)
    ctx.fill_text(caption, x, y)


def insert_cover_images(surface: Surface, chart: Chart, info: CanvasInfo) -> None:
    """Paint every visible cover and, if enabled, its sidebar caption.

    Items past the grid's capacity are left in ``chart.items`` untouched
    but not painted, so growing the grid again brings them back.
    """
    ctx = get_context(surface)
    style = resolve_text_style(chart)
    ctx.font = style.font(DEFAULT_FONTS.caption_size_pt)
    ctx.fill_style = style.color
    ctx.text_align = "left"
    _apply_text_effects(ctx, style, DEFAULT_EFFECTS.caption_line_width)

    capacity = chart.visible_capacity
    for index, item in enumerate(chart.items):
        if item is None:
            continue
        if index >= capacity:
            logger.debug("Item %d (%s) is outside the %d-slot grid", index, item.title, capacity)
            continue

        coords = cell_coordinates(index, chart.size.x)
        dimensions = get_scaled_dimensions(item.cover_image, info.cell_size)
        draw_cover(
            ctx,
            item.cover_image,
            coords,
            info.cell_size,
            chart.gap,
            dimensions,
            info.chart_title_margin,
        )

        if chart.show_titles:
            _draw_caption(ctx, surface, item, index, coords[1], chart, info)
