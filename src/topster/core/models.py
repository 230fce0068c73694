"""Pydantic models describing a chart and its computed canvas layout.

A ``Chart`` is owned by the caller and only read by the renderer.
``CanvasInfo`` is derived from a chart on every render and never cached.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BackgroundType(str, Enum):
    """How the chart background is painted."""
    COLOR = "color"
    IMAGE = "image"


# ---------------------------------------------------------------------------
# Chart description
# ---------------------------------------------------------------------------

class ChartSize(BaseModel):
    """Grid dimensions: ``x`` columns by ``y`` rows."""
    x: int = Field(gt=0)
    y: int = Field(gt=0)


class ChartBackground(BaseModel):
    """Solid colour or photo behind the grid."""
    kind: BackgroundType = BackgroundType.COLOR
    value: str = "#000000"
    image: Any = None


class ChartItem(BaseModel):
    """A single cover on the chart.

    ``cover_image`` is an already-decoded raster exposing ``width`` and
    ``height`` (e.g. a ``PIL.Image.Image``).
    """
    title: str
    creator: Optional[str] = None
    cover_url: str = ""
    cover_image: Any

    @property
    def display_title(self) -> str:
        if self.creator:
            return f"{self.creator} - {self.title}"
        return self.title


class Chart(BaseModel):
    """Everything the renderer needs to paint a chart.

    ``items`` may hold more entries than the grid shows; the extra ones
    are kept but not painted.
    """
    title: str = ""
    items: list[Optional[ChartItem]] = Field(default_factory=list)
    size: ChartSize
    background: ChartBackground = Field(default_factory=ChartBackground)
    show_titles: bool = False
    gap: float = Field(default=0, ge=0)
    font: Optional[str] = None
    text_color: Optional[str] = None
    shadows: Optional[bool] = True

    @property
    def visible_capacity(self) -> int:
        return self.size.x * self.size.y

    def visible_items(self) -> list[tuple[int, ChartItem]]:
        """Occupied slots inside the grid, as ``(index, item)`` pairs."""
        return [
            (index, item)
            for index, item in enumerate(self.items[: self.visible_capacity])
            if item is not None
        ]


# ---------------------------------------------------------------------------
# Layout plan
# ---------------------------------------------------------------------------

class CanvasInfo(BaseModel):
    """Pixel layout computed by ``setup`` and consumed by the draw passes."""
    width: float
    height: float
    cell_size: int
    chart_title_margin: int
    max_item_title_width: float
