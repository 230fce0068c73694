"""Style constants for chart rendering and per-render text style resolution.

The constants are grouped in frozen dataclasses with a module-level
default instance each. ``resolve_text_style`` turns the optional text
fields of a ``Chart`` into a fully populated ``TextStyle`` once per pass.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import Chart

_HEX_COLOR_RE = re.compile(r"#[0-9A-F]{6}", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChartLayout:
    """Pixel constants for the grid, title bar and caption sidebar."""

    cell_size: int = 260
    title_margin: int = 60
    title_baseline_offset: int = 90
    sidebar_min_margin: int = 20
    caption_inset: int = 10
    caption_line_height: int = 25
    caption_row_spacing: int = 35


@dataclass(frozen=True)
class ChartFonts:
    """Font sizes (pt) and the family used when a chart names none."""

    fallback_family: str = "monospace"
    title_size_pt: int = 38
    caption_size_pt: int = 16


@dataclass(frozen=True)
class TextEffects:
    """Drop shadow and outline applied to title and caption text."""

    shadow_offset_x: int = 2
    shadow_offset_y: int = 2
    shadow_blur: int = 4
    shadow_color: str = "rgba(0,0,0,0.6)"
    outline_color: str = "black"
    title_line_width: float = 0.2
    caption_line_width: float = 0.3
    default_text_color: str = "white"


DEFAULT_LAYOUT = ChartLayout()
DEFAULT_FONTS = ChartFonts()
DEFAULT_EFFECTS = TextEffects()


# ---------------------------------------------------------------------------
# Resolved text style
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextStyle:
    """Text options of a chart with every default filled in."""

    font_family: str
    color: str
    shadows: bool

    def font(self, size_pt: int) -> str:
        return f"{size_pt}pt {self.font_family}"


def is_hex_color(value: str | None) -> bool:
    return bool(value) and _HEX_COLOR_RE.fullmatch(value) is not None


def resolve_text_style(chart: Chart) -> TextStyle:
    """Fill in the chart's optional ``font``, ``text_color`` and ``shadows``.

    An invalid or missing text colour falls back to white rather than
    failing the render.
    """
    return TextStyle(
        font_family=chart.font or DEFAULT_FONTS.fallback_family,
        color=chart.text_color if is_hex_color(chart.text_color) else DEFAULT_EFFECTS.default_text_color,
        shadows=chart.shadows is not False,
    )
