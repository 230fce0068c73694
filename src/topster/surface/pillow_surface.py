"""Pillow-backed raster surface.

Implements the ``Surface`` / ``DrawingContext`` contract on top of an
RGBA ``PIL.Image``. Every paint call is rendered onto a transparent
layer covering only the region it touches (widened by the reach of the
drop shadow) and alpha-composited onto the base image. The shadow is the
layer's alpha channel, tinted, offset and blurred underneath it.

Fonts are looked up by family name through matplotlib's font manager,
so generic families such as ``monospace`` resolve to a real TrueType
file on every platform (matplotlib bundles DejaVu).
"""

from __future__ import annotations

import logging
import math
import re
from functools import lru_cache
from typing import Callable, Optional

from matplotlib import font_manager
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from .base import DrawingContext, Surface, TextMetrics

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DEFAULT_WIDTH = 300
_DEFAULT_HEIGHT = 150
_DEFAULT_FONT = "10px sans-serif"
_PX_PER_PT = 96 / 72

_FONT_RE = re.compile(r"^\s*(?P<size>\d+(?:\.\d+)?)(?P<unit>pt|px)\s+(?P<family>.+?)\s*$")
_RGBA_RE = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)$",
    re.IGNORECASE,
)

# text_align → Pillow anchor on the alphabetic baseline
_ANCHORS = {
    "left": "ls",
    "start": "ls",
    "center": "ms",
    "right": "rs",
    "end": "rs",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def parse_color(value: str) -> tuple[int, int, int, int]:
    """Convert a CSS colour string to an RGBA tuple.

    Handles everything ``PIL.ImageColor`` does plus ``rgba()`` with a
    fractional alpha (``rgba(0,0,0,0.6)``). Raises ``ValueError`` for
    anything unrecognised.
    """
    m = _RGBA_RE.match(value.strip())
    if m:
        r, g, b = (min(int(c), 255) for c in m.group(1, 2, 3))
        alpha = min(max(float(m.group(4)), 0.0), 1.0)
        return r, g, b, round(alpha * 255)
    return ImageColor.getcolor(value.strip(), "RGBA")


def parse_font(value: str) -> Optional[tuple[str, int]]:
    """Split ``"16pt monospace"`` into ``("monospace", 21)`` (family, px).

    Returns *None* when *value* is not a ``<size><pt|px> <family>`` string.
    """
    m = _FONT_RE.match(value)
    if not m:
        return None
    size = float(m.group("size"))
    if m.group("unit") == "pt":
        size *= _PX_PER_PT
    return m.group("family"), max(1, round(size))


@lru_cache(maxsize=64)
def load_font(family: str, size_px: int) -> ImageFont.FreeTypeFont:
    """Resolve a CSS family list to a TrueType font at *size_px* pixels."""
    families = [f.strip().strip("'\"") for f in family.split(",") if f.strip()]
    path = font_manager.findfont(
        font_manager.FontProperties(family=families or ["monospace"]),
        fallback_to_default=True,
    )
    logger.debug("Resolved font %r → %s", family, path)
    return ImageFont.truetype(path, size_px)


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

class PillowContext(DrawingContext):
    """2D context painting onto a ``PillowSurface``.

    Invalid ``font`` or colour assignments are ignored and the previous
    value is kept, matching how a browser canvas treats them.
    """

    def __init__(self, surface: "PillowSurface") -> None:
        self._surface = surface
        self.reset()

    def reset(self) -> None:
        """Restore the default drawing state."""
        self._font = _DEFAULT_FONT
        self._fill_style = "#000000"
        self._stroke_style = "#000000"
        self._shadow_color = "rgba(0,0,0,0)"
        self.line_width = 1.0
        self.text_align = "start"
        self.shadow_offset_x = 0.0
        self.shadow_offset_y = 0.0
        self.shadow_blur = 0.0

    # -- State -----------------------------------------------------------

    @property
    def font(self) -> str:
        return self._font

    @font.setter
    def font(self, value: str) -> None:
        if parse_font(value) is None:
            logger.debug("Ignoring unparsable font %r", value)
            return
        self._font = value

    @property
    def fill_style(self) -> str:
        return self._fill_style

    @fill_style.setter
    def fill_style(self, value: str) -> None:
        if self._valid_color(value):
            self._fill_style = value

    @property
    def stroke_style(self) -> str:
        return self._stroke_style

    @stroke_style.setter
    def stroke_style(self, value: str) -> None:
        if self._valid_color(value):
            self._stroke_style = value

    @property
    def shadow_color(self) -> str:
        return self._shadow_color

    @shadow_color.setter
    def shadow_color(self, value: str) -> None:
        if self._valid_color(value):
            self._shadow_color = value

    @staticmethod
    def _valid_color(value: str) -> bool:
        try:
            parse_color(value)
        except ValueError:
            logger.debug("Ignoring invalid colour %r", value)
            return False
        return True

    # -- Operations ------------------------------------------------------

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            return
        box = (round(x), round(y), round(x + width), round(y + height))
        fill = parse_color(self._fill_style)
        self._paint(
            box,
            lambda draw, _layer, ox, oy: draw.rectangle(
                (box[0] - ox, box[1] - oy, box[2] - ox - 1, box[3] - oy - 1), fill=fill
            ),
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        if not text:
            return
        self._paint_text(text, x, y, parse_color(self._fill_style), 0)

    def stroke_text(self, text: str, x: float, y: float) -> None:
        if not text or self.line_width <= 0:
            return
        # Pillow strokes in whole pixels.
        width = max(1, math.ceil(self.line_width))
        self._paint_text(text, x, y, parse_color(self._stroke_style), width)

    def draw_image(
        self, image: Image.Image, x: float, y: float, width: float, height: float
    ) -> None:
        size = (max(1, round(width)), max(1, round(height)))
        scaled = image.convert("RGBA")
        if scaled.size != size:
            scaled = scaled.resize(size, Image.Resampling.LANCZOS)
        left, top = round(x), round(y)
        self._paint(
            (left, top, left + size[0], top + size[1]),
            lambda _draw, layer, ox, oy: layer.paste(scaled, (left - ox, top - oy)),
        )

    def measure_text(self, text: str) -> TextMetrics:
        return TextMetrics(width=self._current_font().getlength(text))

    # -- Internal --------------------------------------------------------

    def _current_font(self) -> ImageFont.FreeTypeFont:
        family, size_px = parse_font(self._font)
        return load_font(family, size_px)

    def _anchor(self) -> str:
        return _ANCHORS.get(self.text_align, "ls")

    def _has_shadow(self) -> bool:
        if parse_color(self._shadow_color)[3] == 0:
            return False
        return bool(self.shadow_blur or self.shadow_offset_x or self.shadow_offset_y)

    def _shadow_padding(self) -> int:
        """How far a shadow can reach beyond the shape casting it."""
        offset = max(abs(self.shadow_offset_x), abs(self.shadow_offset_y))
        return math.ceil(offset) + math.ceil(3 * self.shadow_blur / 2) + 1

    def _paint_text(
        self, text: str, x: float, y: float, color: tuple[int, int, int, int], stroke_width: int
    ) -> None:
        font = self._current_font()
        anchor = self._anchor()
        left, top, right, bottom = font.getbbox(text, anchor=anchor, stroke_width=stroke_width)
        box = (
            math.floor(x + left) - 1,
            math.floor(y + top) - 1,
            math.ceil(x + right) + 1,
            math.ceil(y + bottom) + 1,
        )
        self._paint(
            box,
            lambda draw, _layer, ox, oy: draw.text(
                (x - ox, y - oy),
                text,
                fill=color,
                font=font,
                anchor=anchor,
                stroke_width=stroke_width,
                stroke_fill=color,
            ),
        )

    def _paint(
        self,
        box: tuple[int, int, int, int],
        draw_fn: Callable[[ImageDraw.ImageDraw, Image.Image, int, int], None],
    ) -> None:
        """Render *draw_fn* onto a layer covering *box* and composite it.

        *draw_fn* receives the layer's canvas origin and must draw in
        layer coordinates. The layer is only as large as the painted
        region (plus the shadow's reach), clipped to the canvas.
        """
        canvas_w, canvas_h = self._surface.width, self._surface.height
        if canvas_w == 0 or canvas_h == 0:
            return

        shadow = self._has_shadow()
        pad = self._shadow_padding() if shadow else 0
        # Content just off-canvas can still cast a shadow onto it.
        x0 = max(box[0] - pad, -pad)
        y0 = max(box[1] - pad, -pad)
        x1 = min(box[2] + pad, canvas_w + pad)
        y1 = min(box[3] + pad, canvas_h + pad)
        if x0 >= x1 or y0 >= y1 or x1 <= 0 or y1 <= 0 or x0 >= canvas_w or y0 >= canvas_h:
            return

        layer = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))
        draw_fn(ImageDraw.Draw(layer), layer, x0, y0)

        # Portion of the layer that lies on the canvas.
        dest = (max(x0, 0), max(y0, 0))
        source = (
            dest[0] - x0,
            dest[1] - y0,
            min(x1, canvas_w) - x0,
            min(y1, canvas_h) - y0,
        )
        if shadow:
            self._surface.composite(self._shadow_for(layer), dest, source)
        self._surface.composite(layer, dest, source)

    def _shadow_for(self, layer: Image.Image) -> Image.Image:
        """Tinted, offset and blurred copy of *layer*'s alpha channel."""
        r, g, b, a = parse_color(self._shadow_color)
        alpha = layer.getchannel("A")
        if a < 255:
            alpha = alpha.point(lambda v: v * a // 255)
        tinted = Image.new("RGBA", layer.size, (r, g, b, 0))
        tinted.putalpha(alpha)

        shadow = Image.new("RGBA", layer.size, (0, 0, 0, 0))
        shadow.paste(tinted, (round(self.shadow_offset_x), round(self.shadow_offset_y)))
        if self.shadow_blur > 0:
            shadow = shadow.filter(ImageFilter.GaussianBlur(self.shadow_blur / 2))
        return shadow


# ---------------------------------------------------------------------------
# Surface
# ---------------------------------------------------------------------------

class PillowSurface(Surface):
    """RGBA raster surface backed by a ``PIL.Image``.

    Usage::

        surface = generate_chart(PillowSurface(), chart)
        surface.image.convert("RGB").save("chart.png")
    """

    def __init__(self, width: int = _DEFAULT_WIDTH, height: int = _DEFAULT_HEIGHT) -> None:
        self._width = max(0, int(width))
        self._height = max(0, int(height))
        self._image = self._blank()
        self._context = PillowContext(self)

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = max(0, int(value))
        self._clear()

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = max(0, int(value))
        self._clear()

    @property
    def image(self) -> Image.Image:
        """The painted raster (RGBA)."""
        return self._image

    def get_context(self, kind: str = "2d") -> Optional[PillowContext]:
        if kind != "2d":
            return None
        return self._context

    def _blank(self) -> Image.Image:
        return Image.new("RGBA", (self._width, self._height), (0, 0, 0, 0))

    def _clear(self) -> None:
        self._image = self._blank()
        self._context.reset()

    def composite(
        self,
        layer: Image.Image,
        dest: tuple[int, int] = (0, 0),
        source: tuple[int, int, int, int] | None = None,
    ) -> None:
        """Alpha-composite *layer* (or its *source* box) onto the image at *dest*."""
        if source is None:
            source = (0, 0, layer.width, layer.height)
        self._image.alpha_composite(layer, dest=dest, source=source)
