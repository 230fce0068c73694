"""Drawing-surface contract the renderer paints onto.

The renderer never touches pixels directly. It talks to a ``Surface``
(something with a mutable pixel size) and the ``DrawingContext`` it
hands out, which follows the familiar 2D-canvas model: a bag of
mutable drawing state plus a handful of immediate-mode operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


class RenderContextError(RuntimeError):
    """The surface could not provide a 2D drawing context."""


@dataclass(frozen=True)
class TextMetrics:
    """Result of ``DrawingContext.measure_text``."""

    width: float


class DrawingContext(ABC):
    """Immediate-mode 2D drawing context.

    State attributes (set directly, read by every subsequent call):

    * ``font`` – CSS-like shorthand, e.g. ``"16pt monospace"``.
    * ``fill_style`` / ``stroke_style`` – CSS colour strings.
    * ``line_width`` – stroke width in pixels.
    * ``text_align`` – ``"left"``, ``"center"``, ``"right"``
      (``"start"``/``"end"`` are accepted as aliases).
    * ``shadow_offset_x``, ``shadow_offset_y``, ``shadow_blur``,
      ``shadow_color`` – drop shadow applied to every draw call.
    """

    font: str
    fill_style: str
    stroke_style: str
    line_width: float
    text_align: str
    shadow_offset_x: float
    shadow_offset_y: float
    shadow_blur: float
    shadow_color: str

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        ...

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float) -> None:
        ...

    @abstractmethod
    def stroke_text(self, text: str, x: float, y: float) -> None:
        ...

    @abstractmethod
    def draw_image(
        self, image: Any, x: float, y: float, width: float, height: float
    ) -> None:
        ...

    @abstractmethod
    def measure_text(self, text: str) -> TextMetrics:
        """Measure *text* with the currently set ``font``."""
        ...


class Surface(ABC):
    """A resizable raster target.

    Assigning ``width`` or ``height`` discards everything painted so far
    and resets the context state.
    """

    width: int
    height: int

    @abstractmethod
    def get_context(self, kind: str = "2d") -> Optional[DrawingContext]:
        """Return the drawing context, or *None* if *kind* is unsupported."""
        ...


def get_context(surface: Surface) -> DrawingContext:
    """Return the surface's 2D context, raising if there is none."""
    ctx = surface.get_context("2d")
    if ctx is None:
        raise RenderContextError("Rendering context not found, try reloading!")
    return ctx


def is_image_ready(image: Any) -> bool:
    """An image is ready once decoded; objects without ``complete`` always are."""
    if image is None:
        return False
    return bool(getattr(image, "complete", True))
