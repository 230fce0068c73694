"""Drawing surfaces the chart renderer paints onto."""

from .base import (
    DrawingContext,
    RenderContextError,
    Surface,
    TextMetrics,
    get_context,
    is_image_ready,
)
from .pillow_surface import PillowContext, PillowSurface

__all__ = [
    "DrawingContext",
    "PillowContext",
    "PillowSurface",
    "RenderContextError",
    "Surface",
    "TextMetrics",
    "get_context",
    "is_image_ready",
]
