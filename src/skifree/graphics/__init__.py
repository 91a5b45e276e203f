"""Graphics module for SkiFree rendering."""

from skifree.graphics.renderer import SlopeRenderer
from skifree.graphics.primitives import (
    blend_rect,
    clear,
    draw_circle,
    draw_line,
    draw_rect,
    draw_triangle,
    new_buffer,
)

__all__ = [
    # Renderer
    "SlopeRenderer",
    # Primitives
    "blend_rect",
    "clear",
    "draw_circle",
    "draw_line",
    "draw_rect",
    "draw_triangle",
    "new_buffer",
]
