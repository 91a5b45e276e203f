"""Basic drawing primitives for the slope frame buffer.

Buffers are numpy arrays shaped (height, width, 3). Every primitive clips
to the buffer, so callers can pass shapes that are partly off screen.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def _clip(buffer: Buffer, x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle, filled or as a one pixel outline."""
    x1, y1, x2, y2 = _clip(buffer, int(x), int(y), int(width), int(height))
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    # Only draw the edges that are actually on screen
    if y1 == int(y):
        buffer[y1, x1:x2] = color
    if y2 == int(y) + int(height):
        buffer[y2 - 1, x1:x2] = color
    if x1 == int(x):
        buffer[y1:y2, x1] = color
    if x2 == int(x) + int(width):
        buffer[y1:y2, x2 - 1] = color


def blend_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle over what is already there."""
    x1, y1, x2, y2 = _clip(buffer, int(x), int(y), int(width), int(height))
    if x1 >= x2 or y1 >= y2 or alpha <= 0:
        return
    alpha = min(alpha, 1.0)
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    region = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = region.astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle.

    Works on the circle's bounding box only, not the whole buffer.
    """
    cx, cy, radius = int(cx), int(cy), int(radius)
    x1, y1, x2, y2 = _clip(buffer, cx - radius, cy - radius, 2 * radius + 1, 2 * radius + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def draw_triangle(
    buffer: Buffer,
    apex: Point,
    base_left: Point,
    base_right: Point,
    color: Color,
) -> None:
    """Fill a triangle using a barycentric mask over its bounding box."""
    xs = [int(apex[0]), int(base_left[0]), int(base_right[0])]
    ys = [int(apex[1]), int(base_left[1]), int(base_right[1])]
    x1, y1, x2, y2 = _clip(
        buffer, min(xs), min(ys), max(xs) - min(xs) + 1, max(ys) - min(ys) + 1
    )
    if x1 >= x2 or y1 >= y2:
        return

    (ax, ay), (bx, by), (qx, qy) = zip(xs, ys)
    area = (bx - ax) * (qy - ay) - (qx - ax) * (by - ay)
    if area == 0:
        return

    py, px = np.mgrid[y1:y2, x1:x2]
    w0 = (bx - px) * (qy - py) - (qx - px) * (by - py)
    w1 = (qx - px) * (ay - py) - (ax - px) * (qy - py)
    w2 = (ax - px) * (by - py) - (bx - px) * (ay - py)
    if area > 0:
        mask = (w0 >= 0) & (w1 >= 0) & (w2 >= 0)
    else:
        mask = (w0 <= 0) & (w1 <= 0) & (w2 <= 0)
    buffer[y1:y2, x1:x2][mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
) -> None:
    """Draw a one pixel line using Bresenham's algorithm."""
    h, w = buffer.shape[:2]
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        if 0 <= x < w and 0 <= y < h:
            buffer[y, x] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
