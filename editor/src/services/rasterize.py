"""Shape rasterization - Bresenham lines, rectangles, point painting.

Shapes produce logical points only. paint_points() is the single place
that writes them, after expanding each point through the symmetry
resolver and dropping anything outside the buffer.
"""

from typing import Iterable, List, Optional, Tuple

from models.raster_buffer import RasterBuffer
from services.symmetry import SymmetryResolver

Point = Tuple[int, int]


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> List[Point]:
    """Integer line from (x0, y0) to (x1, y1), both endpoints included

    Returns:
        Ordered points with no consecutive duplicates
    """
    points = []

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    cx, cy = x0, y0
    while True:
        points.append((cx, cy))
        if cx == x1 and cy == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            cx += sx
        if e2 < dx:
            err += dx
            cy += sy

    return points


def clamp_rect(x0: int, y0: int, x1: int, y1: int, width: int, height: int) -> Optional[Tuple[int, int, int, int]]:
    """Normalize two corners and clamp them to the buffer

    Returns:
        (left, top, right, bottom), all inclusive, or None when the
        rectangle lies entirely outside the buffer
    """
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    if right < 0 or bottom < 0 or left >= width or top >= height:
        return None
    return max(0, left), max(0, top), min(width - 1, right), min(height - 1, bottom)


def rectangle_points(x0: int, y0: int, x1: int, y1: int, width: int, height: int,
                     filled: bool = False) -> List[Point]:
    """Pixels of the clamped rectangle spanned by two corners

    Outline mode draws the four edges of the clamped rect as lines.
    """
    rect = clamp_rect(x0, y0, x1, y1, width, height)
    if rect is None:
        return []
    left, top, right, bottom = rect

    if filled:
        return [(x, y) for y in range(top, bottom + 1) for x in range(left, right + 1)]

    edges = (
        bresenham_line(left, top, right, top),
        bresenham_line(right, top, right, bottom),
        bresenham_line(right, bottom, left, bottom),
        bresenham_line(left, bottom, left, top),
    )
    # Corners are shared by two edges
    return list(dict.fromkeys(point for edge in edges for point in edge))


def paint_points(buffer: RasterBuffer, points: Iterable[Point], color: Tuple[int, int, int, int],
                 resolver: Optional[SymmetryResolver] = None) -> int:
    """Write color at every point (and its mirrors) in place

    Args:
        buffer: Writable target buffer
        points: Logical target points
        color: RGBA to write
        resolver: Symmetry resolver, None for no mirroring

    Returns:
        Number of pixels written
    """
    targets = resolver.expand(points) if resolver is not None else list(dict.fromkeys(points))
    written = 0
    for x, y in targets:
        if buffer.set_pixel(x, y, color):
            written += 1
    return written
