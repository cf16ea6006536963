"""Coordinate transformation utilities for the pixel canvas.

Provides conversion between:
- Display space (widget pixels, Y-down, origin top-left of the canvas)
- Buffer space (integer pixel indices, Y-down, origin top-left)
"""

import math
from typing import Optional, Tuple


def display_to_buffer_unbounded(display_x, display_y, display_w, display_h, buffer_w, buffer_h) -> Tuple[int, int]:
    """Scale a display position to buffer space without any bounds handling.

    Args:
        display_x: X in display pixels
        display_y: Y in display pixels
        display_w: Width of the displayed canvas in display pixels
        display_h: Height of the displayed canvas in display pixels
        buffer_w: Buffer width in pixels
        buffer_h: Buffer height in pixels

    Returns:
        (px, py): Buffer coordinates, possibly negative or past the edge
    """
    scale_x = buffer_w / display_w
    scale_y = buffer_h / display_h
    return math.floor(display_x * scale_x), math.floor(display_y * scale_y)


def resolve_buffer_point(px, py, buffer_w, buffer_h, wrap=False) -> Optional[Tuple[int, int]]:
    """Apply the bounds policy to a buffer coordinate.

    With wrap-around, out-of-range coordinates are reduced modulo the
    buffer size. Otherwise they are rejected.

    Returns:
        (px, py) inside the buffer, or None when rejected
    """
    if wrap:
        return px % buffer_w, py % buffer_h
    if 0 <= px < buffer_w and 0 <= py < buffer_h:
        return px, py
    return None


def display_to_buffer(display_x, display_y, display_w, display_h, buffer_w, buffer_h, wrap=False) -> Optional[Tuple[int, int]]:
    """Display position to an in-bounds buffer pixel (or None)"""
    px, py = display_to_buffer_unbounded(display_x, display_y, display_w, display_h, buffer_w, buffer_h)
    return resolve_buffer_point(px, py, buffer_w, buffer_h, wrap)


def buffer_to_display(px, py, display_w, display_h, buffer_w, buffer_h) -> Tuple[float, float]:
    """Top-left display corner of a buffer pixel"""
    return px * display_w / buffer_w, py * display_h / buffer_h
