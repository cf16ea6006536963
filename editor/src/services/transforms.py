"""Geometric buffer transforms - rotate, flip, shift.

Pure, total functions: each returns a new buffer and copies RGBA values
verbatim (no blending, no resampling).

    rotate90(cw):  source (x, y) -> destination (h-1-y, x)
    rotate90(ccw): source (x, y) -> destination (y, w-1-x)
    flip(horizontal): x -> w-1-x
    flip(vertical):   y -> h-1-y
"""

import numpy as np

from models.raster_buffer import RasterBuffer

ROTATE_CW = 'cw'
ROTATE_CCW = 'ccw'
FLIP_HORIZONTAL = 'horizontal'
FLIP_VERTICAL = 'vertical'


def rotate90(buffer: RasterBuffer, direction: str) -> RasterBuffer:
    """Rotate a quarter turn; width and height swap.

    Args:
        buffer: Source buffer
        direction: 'cw' or 'ccw'

    Returns:
        New buffer of size (height, width)
    """
    if direction == ROTATE_CW:
        # np.rot90 with k=-1 turns clockwise when row 0 is the top row
        rotated = np.rot90(buffer.array, k=-1)
    elif direction == ROTATE_CCW:
        rotated = np.rot90(buffer.array, k=1)
    else:
        raise ValueError(f"Unknown rotation direction: {direction!r}")
    return RasterBuffer.from_array(rotated)


def flip(buffer: RasterBuffer, axis: str) -> RasterBuffer:
    """Mirror the buffer; dimensions are unchanged.

    Args:
        buffer: Source buffer
        axis: 'horizontal' (left/right) or 'vertical' (top/bottom)
    """
    if axis == FLIP_HORIZONTAL:
        flipped = buffer.array[:, ::-1]
    elif axis == FLIP_VERTICAL:
        flipped = buffer.array[::-1, :]
    else:
        raise ValueError(f"Unknown flip axis: {axis!r}")
    return RasterBuffer.from_array(flipped)


def shift(buffer: RasterBuffer, dx: int, dy: int, wrap: bool = False) -> RasterBuffer:
    """Move every pixel by (dx, dy).

    With wrap, pixels shifted past an edge reappear at the opposite edge.
    Without it they are dropped and the revealed edge is transparent.
    """
    src = buffer.array
    if wrap:
        return RasterBuffer.from_array(np.roll(src, shift=(dy, dx), axis=(0, 1)))

    height, width = src.shape[:2]
    out = np.zeros_like(src)
    if abs(dx) >= width or abs(dy) >= height:
        return RasterBuffer(width, height, out)

    dst_x0, src_x0 = max(dx, 0), max(-dx, 0)
    dst_y0, src_y0 = max(dy, 0), max(-dy, 0)
    span_w = width - abs(dx)
    span_h = height - abs(dy)
    out[dst_y0:dst_y0 + span_h, dst_x0:dst_x0 + span_w] = src[src_y0:src_y0 + span_h, src_x0:src_x0 + span_w]
    return RasterBuffer(width, height, out)
