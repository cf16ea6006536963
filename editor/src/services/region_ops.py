"""Rectangular region operations for the selection tool and clipboard.

All functions return new buffers; inputs are never modified.
"""

import numpy as np

from models.raster_buffer import RasterBuffer
from models.selection import SelectionRect


def copy_region(buffer: RasterBuffer, rect: SelectionRect) -> RasterBuffer:
    """Exact pixel copy of a rectangle

    The rectangle is expected to be clamped already; it is clamped again
    here so an off-buffer rectangle can never index outside the array.

    Raises:
        ValueError: If the clamped rectangle is empty
    """
    rect = rect.clamp(buffer.width, buffer.height)
    if rect.is_empty:
        raise ValueError(f"Cannot copy an empty region {rect.as_tuple()}")
    return RasterBuffer.from_array(buffer.array[rect.y:rect.bottom, rect.x:rect.right])


def paste_region(target: RasterBuffer, source: RasterBuffer, x: int, y: int) -> RasterBuffer:
    """Draw source onto a copy of target with its top-left at (x, y)

    Source pixels with alpha 0 leave the destination untouched; all other
    source pixels replace the destination verbatim. Source pixels that
    land outside the target are dropped.
    """
    result = target.copy()

    # Visible window of the source inside the target
    dst_x0, dst_y0 = max(0, x), max(0, y)
    dst_x1 = min(target.width, x + source.width)
    dst_y1 = min(target.height, y + source.height)
    if dst_x0 >= dst_x1 or dst_y0 >= dst_y1:
        return result

    src = source.array[dst_y0 - y:dst_y1 - y, dst_x0 - x:dst_x1 - x]
    dst = result.array[dst_y0:dst_y1, dst_x0:dst_x1]
    opaque = src[:, :, 3] > 0
    dst[opaque] = src[opaque]
    return result


def clear_region(buffer: RasterBuffer, rect: SelectionRect) -> RasterBuffer:
    """Copy of buffer with the clamped rectangle set to transparent black"""
    result = buffer.copy()
    rect = rect.clamp(buffer.width, buffer.height)
    if not rect.is_empty:
        result.array[rect.y:rect.bottom, rect.x:rect.right] = np.uint8(0)
    return result
