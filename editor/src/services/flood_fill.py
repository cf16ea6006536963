"""Scanline flood fill.

4-connected fill from a seed pixel. A pixel belongs to the region when
every channel differs from the seed pixel's ORIGINAL color by at most
`tolerance` (0 means exact match). The reference color never drifts
while the fill spreads.

Each pixel is visited at most once (visited mask). Rows are processed as
maximal horizontal runs; the rows above and below a run are queued only
after the run is fully expanded.
"""

from typing import Tuple

import numpy as np

from models.raster_buffer import RasterBuffer


def flood_fill(buffer: RasterBuffer, start_x: int, start_y: int,
               fill_color: Tuple[int, int, int, int], tolerance: int = 0) -> RasterBuffer:
    """Fill the region containing (start_x, start_y)

    Args:
        buffer: Source buffer (not modified)
        start_x: Seed X
        start_y: Seed Y
        fill_color: RGBA written to every matched pixel
        tolerance: Per-channel absolute difference allowed (0-255)

    Returns:
        New buffer. An unchanged copy when the seed is out of bounds or
        already equals fill_color exactly.
    """
    result = buffer.copy()
    if not buffer.in_bounds(start_x, start_y):
        return result

    width, height = buffer.width, buffer.height
    fill = np.array(fill_color, dtype=np.uint8)
    seed = buffer.array[start_y, start_x].astype(np.int16)

    if np.array_equal(buffer.array[start_y, start_x], fill):
        return result

    # Precompute the match mask against the original pixels
    diff = np.abs(buffer.array.astype(np.int16) - seed)
    matches = np.all(diff <= int(tolerance), axis=2)

    out = result.array
    visited = np.zeros((height, width), dtype=bool)
    stack = [(start_x, start_y)]

    while stack:
        x, y = stack.pop()
        if visited[y, x]:
            continue
        visited[y, x] = True
        if not matches[y, x]:
            continue

        # Scan left
        left = x
        while left > 0 and matches[y, left - 1] and not visited[y, left - 1]:
            left -= 1

        # Scan right
        right = x
        while right < width - 1 and matches[y, right + 1] and not visited[y, right + 1]:
            right += 1

        # Fill the run, then queue neighbours above and below
        visited[y, left:right + 1] = True
        out[y, left:right + 1] = fill
        for px in range(left, right + 1):
            if y > 0 and not visited[y - 1, px] and matches[y - 1, px]:
                stack.append((px, y - 1))
            if y < height - 1 and not visited[y + 1, px] and matches[y + 1, px]:
                stack.append((px, y + 1))

    return result
