"""Reusable working buffer for in-progress strokes and previews."""

from typing import Optional

import numpy as np

from models.raster_buffer import RasterBuffer


class ScratchBuffer:
    """One working buffer recycled between strokes

    The arena is owned by a single stroke at a time: begin() loads the
    stroke's starting pixels, the stroke paints into buffer, and commit()
    hands out a fresh copy so nothing outside the stroke ever aliases the
    arena. The backing array is only reallocated when the size changes.
    """

    def __init__(self):
        self._buffer: Optional[RasterBuffer] = None
        self._in_use = False

    @property
    def in_use(self) -> bool:
        return self._in_use

    @property
    def buffer(self) -> Optional[RasterBuffer]:
        """Working buffer of the active stroke, None when idle"""
        return self._buffer if self._in_use else None

    def begin(self, source: RasterBuffer) -> RasterBuffer:
        """Claim the arena and load source's pixels into it

        Raises:
            RuntimeError: If another stroke still owns the arena
        """
        if self._in_use:
            raise RuntimeError("Scratch buffer is already owned by a stroke")
        self._in_use = True
        return self.load(source)

    def load(self, source: RasterBuffer) -> RasterBuffer:
        """Overwrite the working pixels with source (preview redraw)"""
        if self._buffer is None or not self._buffer.same_size(source):
            self._buffer = RasterBuffer.blank(source.width, source.height)
        np.copyto(self._buffer.array, source.array)
        return self._buffer

    def commit(self) -> RasterBuffer:
        """Release the arena and return a copy of the finished pixels"""
        if not self._in_use:
            raise RuntimeError("No stroke owns the scratch buffer")
        result = self._buffer.copy()
        self._in_use = False
        return result

    def discard(self) -> None:
        self._in_use = False
