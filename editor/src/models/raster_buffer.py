"""
Pixel Sprite Editor - Raster Buffer

The pixel storage primitive every other subsystem builds on: a fixed-size
grid of RGBA8 pixels backed by a numpy array of shape (height, width, 4).

Ownership rules:
- A buffer belongs to exactly one container (layer, clipboard entry,
  history snapshot, sprite entry).
- copy() is always deep (new backing array).
- freeze() marks the backing array read-only so it can be shared by
  history snapshots and bank entries without copying. Any later write
  into a frozen buffer raises ValueError instead of corrupting history.

This is part of the MODEL layer - pure data, no UI logic.
"""

from typing import Iterator, Optional, Tuple

import numpy as np

from constants import CHANNELS, TRANSPARENT

RGBA = Tuple[int, int, int, int]


class RasterBuffer:
    """Mutable width x height grid of RGBA8 pixels (row-major, top-left origin)."""

    __slots__ = ('_data',)

    def __init__(self, width: int, height: int, data: Optional[np.ndarray] = None):
        """Create a buffer

        Args:
            width: Buffer width in pixels (> 0)
            height: Buffer height in pixels (> 0)
            data: Optional uint8 array of shape (height, width, 4), adopted
                without copying. A fully transparent buffer is allocated
                when omitted.

        Raises:
            ValueError: If the dimensions are not positive or data has the
                wrong shape
        """
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")

        if data is None:
            data = np.zeros((height, width, CHANNELS), dtype=np.uint8)
        elif data.shape != (height, width, CHANNELS) or data.dtype != np.uint8:
            raise ValueError(
                f"Pixel array must be uint8 of shape {(height, width, CHANNELS)}, "
                f"got {data.dtype} {data.shape}"
            )
        self._data = data

    # ========================================
    # Factories
    # ========================================

    @classmethod
    def blank(cls, width: int, height: int) -> 'RasterBuffer':
        """Fully transparent buffer"""
        return cls(width, height)

    @classmethod
    def filled(cls, width: int, height: int, color: RGBA) -> 'RasterBuffer':
        """Buffer with every pixel set to color"""
        buffer = cls(width, height)
        buffer._data[:, :] = color
        return buffer

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'RasterBuffer':
        """Wrap a copy of an (h, w, 4) uint8 array

        Args:
            array: Source pixels

        Returns:
            New buffer owning a copy of the array
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (h, w, {CHANNELS}) array, got shape {array.shape}")
        height, width = array.shape[:2]
        return cls(width, height, np.array(array, dtype=np.uint8, copy=True))

    @classmethod
    def from_bytes(cls, width: int, height: int, pixels: bytes) -> 'RasterBuffer':
        """Build a buffer from a flat RGBA byte sequence

        Args:
            width: Buffer width
            height: Buffer height
            pixels: Exactly width*height*4 bytes, R,G,B,A order

        Raises:
            ValueError: If the byte count does not match the dimensions
        """
        expected = int(width) * int(height) * CHANNELS
        if len(pixels) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height}, got {len(pixels)}")
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)
        return cls(width, height, flat.reshape((int(height), int(width), CHANNELS)).copy())

    # ========================================
    # Properties
    # ========================================

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    @property
    def array(self) -> np.ndarray:
        """Backing (h, w, 4) array. Read-only when the buffer is frozen."""
        return self._data

    @property
    def pixels(self) -> np.ndarray:
        """Flat view of width*height*4 bytes in R,G,B,A order"""
        return self._data.reshape(-1)

    @property
    def frozen(self) -> bool:
        return not self._data.flags.writeable

    # ========================================
    # Ownership
    # ========================================

    def copy(self) -> 'RasterBuffer':
        """Deep copy with a new, writable backing array"""
        return RasterBuffer(self.width, self.height, self._data.copy())

    def freeze(self) -> 'RasterBuffer':
        """Make the buffer immutable so it can be shared; returns self"""
        self._data.flags.writeable = False
        return self

    # ========================================
    # Pixel access
    # ========================================

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Optional[RGBA]:
        """Pixel at (x, y), or None when out of bounds"""
        if not self.in_bounds(x, y):
            return None
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: RGBA) -> bool:
        """Write one pixel; out-of-bounds writes are dropped

        Returns:
            True if the pixel was written
        """
        if not self.in_bounds(x, y):
            return False
        self._data[y, x] = color
        return True

    def clear(self) -> None:
        """Set every pixel to transparent black"""
        self._data[:, :] = TRANSPARENT

    def iter_pixels(self) -> Iterator[Tuple[int, int, RGBA]]:
        """Yield (x, y, rgba) for every pixel in row-major order"""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.get_pixel(x, y)

    def to_bytes(self) -> bytes:
        return self._data.tobytes()

    def same_size(self, other: 'RasterBuffer') -> bool:
        return self.size == other.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._data, other._data)

    # Buffers are mutable containers
    __hash__ = None

    def __repr__(self) -> str:
        state = ", frozen" if self.frozen else ""
        return f"RasterBuffer({self.width}x{self.height}{state})"
