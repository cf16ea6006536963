"""
Pixel Sprite Editor - Selection and Clipboard Model

SelectionRect is a rectangle in buffer coordinates. Rectangles built from
two drag corners are normalized (positive width/height) and clipped to the
buffer before any pixel operation sees them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from models.raster_buffer import RasterBuffer


@dataclass(frozen=True)
class SelectionRect:
    """{x, y, w, h} in buffer coordinates"""
    x: int
    y: int
    w: int
    h: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> 'SelectionRect':
        """Rectangle spanning two corners, both inclusive"""
        left, right = min(x0, x1), max(x0, x1)
        top, bottom = min(y0, y1), max(y0, y1)
        return cls(left, top, right - left + 1, bottom - top + 1)

    @property
    def right(self) -> int:
        """Exclusive right edge"""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge"""
        return self.y + self.h

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def contains(self, px: int, py: int) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def clamp(self, width: int, height: int) -> 'SelectionRect':
        """Clip to [0, width) x [0, height); may return an empty rect"""
        left = max(0, self.x)
        top = max(0, self.y)
        right = min(width, self.right)
        bottom = min(height, self.bottom)
        return SelectionRect(left, top, max(0, right - left), max(0, bottom - top))

    def moved_to(self, x: int, y: int) -> 'SelectionRect':
        return SelectionRect(x, y, self.w, self.h)

    def offset(self, dx: int, dy: int) -> 'SelectionRect':
        return SelectionRect(self.x + dx, self.y + dy, self.w, self.h)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.w, self.h


@dataclass(frozen=True)
class ClipboardEntry:
    """Captured pixels plus the rectangle they came from"""
    content: RasterBuffer
    origin_rect: SelectionRect


class Clipboard:
    """Single-slot clipboard, overwritten on each copy

    The stored content is frozen; reads hand out writable copies.
    """

    def __init__(self):
        self._entry: Optional[ClipboardEntry] = None

    @property
    def is_empty(self) -> bool:
        return self._entry is None

    @property
    def origin_rect(self) -> Optional[SelectionRect]:
        return self._entry.origin_rect if self._entry else None

    def copy(self, content: RasterBuffer, origin_rect: SelectionRect) -> None:
        self._entry = ClipboardEntry(content.copy().freeze(), origin_rect)

    def content(self) -> Optional[RasterBuffer]:
        """Writable copy of the clipboard pixels, None when empty"""
        if self._entry is None:
            return None
        return self._entry.content.copy()

    def clear(self) -> None:
        self._entry = None
