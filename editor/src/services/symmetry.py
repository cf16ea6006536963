"""Symmetry resolver - maps one painted pixel to its mirror set.

Vertical symmetry mirrors left/right across the vertical centre axis,
horizontal symmetry mirrors top/bottom across the horizontal centre axis,
and both together add the diagonal mirror.

Every raster tool expands its target points through mirror() before
writing, so painting with symmetry on is equivalent to repeating the same
stroke by hand at each mirrored position, no more and no less.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

Point = Tuple[int, int]


def mirror(px: int, py: int, horizontal: bool, vertical: bool,
           width: int, height: int) -> List[Point]:
    """Resolve the set of pixels painted together with (px, py).

    The seed point always comes first. Each coordinate appears once, even on
    odd-sized buffers where the axis passes through the seed pixel.

    Args:
        px: Seed X
        py: Seed Y
        horizontal: Mirror top/bottom
        vertical: Mirror left/right
        width: Buffer width
        height: Buffer height

    Returns:
        Ordered, duplicate-free list of (x, y)
    """
    if not horizontal and not vertical:
        return [(px, py)]

    mirror_x = width - 1 - px
    mirror_y = height - 1 - py

    candidates = [(px, py)]
    if vertical:
        candidates.append((mirror_x, py))
    if horizontal:
        candidates.append((px, mirror_y))
    if vertical and horizontal:
        candidates.append((mirror_x, mirror_y))

    # dict keeps first-seen order
    return list(dict.fromkeys(candidates))


@dataclass(frozen=True)
class SymmetryResolver:
    """mirror() bound to one buffer size and one pair of toggles"""
    width: int
    height: int
    horizontal: bool = False
    vertical: bool = False

    @property
    def enabled(self) -> bool:
        return self.horizontal or self.vertical

    def resolve(self, px: int, py: int) -> List[Point]:
        return mirror(px, py, self.horizontal, self.vertical, self.width, self.height)

    def expand(self, points: Iterable[Point]) -> List[Point]:
        """Mirror every point of a shape, deduplicated across the whole shape"""
        seen = {}
        for px, py in points:
            for point in self.resolve(px, py):
                seen.setdefault(point, None)
        return list(seen)
