"""Runtime editing toggles"""

from dataclasses import dataclass

from constants import DEFAULT_FILL_TOLERANCE, DEFAULT_RECTANGLE_FILLED, FILL_TOLERANCE_MAX


@dataclass
class EditorOptions:
    """Toggles the surrounding UI flips; none of these are undoable

    Attributes:
        symmetry_horizontal: Mirror top/bottom
        symmetry_vertical: Mirror left/right
        wrap_around: Reduce out-of-bounds coordinates modulo the buffer size
            (and wrap nudged pixels) instead of rejecting them
        onion_skin: Show the previous bank sprite beneath the layers
        fill_tolerance: Flood fill per-channel tolerance (0-255)
        rectangle_filled: Rectangle tool base mode; the fill modifier inverts it
    """
    symmetry_horizontal: bool = False
    symmetry_vertical: bool = False
    wrap_around: bool = False
    onion_skin: bool = False
    fill_tolerance: int = DEFAULT_FILL_TOLERANCE
    rectangle_filled: bool = DEFAULT_RECTANGLE_FILLED

    def __post_init__(self):
        self.fill_tolerance = max(0, min(FILL_TOLERANCE_MAX, int(self.fill_tolerance)))
