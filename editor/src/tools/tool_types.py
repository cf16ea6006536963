"""Tool identifiers, key identifiers, and the per-phase state records.

The controller is always in exactly one phase. Each phase record carries
only the state that phase needs, so a line preview can never be mistaken
for a selection move.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from models.raster_buffer import RasterBuffer
from models.selection import SelectionRect

Point = Tuple[int, int]


class Tool(Enum):
    DRAW = 'draw'
    ERASE = 'erase'
    FILL = 'fill'
    EYEDROPPER = 'eyedropper'
    LINE = 'line'
    RECTANGLE = 'rectangle'
    SELECTION = 'selection'

    @property
    def is_stroke(self) -> bool:
        return self in (Tool.DRAW, Tool.ERASE)

    @property
    def is_shape(self) -> bool:
        return self in (Tool.LINE, Tool.RECTANGLE)


class Key(Enum):
    SHIFT = 'shift'           # rectangle fill toggle while previewing
    ALT = 'alt'               # temporary eyedropper
    ESCAPE = 'escape'
    DELETE = 'delete'
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'
    COPY = 'copy'
    CUT = 'cut'
    PASTE = 'paste'


ARROW_OFFSETS = {
    Key.LEFT: (-1, 0),
    Key.RIGHT: (1, 0),
    Key.UP: (0, -1),
    Key.DOWN: (0, 1),
}


# ========================================
# Phases
# ========================================

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Stroking:
    """Draw/erase drag; the scratch arena holds the working copy"""
    tool: Tool
    last_point: Optional[Point] = None


@dataclass(frozen=True)
class ShapePreview:
    """Line/rectangle drag

    pre_shape is the active layer as it was on pointer-down. Every preview
    is redrawn from it, so moving the pointer never compounds shapes.
    """
    tool: Tool
    anchor: Point
    pre_shape: RasterBuffer
    current: Point


@dataclass(frozen=True)
class Selecting:
    anchor: Point
    current: Point

    @property
    def rect(self) -> SelectionRect:
        return SelectionRect.from_corners(*self.anchor, *self.current)


@dataclass(frozen=True)
class Selected:
    """Committed selection with the pixels captured when it was made"""
    rect: SelectionRect
    content: RasterBuffer


@dataclass(frozen=True)
class Moving:
    """Selection drag

    rect may hang off the buffer mid-drag; it is clipped on release.
    base is the layer with the selection's old position cleared; each move
    pastes content onto it at the new position.
    """
    rect: SelectionRect
    content: RasterBuffer
    base: RasterBuffer
    grab_offset: Point
