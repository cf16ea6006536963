"""
Pixel Sprite Editor - Editor Session

THE MODEL the tools and the UI talk to. Owns the whole editable state:

- tile_data: flattened composite as of the last change
- layers: LayerStack of the open tile (None when nothing is open)
- bank: SpriteBank of finished sprites
- editing_bank_index: bank entry the open tile was loaded from/saved to
- active_tool, active_color, options: non-undoable editing settings
- history_manager: undo/redo stacks of HistorySnapshot

Every undoable operation follows the same shape: capture a snapshot,
mutate, push the snapshot. commit_active_layer() is the choke point all
paint tools commit through.

Usage:
    session = EditorSession()
    session.new_project(16)
    session.commit_active_layer(painted_buffer, "Draw")
    session.undo()
"""

import logging
from typing import Callable, List, Optional, Tuple

from constants import DEFAULT_ACTIVE_COLOR, DEFAULT_TOOL, MAX_HISTORY_ENTRIES
from models.color import parse_hex_rgba
from models.layer import LayerStack
from models.raster_buffer import RasterBuffer
from models.sprite import SpriteBank
from services.compositor import Compositor
from services.symmetry import SymmetryResolver
from services.transforms import flip, rotate90, shift
from session.bank_mixin import BankMixin
from session.history_mixin import HistoryMixin
from session.layer_mixin import LayerMixin
from session.options import EditorOptions
from tools.tool_types import Tool
from utils.history_manager import HistoryManager
from utils.id_generator import IdGenerator


class EditorSession(HistoryMixin, LayerMixin, BankMixin):
    """Editable state of one editor window"""

    def __init__(self, options: Optional[EditorOptions] = None,
                 layer_ids: Optional[IdGenerator] = None,
                 sprite_ids: Optional[IdGenerator] = None,
                 max_history: int = MAX_HISTORY_ENTRIES):
        """
        Args:
            options: Editing toggles, defaults to all off
            layer_ids: Id source for layers (process-wide generator by default)
            sprite_ids: Id source for bank entries (process-wide generator by default)
            max_history: Undo depth
        """
        self._logger = logging.getLogger('EditorSession')

        self._layer_ids = layer_ids or IdGenerator.shared('layer')
        self.options = options or EditorOptions()
        self._active_color = DEFAULT_ACTIVE_COLOR
        self.active_tool = Tool(DEFAULT_TOOL)

        self.tile_data: Optional[RasterBuffer] = None
        self.layers: Optional[LayerStack] = None
        self.bank = SpriteBank(id_generator=sprite_ids or IdGenerator.shared('sprite'))
        self.editing_bank_index: Optional[int] = None

        self.history_manager = HistoryManager(max_history=max_history)
        self._is_applying_history = False

        self._compositor = Compositor()
        self._change_listeners: List[Callable[[], None]] = []
        self._commit_listeners: List[Callable[[str, RasterBuffer], None]] = []

    # ========================================
    # Listeners
    # ========================================

    def add_change_listener(self, callback: Callable[[], None]):
        """callback() after any state change (repaint hook)"""
        self._change_listeners.append(callback)

    def add_commit_listener(self, callback: Callable[[str, RasterBuffer], None]):
        """callback(layer_id, buffer) after each paint commit; buffer is a copy"""
        self._commit_listeners.append(callback)

    def _notify_changed(self):
        for callback in self._change_listeners:
            callback()

    # ========================================
    # Settings
    # ========================================

    @property
    def active_color(self) -> str:
        return self._active_color

    @active_color.setter
    def active_color(self, hex_string: str):
        """Set the paint color from 6 or 8 hex digits

        Raises:
            ValueError: If the string is not a valid hex color
        """
        parse_hex_rgba(hex_string)
        self._active_color = hex_string

    @property
    def active_rgba(self) -> Tuple[int, int, int, int]:
        return parse_hex_rgba(self._active_color)

    @property
    def is_open(self) -> bool:
        return self.layers is not None

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        return self.layers.size if self.layers is not None else None

    def symmetry(self) -> Optional[SymmetryResolver]:
        """Resolver for the open tile and the current toggles"""
        if self.layers is None:
            return None
        return SymmetryResolver(
            self.layers.width, self.layers.height,
            horizontal=self.options.symmetry_horizontal,
            vertical=self.options.symmetry_vertical,
        )

    # ========================================
    # Opening and closing tiles
    # ========================================

    def _open_buffer(self, buffer: RasterBuffer):
        self.layers = LayerStack.from_buffer(buffer, id_generator=self._layer_ids)
        self.tile_data = buffer.copy().freeze()

    def begin_editing(self, buffer: RasterBuffer):
        """Open a buffer from outside (tileset cell, imported tile) as one layer

        Not undoable. The caller keeps ownership of buffer; the session
        stores a copy.
        """
        self._open_buffer(buffer)
        self.editing_bank_index = None
        self._logger.debug(f"Editing {buffer.width}x{buffer.height} buffer")
        self._notify_changed()

    def new_project(self, tile_size: int):
        """Start a blank square tile (undoable)"""
        before = self._capture_current_state()
        self._open_buffer(RasterBuffer.blank(tile_size, tile_size))
        self.editing_bank_index = None
        self._save_state(before, "New project")
        self._notify_changed()

    def clear_tile(self):
        """Close the open tile (undoable)"""
        if self.layers is None:
            return
        before = self._capture_current_state()
        self.layers = None
        self.tile_data = None
        self.editing_bank_index = None
        self._save_state(before, "Clear tile")
        self._notify_changed()

    # ========================================
    # Commits
    # ========================================

    def _refresh_tile_data(self):
        if self.layers is None:
            self.tile_data = None
        else:
            self.tile_data = self._compositor.flatten(self.layers.layers).freeze()

    def active_buffer(self) -> Optional[RasterBuffer]:
        """Authoritative buffer of the active layer (read only for callers)"""
        if self.layers is None:
            return None
        return self.layers.active_layer.buffer

    def commit_active_layer(self, buffer: RasterBuffer, description: str = "Stroke"):
        """Install buffer as the active layer's pixels and record history

        The session takes ownership of buffer; callers must not write to it
        afterwards.

        Raises:
            LayerStackError: If the buffer size differs from the layers
        """
        if self.layers is None:
            return
        layer_id = self.layers.active_layer_id
        before = self._capture_current_state()
        self.layers.replace_buffer(layer_id, buffer)
        self._save_state(before, description)
        self._refresh_tile_data()
        self._logger.debug(f"Committed '{description}' to layer {layer_id}")

        for callback in self._commit_listeners:
            callback(layer_id, buffer.copy())
        self._notify_changed()

    def rotate(self, direction: str):
        """Rotate every layer a quarter turn ('cw' or 'ccw')

        All layers turn together so they keep sharing one size.
        """
        if self.layers is None:
            return
        rotated = [rotate90(layer.buffer, direction) for layer in self.layers]
        before = self._capture_current_state()
        self.layers.replace_all(rotated)
        self._save_state(before, f"Rotate {direction}")
        self._refresh_tile_data()
        self._notify_changed()

    def flip(self, axis: str):
        """Mirror the active layer ('horizontal' or 'vertical')"""
        buffer = self.active_buffer()
        if buffer is None:
            return
        self.commit_active_layer(flip(buffer, axis), f"Flip {axis}")

    def nudge(self, dx: int, dy: int):
        """Shift the active layer by one step; wraps when wrap-around is on"""
        buffer = self.active_buffer()
        if buffer is None:
            return
        self.commit_active_layer(shift(buffer, dx, dy, wrap=self.options.wrap_around), "Nudge")

    # ========================================
    # Display
    # ========================================

    def composite(self) -> Optional[RasterBuffer]:
        """Flattened layers (new buffer), None when nothing is open"""
        if self.layers is None:
            return None
        return self._compositor.flatten(self.layers.layers)

    def display_buffer(self, active_override: Optional[RasterBuffer] = None) -> Optional[RasterBuffer]:
        """Composite for live display

        Args:
            active_override: In-progress working/preview buffer shown in
                place of the active layer's committed pixels

        The onion-skin ghost is drawn beneath everything when enabled.
        """
        if self.layers is None:
            return None

        layers = list(self.layers.layers)
        if active_override is not None:
            index = self.layers.index_of(self.layers.active_layer_id)
            active = layers[index]
            layers[index] = type(active)(active.id, active_override, active.name, active.visible, active.opacity)

        ghost = self.ghost_buffer if self.options.onion_skin else None
        return self._compositor.flatten(layers, ghost=ghost)
