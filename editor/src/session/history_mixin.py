"""History management and undo/redo for EditorSession"""

from dataclasses import dataclass
from typing import Optional, Tuple

from models.layer import Layer, LayerStack
from models.raster_buffer import RasterBuffer
from models.sprite import SpriteEntry


@dataclass(frozen=True)
class HistorySnapshot:
    """Everything undo restores, at one point in time

    Buffers are frozen and shared with the live state until the live state
    installs a new buffer (copy-on-write), so taking a snapshot costs no
    pixel copies.
    """
    tile_data: Optional[RasterBuffer]
    layers: Optional[Tuple[Layer, ...]]
    sprites: Tuple[SpriteEntry, ...]
    active_layer_id: Optional[str]
    editing_bank_index: Optional[int]


class HistoryMixin:
    """Undo/redo system and state capture

    This mixin assumes the parent class has:
        - self.history_manager: HistoryManager
        - self.tile_data, self.layers, self.bank, self.editing_bank_index
        - self._layer_ids: IdGenerator
        - self._logger: logging.Logger instance
        - self._notify_changed()
    """

    def _capture_current_state(self) -> HistorySnapshot:
        """Capture the current state for history"""
        if self.tile_data is not None:
            self.tile_data.freeze()
        return HistorySnapshot(
            tile_data=self.tile_data,
            layers=self.layers.snapshot() if self.layers is not None else None,
            sprites=self.bank.entries,
            active_layer_id=self.layers.active_layer_id if self.layers is not None else None,
            editing_bank_index=self.editing_bank_index,
        )

    def _restore_state(self, state: HistorySnapshot):
        """Restore a state from history"""
        self._is_applying_history = True
        try:
            self.tile_data = state.tile_data
            if state.layers is None:
                self.layers = None
            else:
                self.layers = LayerStack.restore(state.layers, state.active_layer_id, id_generator=self._layer_ids)
            self.bank.entries = state.sprites
            self.editing_bank_index = state.editing_bank_index
        finally:
            self._is_applying_history = False
        self._notify_changed()

    def _save_state(self, state: HistorySnapshot, description: str):
        """Push a state captured before an undoable action"""
        if self._is_applying_history:
            return  # Don't save state during undo/redo
        self.history_manager.save_state(state, description)

    @property
    def can_undo(self) -> bool:
        return self.history_manager.can_undo()

    @property
    def can_redo(self) -> bool:
        return self.history_manager.can_redo()

    def add_history_listener(self, callback):
        """callback(can_undo, can_redo) after every history change"""
        self.history_manager.add_listener(callback)

    def undo(self):
        """Undo the last undoable action (no-op when there is none)"""
        state = self.history_manager.undo(self._capture_current_state())
        if state is not None:
            self._restore_state(state)

    def redo(self):
        """Redo the last undone action (no-op when there is none)"""
        state = self.history_manager.redo(self._capture_current_state())
        if state is not None:
            self._restore_state(state)
