"""
EditorSession Layer Management Mixin

Methods:
    Undoable:
        - add_layer
        - remove_layer
        - reorder_layers

    Not undoable (display properties and selection):
        - set_active_layer
        - set_layer_visibility
        - set_layer_opacity
        - rename_layer
"""

from typing import Optional

from models.layer import Layer, LayerStackError


class LayerMixin:
    """Mixin providing layer operations for EditorSession

    This mixin assumes the parent class has:
        - self.layers: Optional[LayerStack]
        - self._capture_current_state(), self._save_state()
        - self._refresh_tile_data(), self._notify_changed()
        - self._logger: logging.Logger instance
    """

    def add_layer(self) -> Optional[Layer]:
        """Add a blank layer on top and make it active

        Returns:
            New layer, or None when nothing is open or the stack is full
        """
        if self.layers is None or self.layers.is_full:
            return None

        before = self._capture_current_state()
        layer = self.layers.add_layer()
        self._save_state(before, "Add layer")
        self._notify_changed()
        return layer

    def remove_layer(self, layer_id: str) -> None:
        """Remove a layer

        Raises:
            LayerStackError: If it is the last layer or the id is unknown
        """
        if self.layers is None:
            return
        if self.layers.get_by_id(layer_id) is None:
            raise LayerStackError(f"Layer with id '{layer_id}' not found")
        if len(self.layers) <= 1:
            raise LayerStackError("Cannot remove the last remaining layer")

        before = self._capture_current_state()
        self.layers.remove_layer(layer_id)
        self._save_state(before, "Remove layer")
        self._refresh_tile_data()
        self._notify_changed()

    def reorder_layers(self, from_index: int, to_index: int) -> None:
        if self.layers is None or from_index == to_index:
            return
        before = self._capture_current_state()
        self.layers.reorder(from_index, to_index)
        self._save_state(before, "Reorder layers")
        self._refresh_tile_data()
        self._notify_changed()

    def set_active_layer(self, layer_id: str) -> None:
        if self.layers is None:
            return
        self.layers.set_active(layer_id)
        self._notify_changed()

    def set_layer_visibility(self, layer_id: str, visible: bool) -> None:
        if self.layers is None:
            return
        self.layers.set_visibility(layer_id, visible)
        self._refresh_tile_data()
        self._notify_changed()

    def set_layer_opacity(self, layer_id: str, opacity: float) -> None:
        if self.layers is None:
            return
        self.layers.set_opacity(layer_id, opacity)
        self._refresh_tile_data()
        self._notify_changed()

    def rename_layer(self, layer_id: str, name: str) -> None:
        if self.layers is None:
            return
        self.layers.rename(layer_id, name)
        self._notify_changed()
