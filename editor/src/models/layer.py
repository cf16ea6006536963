"""
Pixel Sprite Editor - Layer Data Model

Provides:
- Layer: a named, visibility/opacity-controlled raster buffer
- LayerStack: ordered layer collection (index 0 = bottom, last = top)
  with the active-layer pointer and the structural invariants:
    * every layer shares one (width, height)
    * at least one layer, at most MAX_LAYERS

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    stack = LayerStack.from_buffer(tile_buffer)
    layer = stack.add_layer()
    stack.set_opacity(layer.id, 0.5)
    stack.replace_buffer(layer.id, new_buffer)

    # Undo support
    records = stack.snapshot()
    stack = LayerStack.restore(records, active_id)
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from constants import DEFAULT_LAYER_NAME, MAX_LAYERS, OPACITY_MAX, OPACITY_MIN
from models.raster_buffer import RasterBuffer
from utils.id_generator import IdGenerator


class LayerStackError(ValueError):
    """Raised when a layer stack invariant would be violated (caller bug)"""


def clamp_opacity(value: float) -> float:
    return max(OPACITY_MIN, min(OPACITY_MAX, float(value)))


class Layer:
    """A raster buffer participating in compositing

    Properties:
        id: Stable identity (preserved by copy())
        name: Display name
        buffer: Owned RasterBuffer
        visible: Skipped by the compositor when False
        opacity: Uniform alpha multiplier in [0, 1]
    """

    __slots__ = ('_id', 'name', '_buffer', 'visible', '_opacity')

    def __init__(self, layer_id: str, buffer: RasterBuffer, name: str,
                 visible: bool = True, opacity: float = 1.0):
        self._id = layer_id
        self.name = name
        self._buffer = buffer
        self.visible = bool(visible)
        self._opacity = clamp_opacity(opacity)

    @property
    def id(self) -> str:
        return self._id

    @property
    def buffer(self) -> RasterBuffer:
        return self._buffer

    @buffer.setter
    def buffer(self, buffer: RasterBuffer):
        if not buffer.same_size(self._buffer):
            raise LayerStackError(
                f"Layer '{self.name}' is {self._buffer.width}x{self._buffer.height}, "
                f"cannot take a {buffer.width}x{buffer.height} buffer"
            )
        self._buffer = buffer

    @property
    def opacity(self) -> float:
        return self._opacity

    @opacity.setter
    def opacity(self, value: float):
        self._opacity = clamp_opacity(value)

    @property
    def size(self) -> Tuple[int, int]:
        return self._buffer.size

    def copy(self) -> 'Layer':
        """Deep copy (new backing array), same id"""
        return Layer(self._id, self._buffer.copy(), self.name, self.visible, self._opacity)

    def snapshot(self) -> 'Layer':
        """Record copy sharing a frozen buffer

        Freezes this layer's buffer in place. Paint commits always install a
        new buffer, so freezing never blocks a legitimate write.
        """
        self._buffer.freeze()
        return Layer(self._id, self._buffer, self.name, self.visible, self._opacity)

    def __repr__(self) -> str:
        return (f"Layer(id={self._id!r}, name={self.name!r}, {self._buffer.width}x{self._buffer.height}, "
                f"visible={self.visible}, opacity={self._opacity:.2f})")


class LayerStack:
    """Ordered layer collection with an active layer

    Invariants violations (mismatched sizes, removing the last layer,
    unknown ids) raise LayerStackError. Hitting the MAX_LAYERS cap is not
    an error: add_layer() returns None.
    """

    def __init__(self, layers: Sequence[Layer], active_layer_id: Optional[str] = None,
                 id_generator: Optional[IdGenerator] = None):
        """Create a stack from existing layers (adopted, not copied)

        Args:
            layers: Bottom-to-top layers, at least one
            active_layer_id: Active layer, defaults to the top layer
            id_generator: Source of ids for added layers

        Raises:
            LayerStackError: If empty, oversized, or sizes differ
        """
        self._logger = logging.getLogger('LayerStack')
        self._ids = id_generator or IdGenerator.shared('layer')

        layers = list(layers)
        if not layers:
            raise LayerStackError("A layer stack needs at least one layer")
        if len(layers) > MAX_LAYERS:
            raise LayerStackError(f"A layer stack holds at most {MAX_LAYERS} layers, got {len(layers)}")
        size = layers[0].size
        for layer in layers[1:]:
            if layer.size != size:
                raise LayerStackError(
                    f"Layer '{layer.name}' is {layer.size[0]}x{layer.size[1]}, expected {size[0]}x{size[1]}"
                )
        self._layers: List[Layer] = layers

        if active_layer_id is None:
            active_layer_id = layers[-1].id
        self._require(active_layer_id)
        self._active_layer_id = active_layer_id

    @classmethod
    def from_buffer(cls, buffer: RasterBuffer, name: str = DEFAULT_LAYER_NAME,
                    id_generator: Optional[IdGenerator] = None) -> 'LayerStack':
        """One-layer stack holding a copy of buffer (tile opened/created)"""
        ids = id_generator or IdGenerator.shared('layer')
        layer = Layer(ids.next_id(), buffer.copy(), name)
        return cls([layer], layer.id, id_generator=ids)

    @classmethod
    def restore(cls, records: Sequence[Layer], active_layer_id: Optional[str],
                id_generator: Optional[IdGenerator] = None) -> 'LayerStack':
        """Rebuild a live stack from snapshot records

        Records are re-wrapped so later visibility/name/opacity edits do not
        reach back into the snapshot. Buffers stay shared (and frozen).
        """
        layers = [Layer(r.id, r.buffer, r.name, r.visible, r.opacity) for r in records]
        return cls(layers, active_layer_id, id_generator=id_generator)

    # ========================================
    # Query
    # ========================================

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def width(self) -> int:
        return self._layers[0].buffer.width

    @property
    def height(self) -> int:
        return self._layers[0].buffer.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._layers[0].size

    @property
    def active_layer_id(self) -> str:
        return self._active_layer_id

    @property
    def active_layer(self) -> Layer:
        return self._require(self._active_layer_id)

    @property
    def is_full(self) -> bool:
        return len(self._layers) >= MAX_LAYERS

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    def get_by_id(self, layer_id: str) -> Optional[Layer]:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def index_of(self, layer_id: str) -> int:
        """Index of a layer, -1 if not present"""
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return i
        return -1

    def _require(self, layer_id: str) -> Layer:
        layer = self.get_by_id(layer_id)
        if layer is None:
            raise LayerStackError(f"Layer with id '{layer_id}' not found")
        return layer

    # ========================================
    # Structural changes
    # ========================================

    def add_layer(self, name: Optional[str] = None) -> Optional[Layer]:
        """Append a blank transparent layer on top and make it active

        Args:
            name: Display name, defaults to 'Layer N'

        Returns:
            The new layer, or None when the stack is already full
        """
        if self.is_full:
            self._logger.warning(f"Layer limit reached ({MAX_LAYERS}), not adding a layer")
            return None

        layer = Layer(
            self._ids.next_id(),
            RasterBuffer.blank(self.width, self.height),
            name or f"Layer {len(self._layers) + 1}",
        )
        self._layers.append(layer)
        self._active_layer_id = layer.id
        self._logger.debug(f"Added layer: {layer.id}")
        return layer

    def remove_layer(self, layer_id: str) -> Layer:
        """Remove a layer

        If the active layer is removed, the top remaining layer becomes active.

        Raises:
            LayerStackError: If this is the last layer or the id is unknown
        """
        layer = self._require(layer_id)
        if len(self._layers) <= 1:
            raise LayerStackError("Cannot remove the last remaining layer")

        self._layers.remove(layer)
        if self._active_layer_id == layer_id:
            self._active_layer_id = self._layers[-1].id
        self._logger.debug(f"Removed layer: {layer_id}")
        return layer

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the layer at from_index so it ends up at to_index"""
        count = len(self._layers)
        if not (0 <= from_index < count and 0 <= to_index < count):
            raise LayerStackError(f"Reorder indices out of range: {from_index} -> {to_index} ({count} layers)")
        layer = self._layers.pop(from_index)
        self._layers.insert(to_index, layer)
        self._logger.debug(f"Moved layer {layer.id}: {from_index} -> {to_index}")

    # ========================================
    # Per-layer properties
    # ========================================

    def set_active(self, layer_id: str) -> None:
        self._require(layer_id)
        self._active_layer_id = layer_id

    def set_visibility(self, layer_id: str, visible: bool) -> None:
        self._require(layer_id).visible = bool(visible)

    def set_opacity(self, layer_id: str, opacity: float) -> None:
        """Set opacity, clamped to [0, 1]"""
        self._require(layer_id).opacity = opacity

    def rename(self, layer_id: str, name: str) -> None:
        self._require(layer_id).name = name

    # ========================================
    # Buffers
    # ========================================

    def replace_buffer(self, layer_id: str, buffer: RasterBuffer) -> None:
        """Install a new authoritative buffer for one layer

        Raises:
            LayerStackError: If the buffer size differs from the stack size
        """
        self._require(layer_id).buffer = buffer
        self._logger.debug(f"Replaced buffer of layer {layer_id}")

    def replace_all(self, buffers: Sequence[RasterBuffer]) -> None:
        """Replace every layer buffer at once (bottom to top order)

        Used by transforms that change dimensions, which must apply to all
        layers together to keep sizes consistent.
        """
        buffers = list(buffers)
        if len(buffers) != len(self._layers):
            raise LayerStackError(f"Expected {len(self._layers)} buffers, got {len(buffers)}")
        size = buffers[0].size
        if any(b.size != size for b in buffers):
            raise LayerStackError("Replacement buffers must all share one size")
        for layer, buffer in zip(self._layers, buffers):
            layer._buffer = buffer

    def snapshot(self) -> Tuple[Layer, ...]:
        """Immutable records for history (shared frozen buffers)"""
        return tuple(layer.snapshot() for layer in self._layers)

    def __repr__(self) -> str:
        return f"LayerStack({len(self._layers)} layers, {self.width}x{self.height}, active={self._active_layer_id!r})"
