"""
EditorSession Sprite Bank Mixin

Every bank mutation is undoable. editing_bank_index follows the entry
being edited through removals and reorders.
"""

from typing import Iterable, List, Optional, Tuple

from models.raster_buffer import RasterBuffer
from models.sprite import SpriteEntry


class BankMixin:
    """Mixin providing sprite bank operations for EditorSession

    This mixin assumes the parent class has:
        - self.bank: SpriteBank
        - self.editing_bank_index: Optional[int]
        - self.composite(), self._capture_current_state(), self._save_state()
        - self._notify_changed()
    """

    def save_to_bank(self) -> Optional[SpriteEntry]:
        """Store the flattened layers as a new sprite and start editing it"""
        flat = self.composite()
        if flat is None:
            return None

        before = self._capture_current_state()
        entry = self.bank.save(flat)
        self.editing_bank_index = len(self.bank) - 1
        self._save_state(before, "Save to bank")
        self._notify_changed()
        return entry

    def update_in_bank(self) -> bool:
        """Overwrite the sprite being edited with the flattened layers"""
        flat = self.composite()
        index = self.editing_bank_index
        if flat is None or index is None or not 0 <= index < len(self.bank):
            return False

        before = self._capture_current_state()
        self.bank.update(index, flat)
        self._save_state(before, "Update in bank")
        self._notify_changed()
        return True

    def remove_sprite(self, sprite_id: str) -> bool:
        removed_index = self.bank.index_of(sprite_id)
        if removed_index < 0:
            return False

        before = self._capture_current_state()
        self.bank.remove(sprite_id)
        index = self.editing_bank_index
        if index is not None:
            if removed_index == index:
                self.editing_bank_index = None
            elif removed_index < index:
                self.editing_bank_index = index - 1
        self._save_state(before, "Remove sprite")
        self._notify_changed()
        return True

    def duplicate_sprite(self, sprite_id: str) -> Optional[SpriteEntry]:
        source_index = self.bank.index_of(sprite_id)
        if source_index < 0:
            return None

        before = self._capture_current_state()
        clone = self.bank.duplicate(sprite_id)
        # Inserted right after the source: later entries shift by one
        index = self.editing_bank_index
        if index is not None and index > source_index:
            self.editing_bank_index = index + 1
        self._save_state(before, "Duplicate sprite")
        self._notify_changed()
        return clone

    def rename_sprite(self, sprite_id: str, name: str) -> bool:
        entry = self.bank.get_by_id(sprite_id)
        if entry is None or entry.name == name:
            return False

        before = self._capture_current_state()
        self.bank.rename(sprite_id, name)
        self._save_state(before, "Rename sprite")
        self._notify_changed()
        return True

    def reorder_sprites(self, from_index: int, to_index: int) -> None:
        if from_index == to_index:
            return

        before = self._capture_current_state()
        self.bank.reorder(from_index, to_index)

        index = self.editing_bank_index
        if index is not None:
            if index == from_index:
                self.editing_bank_index = to_index
            elif from_index < index <= to_index:
                self.editing_bank_index = index - 1
            elif to_index <= index < from_index:
                self.editing_bank_index = index + 1
        self._save_state(before, "Reorder sprites")
        self._notify_changed()

    def import_sprites(self, named_buffers: Iterable[Tuple[str, RasterBuffer]]) -> List[SpriteEntry]:
        """Append externally produced sprites (e.g. an imported sheet)"""
        named_buffers = list(named_buffers)
        if not named_buffers:
            return []

        before = self._capture_current_state()
        added = self.bank.add_entries(named_buffers)
        self._save_state(before, "Import sprites")
        self._notify_changed()
        return added

    def clear_all_sprites(self) -> None:
        if not len(self.bank):
            return
        before = self._capture_current_state()
        self.bank.clear()
        self.editing_bank_index = None
        self._save_state(before, "Clear all sprites")
        self._notify_changed()

    def select_bank_sprite(self, index: int) -> bool:
        """Open a clone of a stored sprite for editing (not undoable)"""
        if not 0 <= index < len(self.bank):
            return False
        self._open_buffer(self.bank.buffer_at(index))
        self.editing_bank_index = index
        self._notify_changed()
        return True

    @property
    def ghost_buffer(self) -> Optional[RasterBuffer]:
        """Previous sprite in the bank relative to the one being edited"""
        index = self.editing_bank_index
        if index is None or index <= 0 or index > len(self.bank):
            return None
        return self.bank[index - 1].buffer
