"""
Pixel Sprite Editor - Sprite Bank Model

The sprite bank is the ordered collection of finished sprites a project
exports. Entries are immutable once stored: their buffers are frozen and
every buffer handed outward is a deep copy (clone-on-write).
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Tuple

from constants import DUPLICATE_NAME_SUFFIX
from models.raster_buffer import RasterBuffer
from utils.id_generator import IdGenerator


@dataclass(frozen=True)
class SpriteEntry:
    """One stored sprite: {id, name, width, height, buffer}"""
    id: str
    name: str
    width: int
    height: int
    buffer: RasterBuffer

    @classmethod
    def create(cls, entry_id: str, name: str, buffer: RasterBuffer) -> 'SpriteEntry':
        """Store a frozen deep copy of buffer"""
        stored = buffer.copy().freeze()
        return cls(entry_id, name, stored.width, stored.height, stored)

    def clone_buffer(self) -> RasterBuffer:
        """Writable copy of the stored pixels"""
        return self.buffer.copy()


class SpriteBank:
    """Ordered, copy-on-write collection of SpriteEntry records

    Mutations replace the internal tuple, so a tuple previously returned by
    entries (and held by a history snapshot) never changes.
    """

    def __init__(self, entries: Iterable[SpriteEntry] = (), id_generator: Optional[IdGenerator] = None):
        self._logger = logging.getLogger('SpriteBank')
        self._ids = id_generator or IdGenerator.shared('sprite')
        self._entries: Tuple[SpriteEntry, ...] = tuple(entries)

    @property
    def entries(self) -> Tuple[SpriteEntry, ...]:
        return self._entries

    @entries.setter
    def entries(self, entries: Iterable[SpriteEntry]):
        self._entries = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SpriteEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> SpriteEntry:
        return self._entries[index]

    def index_of(self, sprite_id: str) -> int:
        """Index of an entry, -1 if not present"""
        for i, entry in enumerate(self._entries):
            if entry.id == sprite_id:
                return i
        return -1

    def get_by_id(self, sprite_id: str) -> Optional[SpriteEntry]:
        index = self.index_of(sprite_id)
        return self._entries[index] if index >= 0 else None

    def buffer_at(self, index: int) -> RasterBuffer:
        """Deep copy of an entry's pixels"""
        return self._entries[index].clone_buffer()

    # ========================================
    # Mutations
    # ========================================

    def _new_identity(self) -> Tuple[str, str]:
        number = self._ids.next_number()
        return self._ids.format_id(number), f"sprite_{number:03d}"

    def save(self, buffer: RasterBuffer, name: Optional[str] = None) -> SpriteEntry:
        """Append a new entry holding a copy of buffer

        Returns:
            The stored entry (id 'sprite_N', name 'sprite_NNN' by default)
        """
        entry_id, default_name = self._new_identity()
        entry = SpriteEntry.create(entry_id, name or default_name, buffer)
        self._entries = self._entries + (entry,)
        self._logger.debug(f"Saved sprite {entry.id} ({entry.width}x{entry.height})")
        return entry

    def update(self, index: int, buffer: RasterBuffer) -> bool:
        """Replace the pixels of the entry at index

        Returns:
            False when index is out of range (nothing changed)
        """
        if not 0 <= index < len(self._entries):
            return False
        entries = list(self._entries)
        stored = buffer.copy().freeze()
        entries[index] = replace(entries[index], buffer=stored, width=stored.width, height=stored.height)
        self._entries = tuple(entries)
        self._logger.debug(f"Updated sprite {entries[index].id}")
        return True

    def remove(self, sprite_id: str) -> int:
        """Remove an entry

        Returns:
            Index the entry occupied, -1 if not found
        """
        index = self.index_of(sprite_id)
        if index < 0:
            return -1
        self._entries = self._entries[:index] + self._entries[index + 1:]
        self._logger.debug(f"Removed sprite {sprite_id}")
        return index

    def duplicate(self, sprite_id: str) -> Optional[SpriteEntry]:
        """Insert a copy right after the source entry, with a fresh id"""
        index = self.index_of(sprite_id)
        if index < 0:
            return None
        source = self._entries[index]
        entry_id, _ = self._new_identity()
        clone = SpriteEntry.create(entry_id, f"{source.name}{DUPLICATE_NAME_SUFFIX}", source.buffer)
        self._entries = self._entries[:index + 1] + (clone,) + self._entries[index + 1:]
        self._logger.debug(f"Duplicated sprite {sprite_id} -> {clone.id}")
        return clone

    def rename(self, sprite_id: str, name: str) -> bool:
        index = self.index_of(sprite_id)
        if index < 0:
            return False
        entries = list(self._entries)
        entries[index] = replace(entries[index], name=name)
        self._entries = tuple(entries)
        return True

    def reorder(self, from_index: int, to_index: int) -> None:
        count = len(self._entries)
        if not (0 <= from_index < count and 0 <= to_index < count):
            raise ValueError(f"Reorder indices out of range: {from_index} -> {to_index} ({count} sprites)")
        entries = list(self._entries)
        entries.insert(to_index, entries.pop(from_index))
        self._entries = tuple(entries)

    def add_entries(self, buffers: Iterable[Tuple[str, RasterBuffer]]) -> List[SpriteEntry]:
        """Append several named buffers at once (bulk import)"""
        added = []
        for name, buffer in buffers:
            entry_id, _ = self._new_identity()
            added.append(SpriteEntry.create(entry_id, name, buffer))
        self._entries = self._entries + tuple(added)
        self._logger.debug(f"Imported {len(added)} sprites")
        return added

    def clear(self) -> None:
        self._entries = ()
