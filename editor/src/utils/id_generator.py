"""Monotonic identity generation for layers and sprites.

Records get their id once, at creation. Copies of a record keep the id;
only brand-new records (added layer, duplicated sprite) draw a new one.
"""

import itertools
from typing import Dict


class IdGenerator:
    """Monotonic counter producing ids like 'layer_3'.

    One shared generator per prefix lives for the whole process
    (IdGenerator.shared), but anything that needs ids accepts a generator
    at construction so tests can inject a fresh one.
    """

    _shared: Dict[str, 'IdGenerator'] = {}

    def __init__(self, prefix: str, start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._last = start - 1

    @classmethod
    def shared(cls, prefix: str) -> 'IdGenerator':
        """Process-wide generator for a prefix"""
        if prefix not in cls._shared:
            cls._shared[prefix] = cls(prefix)
        return cls._shared[prefix]

    def next_number(self) -> int:
        """Advance the counter and return the new value"""
        self._last = next(self._counter)
        return self._last

    def next_id(self) -> str:
        """Advance the counter and return a prefixed id"""
        return self.format_id(self.next_number())

    def format_id(self, number: int) -> str:
        return f"{self.prefix}_{number}"

    @property
    def last_number(self) -> int:
        return self._last
