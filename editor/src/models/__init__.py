"""
Pixel Sprite Editor - Data Models

This module contains the data model classes for the editor.
This is the MODEL in MVC architecture: pure data, no Qt imports.
"""

from .raster_buffer import RasterBuffer
from .color import Color, parse_hex_rgba, rgba_to_hex
from .layer import Layer, LayerStack, LayerStackError
from .selection import SelectionRect, Clipboard
from .sprite import SpriteEntry, SpriteBank

__all__ = [
    'RasterBuffer',
    'Color', 'parse_hex_rgba', 'rgba_to_hex',
    'Layer', 'LayerStack', 'LayerStackError',
    'SelectionRect', 'Clipboard',
    'SpriteEntry', 'SpriteBank',
]
