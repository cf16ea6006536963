"""UI components for the pixel sprite editor

Direct imports for convenience:
"""

from .pixel_canvas import PixelCanvas, map_key_event

__all__ = [
    'PixelCanvas',
    'map_key_event',
]
