"""Conversions between RasterBuffer and image objects of other libraries.

Collaborators (tileset upload, sprite export) work with PIL images; the
canvas widget paints QImages. The editor core only ever sees buffers.
"""

import numpy as np
from PIL import Image

from models.raster_buffer import RasterBuffer


def buffer_to_pil(buffer: RasterBuffer) -> Image.Image:
    """RGBA PIL image holding a copy of the pixels"""
    return Image.fromarray(np.ascontiguousarray(buffer.array), 'RGBA')


def buffer_from_pil(image: Image.Image) -> RasterBuffer:
    """Buffer from any PIL image (converted to RGBA first)"""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return RasterBuffer.from_array(np.asarray(image, dtype=np.uint8))


def extract_tile(image: Image.Image, col: int, row: int, tile_size: int) -> RasterBuffer:
    """Cut one grid cell out of a tileset image

    Cells that run past the image edge are padded with transparent pixels.
    """
    left, top = col * tile_size, row * tile_size
    tile = image.convert('RGBA').crop((left, top, left + tile_size, top + tile_size))
    return buffer_from_pil(tile)


def buffer_to_qimage(buffer: RasterBuffer):
    """QImage (Format_RGBA8888) owning a copy of the pixels"""
    from PyQt5.QtGui import QImage

    raw = buffer.to_bytes()
    image = QImage(raw, buffer.width, buffer.height, buffer.width * 4, QImage.Format_RGBA8888)
    # QImage does not own `raw`
    return image.copy()
