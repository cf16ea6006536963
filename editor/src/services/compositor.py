"""
Pixel Sprite Editor - Layer Compositor Service

Flattens a layer stack into one RGBA8 buffer for display and export.

Layering order (back to front) is strictly array order. Each visible
layer is drawn over the accumulator with the plain "over" operator, its
opacity applied as a uniform multiplier on the source alpha. Invisible
layers are skipped. Pixels no visible layer covers stay (0, 0, 0, 0).

The Compositor keeps float scratch arrays between calls to avoid
reallocating on every redraw; they are fully reset at the start of each
call so output depends only on the input.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from constants import ONION_SKIN_OPACITY
from models.layer import Layer, LayerStackError
from models.raster_buffer import RasterBuffer

logger = logging.getLogger(__name__)


class Compositor:
    """Reusable flattener (one per display surface)"""

    def __init__(self):
        self._rgb = None
        self._alpha = None

    def _scratch(self, width: int, height: int):
        if self._rgb is None or self._rgb.shape[:2] != (height, width):
            self._rgb = np.zeros((height, width, 3), dtype=np.float64)
            self._alpha = np.zeros((height, width), dtype=np.float64)
        else:
            self._rgb.fill(0.0)
            self._alpha.fill(0.0)
        return self._rgb, self._alpha

    @staticmethod
    def _over(acc_rgb: np.ndarray, acc_alpha: np.ndarray, source: RasterBuffer, opacity: float) -> None:
        """Draw source over the accumulator in place (straight alpha)"""
        src = source.array
        src_alpha = src[:, :, 3].astype(np.float64) / 255.0 * opacity
        src_rgb = src[:, :, :3].astype(np.float64)

        out_alpha = src_alpha + acc_alpha * (1.0 - src_alpha)
        weighted = src_rgb * src_alpha[..., None] + acc_rgb * (acc_alpha * (1.0 - src_alpha))[..., None]
        covered = out_alpha > 0.0
        acc_rgb[covered] = weighted[covered] / out_alpha[covered][:, None]
        acc_rgb[~covered] = 0.0
        acc_alpha[:] = out_alpha

    def flatten(self, layers: Sequence[Layer], ghost: Optional[RasterBuffer] = None,
                ghost_opacity: float = ONION_SKIN_OPACITY) -> RasterBuffer:
        """Composite visible layers bottom to top into a new buffer

        Args:
            layers: Bottom-to-top layers sharing one size
            ghost: Optional display-only reference buffer drawn beneath all
                layers (onion skin). Ignored when its size differs.
            ghost_opacity: Opacity of the ghost

        Returns:
            New RasterBuffer

        Raises:
            LayerStackError: If layers is empty or sizes differ
        """
        if not layers:
            raise LayerStackError("Cannot flatten an empty layer list")
        width, height = layers[0].size
        for layer in layers:
            if layer.size != (width, height):
                raise LayerStackError(
                    f"Cannot flatten layers of different sizes: {layer.size} vs {(width, height)}"
                )

        acc_rgb, acc_alpha = self._scratch(width, height)

        if ghost is not None:
            if ghost.size == (width, height):
                self._over(acc_rgb, acc_alpha, ghost, ghost_opacity)
            else:
                logger.debug(f"Onion skin ghost {ghost.size} does not match {(width, height)}, skipped")

        for layer in layers:
            if not layer.visible or layer.opacity <= 0.0:
                continue
            self._over(acc_rgb, acc_alpha, layer.buffer, layer.opacity)

        out = np.empty((height, width, 4), dtype=np.uint8)
        out[:, :, :3] = np.clip(np.rint(acc_rgb), 0, 255).astype(np.uint8)
        out[:, :, 3] = np.clip(np.rint(acc_alpha * 255.0), 0, 255).astype(np.uint8)
        return RasterBuffer(width, height, out)


def flatten(layers: Sequence[Layer]) -> RasterBuffer:
    """Composite visible layers into a new buffer (fresh scratch per call)"""
    return Compositor().flatten(layers)
