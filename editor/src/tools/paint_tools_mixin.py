"""Draw, erase, fill and eyedropper handling for ToolController"""

from constants import TRANSPARENT
from models.color import rgba_to_hex
from services.flood_fill import flood_fill
from services.rasterize import paint_points
from tools.tool_types import Idle, Stroking, Tool


class PaintToolsMixin:
    """Mixin for the freehand and single-shot tools

    This mixin assumes the parent class has:
        - self.session: EditorSession
        - self._scratch: ScratchBuffer
        - self._phase: current phase record
        - self._logger: logging.Logger instance
        - self._notify_display(), self._commit(buffer, description)
    """

    # ========================================
    # Draw / Erase
    # ========================================

    def _stroke_color(self, tool):
        return TRANSPARENT if tool == Tool.ERASE else self.session.active_rgba

    def _begin_stroke(self, tool, point):
        self._scratch.begin(self.session.active_buffer())
        self._phase = Stroking(tool)
        self._paint_stroke_point(point)

    def _paint_stroke_point(self, point):
        phase = self._phase
        if point == phase.last_point:
            return
        paint_points(self._scratch.buffer, [point], self._stroke_color(phase.tool), self.session.symmetry())
        self._phase = Stroking(phase.tool, point)
        self._notify_display()

    def _finish_stroke(self):
        tool = self._phase.tool
        self._phase = Idle()
        self._commit(self._scratch.commit(), "Draw" if tool == Tool.DRAW else "Erase")

    # ========================================
    # Fill
    # ========================================

    def _apply_fill(self, point):
        """Flood fill from the point and each of its mirrors, then commit"""
        source = self.session.active_buffer()
        color = self.session.active_rgba
        tolerance = self.session.options.fill_tolerance

        result = source
        # A mirror point already covered by an earlier fill is a no-op
        for mx, my in self.session.symmetry().resolve(*point):
            result = flood_fill(result, mx, my, color, tolerance)

        if result == source:
            self._logger.debug(f"Fill at {point} changed nothing")
            return
        self._commit(result, "Fill")

    # ========================================
    # Eyedropper
    # ========================================

    def _pick_color(self, point):
        """Report the active layer's color at point"""
        rgba = self.session.active_buffer().get_pixel(*point)
        if rgba is None:
            return None

        hex_color = rgba_to_hex(rgba)
        self.session.active_color = hex_color
        self._logger.debug(f"Picked {hex_color} at {point}")
        for callback in self._color_listeners:
            callback(hex_color)
        return hex_color
