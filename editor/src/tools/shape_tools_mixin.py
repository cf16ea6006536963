"""Line and rectangle preview handling for ToolController"""

from services.rasterize import bresenham_line, paint_points, rectangle_points
from tools.tool_types import Idle, ShapePreview, Tool


class ShapeToolsMixin:
    """Mixin for anchor-and-drag shape tools

    Every preview is rebuilt from the pre-shape snapshot, so the preview
    always shows exactly one shape from anchor to the current point.

    This mixin assumes the parent class has:
        - self.session: EditorSession
        - self._scratch: ScratchBuffer
        - self._phase: current phase record
        - self.shift_held: bool
        - self._notify_display(), self._commit(buffer, description)
    """

    @property
    def rectangle_filled(self) -> bool:
        """Effective rectangle mode; holding shift inverts the base option"""
        return self.session.options.rectangle_filled != self.shift_held

    def _shape_points(self, tool, anchor, current):
        if tool == Tool.LINE:
            return bresenham_line(*anchor, *current)
        width, height = self.session.size
        return rectangle_points(*anchor, *current, width, height, filled=self.rectangle_filled)

    def _begin_shape(self, tool, point):
        pre_shape = self.session.active_buffer()
        self._scratch.begin(pre_shape)
        self._phase = ShapePreview(tool, point, pre_shape, point)
        self._render_shape_preview()

    def _update_shape(self, point):
        phase = self._phase
        if point == phase.current:
            return
        self._phase = ShapePreview(phase.tool, phase.anchor, phase.pre_shape, point)
        self._render_shape_preview()

    def _render_shape_preview(self):
        phase = self._phase
        working = self._scratch.load(phase.pre_shape)
        points = self._shape_points(phase.tool, phase.anchor, phase.current)
        paint_points(working, points, self.session.active_rgba, self.session.symmetry())
        self._notify_display()

    def _finish_shape(self):
        tool = self._phase.tool
        self._phase = Idle()
        self._commit(self._scratch.commit(), "Line" if tool == Tool.LINE else "Rectangle")
