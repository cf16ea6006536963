"""
Pixel Sprite Editor - Tool Controller

Turns pointer and key events into edits on an EditorSession.

Pointer events arrive in display coordinates and are scaled to buffer
pixels here. With wrap-around on, points past an edge are reduced modulo
the buffer size; otherwise they are ignored.

pointer_down picks the behaviour from the current tool. Once a phase is
running, pointer_move/pointer_up are routed by the phase itself, so
switching to the temporary eyedropper mid-drag never disturbs the drag.
"""

import logging
from typing import Callable, List, Optional

from models.selection import Clipboard
from tools.paint_tools_mixin import PaintToolsMixin
from tools.scratch import ScratchBuffer
from tools.selection_tools_mixin import SelectionToolsMixin
from tools.shape_tools_mixin import ShapeToolsMixin
from tools.tool_types import (
    ARROW_OFFSETS, Idle, Key, Moving, Selected, Selecting, ShapePreview, Stroking, Tool,
)
from utils.coordinate_transforms import display_to_buffer


class ToolController(PaintToolsMixin, ShapeToolsMixin, SelectionToolsMixin):
    """Tool state machine for one EditorSession"""

    def __init__(self, session, clipboard: Optional[Clipboard] = None):
        """
        Args:
            session: EditorSession to edit
            clipboard: Shared clipboard, a private one by default
        """
        self._logger = logging.getLogger('ToolController')
        self.session = session
        self.clipboard = clipboard or Clipboard()

        self._phase = Idle()
        self._scratch = ScratchBuffer()
        self._override_tool: Optional[Tool] = None
        self.shift_held = False

        # Active layer id and buffer the running phase was started on
        self._source = None
        self._committing = False

        self._color_listeners: List[Callable[[str], None]] = []
        self._display_listeners: List[Callable[[], None]] = []

        session.add_change_listener(self._on_session_changed)

    # ========================================
    # State
    # ========================================

    @property
    def phase(self):
        return self._phase

    @property
    def tool(self) -> Tool:
        """Tool pointer_down will use (temporary eyedropper included)"""
        return self._override_tool or self.session.active_tool

    def set_tool(self, tool: Tool):
        """Select a tool; an uncommitted stroke or selection is dropped"""
        tool = Tool(tool)
        if tool == self.session.active_tool:
            return
        self.cancel()
        self.session.active_tool = tool
        self._logger.debug(f"Tool: {tool.value}")

    def cancel(self):
        """Return to Idle without committing anything still in progress"""
        if isinstance(self._phase, Idle):
            return
        self._scratch.discard()
        self._phase = Idle()
        self._notify_display()

    def undo(self):
        self.cancel()
        self.session.undo()

    def redo(self):
        self.cancel()
        self.session.redo()

    # ========================================
    # Commits
    # ========================================

    def _track_source(self):
        if self.session.is_open:
            self._source = (self.session.layers.active_layer_id, self.session.active_buffer())
        else:
            self._source = None

    def _commit(self, buffer, description):
        """Commit to the active layer; the running phase survives its own commit"""
        self._committing = True
        try:
            self.session.commit_active_layer(buffer, description)
        finally:
            self._committing = False
        self._track_source()

    def _on_session_changed(self):
        """Drop the phase when the active layer was replaced from outside

        A selection or drag holds pixels captured from the layer it started
        on; applying them to a flipped, rotated or different layer would
        bring back pixels the user already changed.
        """
        if self._committing or isinstance(self._phase, Idle):
            return
        if self._source is not None and self.session.is_open:
            layer_id, buffer = self._source
            if self.session.layers.active_layer_id == layer_id and self.session.active_buffer() is buffer:
                return
        self._logger.debug("Active layer changed outside the tool controller, phase dropped")
        self.cancel()

    # ========================================
    # Listeners
    # ========================================

    def add_color_picked_listener(self, callback: Callable[[str], None]):
        """callback(hex_color) whenever the eyedropper reads a pixel"""
        self._color_listeners.append(callback)

    def add_display_listener(self, callback: Callable[[], None]):
        """callback() whenever the live preview changes without a commit"""
        self._display_listeners.append(callback)

    def _notify_display(self):
        for callback in self._display_listeners:
            callback()

    def display_buffer(self):
        """Composite to show right now, in-progress pixels included"""
        return self.session.display_buffer(active_override=self._scratch.buffer)

    # ========================================
    # Pointer events
    # ========================================

    def _to_buffer_point(self, display_x, display_y, display_w, display_h):
        if not self.session.is_open:
            return None
        width, height = self.session.size
        return display_to_buffer(display_x, display_y, display_w, display_h, width, height,
                                 wrap=self.session.options.wrap_around)

    def pointer_down(self, display_x, display_y, display_w, display_h):
        point = self._to_buffer_point(display_x, display_y, display_w, display_h)
        if point is None:
            return
        if not isinstance(self._phase, (Idle, Selected)):
            # A drag is already running (button pressed twice)
            return

        tool = self.tool
        if tool != Tool.SELECTION and isinstance(self._phase, Selected):
            self._phase = Idle()
        self._track_source()

        if tool.is_stroke:
            self._begin_stroke(tool, point)
        elif tool.is_shape:
            self._begin_shape(tool, point)
        elif tool == Tool.FILL:
            self._apply_fill(point)
        elif tool == Tool.EYEDROPPER:
            self._pick_color(point)
        elif tool == Tool.SELECTION:
            self._selection_pointer_down(point)

    def pointer_move(self, display_x, display_y, display_w, display_h):
        phase = self._phase
        if isinstance(phase, (Idle, Selected)):
            return
        point = self._to_buffer_point(display_x, display_y, display_w, display_h)
        if point is None:
            return

        if isinstance(phase, Stroking):
            self._paint_stroke_point(point)
        elif isinstance(phase, ShapePreview):
            self._update_shape(point)
        else:
            self._selection_pointer_move(point)

    def pointer_up(self, display_x=None, display_y=None, display_w=None, display_h=None):
        """Finish the running drag; a final in-bounds position is applied first"""
        if display_x is not None:
            self.pointer_move(display_x, display_y, display_w, display_h)

        phase = self._phase
        if isinstance(phase, Stroking):
            self._finish_stroke()
        elif isinstance(phase, ShapePreview):
            self._finish_shape()
        elif isinstance(phase, (Selecting, Moving)):
            self._selection_pointer_up()

    # ========================================
    # Keyboard events
    # ========================================

    def key_down(self, key: Key):
        if key == Key.ALT:
            if self._override_tool is None and self.session.active_tool != Tool.EYEDROPPER:
                self._override_tool = Tool.EYEDROPPER
        elif key == Key.SHIFT:
            self._set_shift(True)
        elif key == Key.ESCAPE:
            self.cancel()
        elif key == Key.DELETE:
            if isinstance(self._phase, Selected):
                self._delete_selection()
        elif key in ARROW_OFFSETS:
            self._arrow(*ARROW_OFFSETS[key])
        elif key == Key.COPY:
            self.copy_selection()
        elif key == Key.CUT:
            self.cut_selection()
        elif key == Key.PASTE:
            self.paste_clipboard()

    def key_up(self, key: Key):
        if key == Key.ALT:
            self._override_tool = None
        elif key == Key.SHIFT:
            self._set_shift(False)

    def _set_shift(self, held: bool):
        if held == self.shift_held:
            return
        self.shift_held = held
        phase = self._phase
        if isinstance(phase, ShapePreview) and phase.tool == Tool.RECTANGLE:
            self._render_shape_preview()

    def _arrow(self, dx, dy):
        """Nudge the selection when there is one, otherwise the whole layer"""
        if isinstance(self._phase, Selected):
            self._nudge_selection(dx, dy)
        elif isinstance(self._phase, Idle):
            self.session.nudge(dx, dy)
