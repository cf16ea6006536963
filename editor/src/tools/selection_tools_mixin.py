"""
ToolController Selection Mixin

Lifecycle:
    Idle --drag--> Selecting --release--> Selected
    Selected --drag inside--> Moving --release--> Selected
    Selected --drag outside--> Selecting
    Selected --Delete--> Idle (region cleared)

The captured content is taken once, when the selection is made, and is
what later moves, nudges and copies carry around.
"""

from models.selection import SelectionRect
from services.region_ops import clear_region, copy_region, paste_region
from tools.tool_types import Idle, Moving, Selected, Selecting


class SelectionToolsMixin:
    """Mixin for the rectangular selection tool and the clipboard

    This mixin assumes the parent class has:
        - self.session: EditorSession
        - self.clipboard: Clipboard
        - self._scratch: ScratchBuffer
        - self._phase: current phase record
        - self._logger: logging.Logger instance
        - self._notify_display(), self._commit(buffer, description)
    """

    @property
    def selection_rect(self):
        """Rectangle to outline on screen, None without a selection"""
        phase = self._phase
        if isinstance(phase, Selecting):
            rect = phase.rect.clamp(*self.session.size)
            return None if rect.is_empty else rect
        if isinstance(phase, Selected):
            return phase.rect
        if isinstance(phase, Moving):
            # A drag may carry the block past an edge; only the on-buffer part shows
            rect = phase.rect.clamp(*self.session.size)
            return None if rect.is_empty else rect
        return None

    def _clip_to_buffer(self, rect, content):
        """Part of a selection that lies on the buffer

        Returns:
            (rect, content) clipped to the buffer, or None when nothing of
            the selection is left on it
        """
        visible = rect.clamp(*self.session.size)
        if visible.is_empty:
            return None
        if visible == rect:
            return rect, content
        crop = SelectionRect(visible.x - rect.x, visible.y - rect.y, visible.w, visible.h)
        return visible, copy_region(content, crop).freeze()

    def _select_or_drop(self, rect, content):
        clipped = self._clip_to_buffer(rect, content)
        self._phase = Idle() if clipped is None else Selected(*clipped)

    # ========================================
    # Pointer
    # ========================================

    def _selection_pointer_down(self, point):
        phase = self._phase
        if isinstance(phase, Selected) and phase.rect.contains(*point):
            base = clear_region(self.session.active_buffer(), phase.rect)
            grab = (point[0] - phase.rect.x, point[1] - phase.rect.y)
            self._phase = Moving(phase.rect, phase.content, base, grab)
            self._scratch.begin(paste_region(base, phase.content, phase.rect.x, phase.rect.y))
            self._notify_display()
            return

        self._phase = Selecting(point, point)
        self._notify_display()

    def _selection_pointer_move(self, point):
        phase = self._phase
        if isinstance(phase, Selecting):
            if point != phase.current:
                self._phase = Selecting(phase.anchor, point)
                self._notify_display()
        elif isinstance(phase, Moving):
            rect = phase.rect.moved_to(point[0] - phase.grab_offset[0], point[1] - phase.grab_offset[1])
            if rect == phase.rect:
                return
            self._phase = Moving(rect, phase.content, phase.base, phase.grab_offset)
            self._scratch.load(paste_region(phase.base, phase.content, rect.x, rect.y))
            self._notify_display()

    def _selection_pointer_up(self):
        phase = self._phase
        if isinstance(phase, Selecting):
            rect = phase.rect.clamp(*self.session.size)
            if rect.is_empty:
                self._phase = Idle()
            else:
                content = copy_region(self.session.active_buffer(), rect)
                self._phase = Selected(rect, content.freeze())
                self._logger.debug(f"Selected {rect.as_tuple()}")
            self._notify_display()
        elif isinstance(phase, Moving):
            self._select_or_drop(phase.rect, phase.content)
            self._commit(self._scratch.commit(), "Move selection")

    # ========================================
    # Keyboard
    # ========================================

    def _nudge_selection(self, dx, dy):
        """Move the selected pixels one step and commit"""
        phase = self._phase
        rect = phase.rect.offset(dx, dy)
        cleared = clear_region(self.session.active_buffer(), phase.rect)
        result = paste_region(cleared, phase.content, rect.x, rect.y)
        self._select_or_drop(rect, phase.content)
        self._commit(result, "Move selection")

    def _delete_selection(self):
        rect = self._phase.rect
        self._phase = Idle()
        self._commit(clear_region(self.session.active_buffer(), rect), "Delete selection")

    def copy_selection(self) -> bool:
        phase = self._phase
        if not isinstance(phase, Selected):
            return False
        self.clipboard.copy(phase.content, phase.rect)
        return True

    def cut_selection(self) -> bool:
        if not self.copy_selection():
            return False
        self._delete_selection()
        return True

    def paste_clipboard(self) -> bool:
        """Paste the clipboard at its origin and select the pasted pixels"""
        content = self.clipboard.content()
        if content is None or not self.session.is_open:
            return False
        self.cancel()

        origin = self.clipboard.origin_rect
        width, height = self.session.size
        # Keep the paste on the buffer even when the origin no longer fits
        x = max(0, min(origin.x, width - content.width))
        y = max(0, min(origin.y, height - content.height))
        # Content bigger than the buffer (e.g. copied before a rotate) is cropped
        rect, content = self._clip_to_buffer(SelectionRect(x, y, content.width, content.height), content.freeze())

        result = paste_region(self.session.active_buffer(), content, x, y)
        self._phase = Selected(rect, content)
        self._commit(result, "Paste")
        return True
