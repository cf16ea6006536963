"""Pixel canvas widget - shows the live composite and feeds input to the tools."""

from PyQt5.QtCore import QRectF, QSize, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QKeySequence, QPainter, QPen
from PyQt5.QtWidgets import QSizePolicy, QWidget

from constants import CHECKER_CELL_SIZE, CHECKER_COLOR_DARK, CHECKER_COLOR_LIGHT, EDITOR_DISPLAY_SIZE
from tools.tool_types import Key
from utils.coordinate_transforms import buffer_to_display
from utils.image_convert import buffer_to_qimage
from utils.logger import loggerRaise

# Plain keys; clipboard shortcuts go through QKeySequence matching
QT_KEY_MAP = {
    Qt.Key_Shift: Key.SHIFT,
    Qt.Key_Alt: Key.ALT,
    Qt.Key_Escape: Key.ESCAPE,
    Qt.Key_Delete: Key.DELETE,
    Qt.Key_Backspace: Key.DELETE,
    Qt.Key_Left: Key.LEFT,
    Qt.Key_Right: Key.RIGHT,
    Qt.Key_Up: Key.UP,
    Qt.Key_Down: Key.DOWN,
}

SEQUENCE_KEYS = (
    (QKeySequence.Copy, Key.COPY),
    (QKeySequence.Cut, Key.CUT),
    (QKeySequence.Paste, Key.PASTE),
)


def map_key_event(event):
    """Translate a QKeyEvent into a Key, None for keys the tools ignore"""
    for sequence, key in SEQUENCE_KEYS:
        if event.matches(sequence):
            return key
    return QT_KEY_MAP.get(event.key())


class PixelCanvas(QWidget):
    """Square editing surface for one ToolController

    The tile is scaled to the widget with nearest-neighbour sampling over a
    checkerboard. The onion-skin ghost comes baked into the controller's
    display buffer.
    """

    color_picked = pyqtSignal(str)  # Emits eyedropper hex color

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self.controller = controller

        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(EDITOR_DISPLAY_SIZE, EDITOR_DISPLAY_SIZE)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.setCursor(Qt.CrossCursor)

        controller.add_display_listener(self.update)
        controller.add_color_picked_listener(self.color_picked.emit)
        controller.session.add_change_listener(self.update)

    def sizeHint(self):
        return QSize(EDITOR_DISPLAY_SIZE, EDITOR_DISPLAY_SIZE)

    # ========================================
    # Painting
    # ========================================

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self._paint_checkerboard(painter)

            buffer = self.controller.display_buffer()
            if buffer is None:
                painter.setPen(QColor(150, 150, 150))
                painter.drawText(self.rect(), Qt.AlignCenter | Qt.TextWordWrap, "Open a tile to start editing")
                return

            # No SmoothPixmapTransform: pixels stay hard-edged when scaled
            painter.drawImage(QRectF(self.rect()), buffer_to_qimage(buffer))
            self._paint_symmetry_guides(painter, buffer.width, buffer.height)
            self._paint_selection(painter, buffer.width, buffer.height)
        finally:
            painter.end()

    def _paint_checkerboard(self, painter):
        dark = QColor(*CHECKER_COLOR_DARK)
        light = QColor(*CHECKER_COLOR_LIGHT)
        cell = CHECKER_CELL_SIZE
        for row in range(0, self.height(), cell):
            for col in range(0, self.width(), cell):
                color = dark if ((row // cell) + (col // cell)) % 2 == 0 else light
                painter.fillRect(col, row, cell, cell, color)

    def _paint_symmetry_guides(self, painter, buffer_w, buffer_h):
        """Axis lines: through the centre pixel on odd sizes, between pixels on even"""
        options = self.controller.session.options
        if not (options.symmetry_vertical or options.symmetry_horizontal):
            return

        painter.setPen(QPen(QColor(99, 102, 241, 160), 1))
        if options.symmetry_vertical:
            x, _ = buffer_to_display(buffer_w / 2, 0, self.width(), self.height(), buffer_w, buffer_h)
            painter.drawLine(int(x), 0, int(x), self.height())
        if options.symmetry_horizontal:
            _, y = buffer_to_display(0, buffer_h / 2, self.width(), self.height(), buffer_w, buffer_h)
            painter.drawLine(0, int(y), self.width(), int(y))

    def _paint_selection(self, painter, buffer_w, buffer_h):
        rect = self.controller.selection_rect
        if rect is None:
            return
        x0, y0 = buffer_to_display(rect.x, rect.y, self.width(), self.height(), buffer_w, buffer_h)
        x1, y1 = buffer_to_display(rect.right, rect.bottom, self.width(), self.height(), buffer_w, buffer_h)
        pen = QPen(QColor(255, 255, 255), 1, Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(x0, y0, x1 - x0 - 1, y1 - y0 - 1))

    # ========================================
    # Input
    # ========================================

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            return
        try:
            pos = event.pos()
            self.controller.pointer_down(pos.x(), pos.y(), self.width(), self.height())
        except Exception as e:
            loggerRaise(e, "Tool action failed")

    def mouseMoveEvent(self, event):
        if not event.buttons() & Qt.LeftButton:
            return
        try:
            pos = event.pos()
            self.controller.pointer_move(pos.x(), pos.y(), self.width(), self.height())
        except Exception as e:
            loggerRaise(e, "Tool action failed")

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            return
        try:
            pos = event.pos()
            self.controller.pointer_up(pos.x(), pos.y(), self.width(), self.height())
        except Exception as e:
            loggerRaise(e, "Tool action failed")

    def keyPressEvent(self, event):
        if event.matches(QKeySequence.Undo):
            self.controller.undo()
            return
        if event.matches(QKeySequence.Redo):
            self.controller.redo()
            return

        key = map_key_event(event)
        if key is None or (event.isAutoRepeat() and key in (Key.SHIFT, Key.ALT)):
            super().keyPressEvent(event)
            return
        try:
            self.controller.key_down(key)
        except Exception as e:
            loggerRaise(e, "Key action failed")

    def keyReleaseEvent(self, event):
        if event.isAutoRepeat():
            return
        key = QT_KEY_MAP.get(event.key())
        if key is not None:
            self.controller.key_up(key)
        else:
            super().keyReleaseEvent(event)
