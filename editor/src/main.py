import sys
import os

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5.QtWidgets import (
    QMainWindow, QApplication, QFileDialog, QInputDialog, QLabel, QActionGroup, QToolBar,
    QWidget, QVBoxLayout,
)
from PyQt5.QtGui import QKeySequence
from PyQt5.QtCore import Qt
from PIL import Image

from components.pixel_canvas import PixelCanvas
from constants import DEFAULT_TILE_SIZE, TILE_SIZE_PRESETS
from services.transforms import FLIP_HORIZONTAL, FLIP_VERTICAL, ROTATE_CCW, ROTATE_CW
from session import EditorSession
from tools import Tool, ToolController
from utils.image_convert import extract_tile
from utils.logger import configure_logging, loggerRaise, set_main_window


class PixelEditorWindow(QMainWindow):
    """Minimal window around one canvas: tools, toggles, history and bank"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Pixel Sprite Editor")

        self.session = EditorSession()
        self.controller = ToolController(self.session)

        self.canvas = PixelCanvas(self.controller)
        self.canvas.color_picked.connect(self._on_color_picked)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self.canvas, alignment=Qt.AlignCenter)
        self.setCentralWidget(central)

        self.color_label = QLabel()
        self.statusBar().addPermanentWidget(self.color_label)

        self._setup_file_toolbar()
        self._setup_tool_toolbar()
        self._setup_option_toolbar()

        self.session.add_history_listener(self._on_history_changed)
        self._on_history_changed(False, False)
        self._update_color_label()

    # ========================================
    # Toolbars
    # ========================================

    def _setup_file_toolbar(self):
        toolbar = QToolBar("File")
        self.addToolBar(toolbar)

        toolbar.addAction("New", self._new_project).setShortcut(QKeySequence.New)
        toolbar.addAction("Open Tile", self._open_tile).setShortcut(QKeySequence.Open)
        toolbar.addAction("Color", self._choose_color)
        toolbar.addSeparator()
        self.undo_action = toolbar.addAction("Undo", self.controller.undo)
        self.redo_action = toolbar.addAction("Redo", self.controller.redo)
        toolbar.addSeparator()
        toolbar.addAction("Rotate CW", lambda: self.session.rotate(ROTATE_CW))
        toolbar.addAction("Rotate CCW", lambda: self.session.rotate(ROTATE_CCW))
        toolbar.addAction("Flip H", lambda: self.session.flip(FLIP_HORIZONTAL))
        toolbar.addAction("Flip V", lambda: self.session.flip(FLIP_VERTICAL))
        toolbar.addSeparator()
        toolbar.addAction("Add Layer", self.session.add_layer)
        toolbar.addAction("Save to Bank", self.session.save_to_bank)

    def _setup_tool_toolbar(self):
        toolbar = QToolBar("Tools")
        self.addToolBar(Qt.LeftToolBarArea, toolbar)

        group = QActionGroup(self)
        for tool in Tool:
            action = toolbar.addAction(tool.value.capitalize())
            action.setCheckable(True)
            action.setChecked(tool == self.session.active_tool)
            action.triggered.connect(lambda checked, t=tool: self.controller.set_tool(t))
            group.addAction(action)

    def _setup_option_toolbar(self):
        toolbar = QToolBar("Options")
        self.addToolBar(toolbar)

        options = self.session.options
        for label, attr in (("V-Sym", 'symmetry_vertical'), ("H-Sym", 'symmetry_horizontal'),
                            ("Wrap", 'wrap_around'), ("Onion", 'onion_skin'),
                            ("Filled Rect", 'rectangle_filled')):
            action = toolbar.addAction(label)
            action.setCheckable(True)
            action.setChecked(getattr(options, attr))
            action.toggled.connect(lambda checked, a=attr: self._set_option(a, checked))

    # ========================================
    # Handlers
    # ========================================

    def _set_option(self, attr, value):
        setattr(self.session.options, attr, value)
        self.canvas.update()

    def _new_project(self):
        sizes = [str(s) for s in TILE_SIZE_PRESETS]
        size, ok = QInputDialog.getItem(self, "New Project", "Tile size:", sizes,
                                        sizes.index(str(DEFAULT_TILE_SIZE)), False)
        if ok:
            self.controller.cancel()
            self.session.new_project(int(size))

    def _open_tile(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Tile", "", "Images (*.png *.gif *.bmp)")
        if not path:
            return
        try:
            with Image.open(path) as image:
                size = min(image.width, image.height)
                buffer = extract_tile(image, 0, 0, size)
        except Exception as e:
            loggerRaise(e, f"Failed to open image:\n{path}")
            return
        self.controller.cancel()
        self.session.begin_editing(buffer)

    def _choose_color(self):
        text, ok = QInputDialog.getText(self, "Color", "Hex color (#RRGGBB or #RRGGBBAA):",
                                        text=self.session.active_color)
        if not ok:
            return
        try:
            self.session.active_color = text
        except ValueError as e:
            loggerRaise(e, f"Invalid color: {text}")
        self._update_color_label()

    def _on_color_picked(self, hex_color):
        self._update_color_label()

    def _update_color_label(self):
        self.color_label.setText(self.session.active_color)

    def _on_history_changed(self, can_undo, can_redo):
        self.undo_action.setEnabled(can_undo)
        self.redo_action.setEnabled(can_redo)


def main():
    configure_logging(verbose="--verbose" in sys.argv)
    app = QApplication(sys.argv)
    window = PixelEditorWindow()
    set_main_window(window)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
