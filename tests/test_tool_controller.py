"""
Tests for the tool state machine.

Display coordinates equal buffer coordinates in most tests (the display
is passed in at buffer size) so pointer positions read as pixels.

Covers:
- Draw/erase strokes: working copy, symmetry, single commit per stroke
- Line/rectangle previews rebuilt from the pre-shape snapshot
- Fill and eyedropper single-shot behaviour
- Selection lifecycle: select, move, nudge, delete, copy/cut/paste
- Temporary eyedropper override, Escape, wrap-around coordinates
- Phases dropped when the active layer changes outside the controller
- Selections clipped to the buffer after drags and oversized pastes
"""
import pytest

from models.raster_buffer import RasterBuffer
from models.selection import SelectionRect
from services.transforms import FLIP_HORIZONTAL, ROTATE_CW
from tools import Idle, Key, Moving, Selected, Selecting, ShapePreview, Stroking, Tool, ToolController

from conftest import RED, GREEN, BLUE, TRANSPARENT


def down(controller, x, y):
    w, h = controller.session.size
    controller.pointer_down(x, y, w, h)


def move(controller, x, y):
    w, h = controller.session.size
    controller.pointer_move(x, y, w, h)


def up(controller, x=None, y=None):
    if x is None:
        controller.pointer_up()
    else:
        w, h = controller.session.size
        controller.pointer_up(x, y, w, h)


def drag(controller, points):
    down(controller, *points[0])
    for point in points[1:]:
        move(controller, *point)
    up(controller)


def painted(buffer, color=None):
    return {(x, y) for x, y, rgba in buffer.iter_pixels()
            if (rgba == color if color else rgba != TRANSPARENT)}


def open_tile(controller, size):
    controller.session.begin_editing(RasterBuffer.blank(size, size))


# ══════════════════════════════════════════════════════════════════════════
# Draw / Erase
# ══════════════════════════════════════════════════════════════════════════

class TestStrokes:

    def test_stroke_paints_working_copy_then_commits(self, controller, session):
        session.active_color = "#FF0000FF"
        committed = session.active_buffer()
        down(controller, 1, 1)
        assert isinstance(controller.phase, Stroking)
        # Authoritative buffer untouched until pointer-up
        assert session.active_buffer() is committed
        assert committed.get_pixel(1, 1) == TRANSPARENT
        assert controller.display_buffer().get_pixel(1, 1) == RED

        up(controller)
        assert isinstance(controller.phase, Idle)
        assert session.active_buffer().get_pixel(1, 1) == RED
        assert len(session.history_manager.past) == 1

    def test_one_history_entry_per_stroke(self, controller, session):
        drag(controller, [(0, 0), (1, 0), (2, 0), (3, 0)])
        assert painted(session.active_buffer()) == {(0, 0), (1, 0), (2, 0), (3, 0)}
        assert len(session.history_manager.past) == 1
        session.undo()
        assert painted(session.active_buffer()) == set()

    def test_symmetry_scenario(self, controller, session):
        session.active_color = "#FF0000FF"
        drag(controller, [(1, 1)])
        session.options.symmetry_horizontal = True
        session.options.symmetry_vertical = True
        drag(controller, [(0, 0)])
        buffer = session.active_buffer()
        assert painted(buffer, RED) == {(1, 1), (0, 0), (3, 0), (0, 3), (3, 3)}

    def test_odd_center_with_symmetry(self, controller, session):
        open_tile(controller, 5)
        session.options.symmetry_horizontal = True
        session.options.symmetry_vertical = True
        drag(controller, [(2, 2)])
        assert painted(session.active_buffer()) == {(2, 2)}

    def test_vertical_symmetry_even(self, controller, session):
        session.options.symmetry_vertical = True
        drag(controller, [(0, 1)])
        assert painted(session.active_buffer()) == {(0, 1), (3, 1)}

    def test_erase_writes_transparent(self, controller, session):
        session.commit_active_layer(RasterBuffer.filled(4, 4, GREEN), "Fill")
        controller.set_tool(Tool.ERASE)
        drag(controller, [(2, 2), (2, 3)])
        assert session.active_buffer().get_pixel(2, 2) == TRANSPARENT
        assert session.active_buffer().get_pixel(2, 3) == TRANSPARENT
        assert session.active_buffer().get_pixel(1, 1) == GREEN

    def test_out_of_bounds_down_ignored(self, controller, session):
        down(controller, 4, 0)
        assert isinstance(controller.phase, Idle)
        assert not session.can_undo

    def test_out_of_bounds_move_ignored(self, controller, session):
        drag(controller, [(3, 3), (5, 3), (-1, 0)])
        assert painted(session.active_buffer()) == {(3, 3)}

    def test_wrap_around_reduces_coordinates(self, controller, session):
        session.options.wrap_around = True
        drag(controller, [(5, 6)])
        assert painted(session.active_buffer()) == {(1, 2)}

    def test_display_scaling(self, controller, session):
        # 4x4 buffer shown at 256x256: each pixel is 64 display pixels
        controller.pointer_down(130, 200, 256, 256)
        controller.pointer_up()
        assert painted(session.active_buffer()) == {(2, 3)}

    def test_escape_cancels_stroke(self, controller, session):
        down(controller, 1, 1)
        controller.key_down(Key.ESCAPE)
        up(controller)
        assert painted(session.active_buffer()) == set()
        assert not session.can_undo

    def test_scratch_reused_between_strokes(self, controller):
        drag(controller, [(0, 0)])
        first = controller._scratch._buffer
        drag(controller, [(1, 1)])
        assert controller._scratch._buffer is first


# ══════════════════════════════════════════════════════════════════════════
# Line / Rectangle
# ══════════════════════════════════════════════════════════════════════════

class TestShapes:

    def test_line_preview_never_compounds(self, controller, session):
        open_tile(controller, 8)
        controller.set_tool(Tool.LINE)
        down(controller, 0, 0)
        move(controller, 7, 0)
        assert isinstance(controller.phase, ShapePreview)
        move(controller, 0, 7)
        preview = controller.display_buffer()
        assert painted(preview) == {(0, y) for y in range(8)}
        # Nothing committed yet
        assert painted(session.active_buffer()) == set()
        up(controller)
        assert painted(session.active_buffer()) == {(0, y) for y in range(8)}
        assert len(session.history_manager.past) == 1

    def test_rectangle_outline_scenario(self, controller, session):
        open_tile(controller, 8)
        session.active_color = "#00FF00FF"
        controller.set_tool(Tool.RECTANGLE)
        drag(controller, [(1, 1), (4, 4), (6, 6)])
        border = {(x, y) for x in range(1, 7) for y in range(1, 7) if x in (1, 6) or y in (1, 6)}
        assert painted(session.active_buffer(), GREEN) == border
        assert painted(session.active_buffer()) == border

    def test_shift_toggles_fill_while_previewing(self, controller, session):
        open_tile(controller, 8)
        controller.set_tool(Tool.RECTANGLE)
        down(controller, 1, 1)
        move(controller, 3, 3)
        assert len(painted(controller.display_buffer())) == 8
        controller.key_down(Key.SHIFT)
        assert len(painted(controller.display_buffer())) == 9
        controller.key_up(Key.SHIFT)
        assert len(painted(controller.display_buffer())) == 8
        controller.key_down(Key.SHIFT)
        up(controller)
        assert len(painted(session.active_buffer())) == 9

    def test_filled_option_inverted_by_shift(self, controller, session):
        session.options.rectangle_filled = True
        assert controller.rectangle_filled
        controller.key_down(Key.SHIFT)
        assert not controller.rectangle_filled

    def test_line_with_symmetry(self, controller, session):
        open_tile(controller, 8)
        session.options.symmetry_vertical = True
        controller.set_tool(Tool.LINE)
        drag(controller, [(0, 0), (1, 0)])
        assert painted(session.active_buffer()) == {(0, 0), (1, 0), (6, 0), (7, 0)}

    def test_preview_over_existing_pixels(self, controller, session):
        session.commit_active_layer(RasterBuffer.filled(4, 4, BLUE), "Fill")
        controller.set_tool(Tool.LINE)
        down(controller, 0, 0)
        move(controller, 3, 0)
        move(controller, 0, 0)
        up(controller)
        buffer = session.active_buffer()
        assert buffer.get_pixel(0, 0) == session.active_rgba
        assert buffer.get_pixel(3, 0) == BLUE


# ══════════════════════════════════════════════════════════════════════════
# Fill / Eyedropper
# ══════════════════════════════════════════════════════════════════════════

class TestSingleShotTools:

    def test_fill_commits_on_pointer_down(self, controller, session):
        session.active_color = "#0000ff"
        controller.set_tool(Tool.FILL)
        down(controller, 2, 2)
        assert isinstance(controller.phase, Idle)
        assert session.active_buffer() == RasterBuffer.filled(4, 4, BLUE)
        assert len(session.history_manager.past) == 1
        up(controller)
        assert len(session.history_manager.past) == 1

    def test_noop_fill_records_nothing(self, controller, session):
        session.active_color = "#00000000"
        controller.set_tool(Tool.FILL)
        down(controller, 0, 0)
        assert not session.can_undo

    def test_fill_with_symmetry_fills_mirrored_regions(self, controller, session):
        # Vertical wall in column 1 splits the left column from the rest
        wall = session.active_buffer().copy()
        for y in range(4):
            wall.set_pixel(1, y, RED)
            wall.set_pixel(2, y, RED)
        session.commit_active_layer(wall, "Wall")
        session.options.symmetry_vertical = True
        session.active_color = "#00ff00"
        controller.set_tool(Tool.FILL)
        down(controller, 0, 0)
        buffer = session.active_buffer()
        assert painted(buffer, GREEN) == {(0, y) for y in range(4)} | {(3, y) for y in range(4)}
        assert len(session.history_manager.past) == 2

    def test_fill_tolerance_from_options(self, controller, session):
        base = RasterBuffer.filled(4, 4, (100, 0, 0, 255))
        base.set_pixel(3, 3, (105, 0, 0, 255))
        session.commit_active_layer(base, "Base")
        session.options.fill_tolerance = 5
        controller.set_tool(Tool.FILL)
        down(controller, 0, 0)
        assert session.active_buffer().get_pixel(3, 3) == (0, 0, 0, 255)

    def test_eyedropper_reports_hex(self, controller, session):
        base = session.active_buffer().copy()
        base.set_pixel(1, 2, (255, 0, 0, 128))
        base.set_pixel(2, 2, (0, 255, 0, 255))
        session.commit_active_layer(base, "Base")
        picked = []
        controller.add_color_picked_listener(picked.append)
        controller.set_tool(Tool.EYEDROPPER)
        down(controller, 1, 2)
        down(controller, 2, 2)
        assert picked == ["#ff000080", "#00ff00"]
        assert session.active_color == "#00ff00"
        assert len(session.history_manager.past) == 1

    def test_eyedropper_out_of_bounds_noop(self, controller, session):
        picked = []
        controller.add_color_picked_listener(picked.append)
        controller.set_tool(Tool.EYEDROPPER)
        down(controller, 9, 9)
        assert picked == []

    def test_temporary_eyedropper(self, controller, session):
        base = session.active_buffer().copy()
        base.set_pixel(3, 3, BLUE)
        session.commit_active_layer(base, "Base")
        picked = []
        controller.add_color_picked_listener(picked.append)

        controller.key_down(Key.ALT)
        assert controller.tool == Tool.EYEDROPPER
        down(controller, 3, 3)
        controller.key_up(Key.ALT)
        assert controller.tool == Tool.DRAW
        assert session.active_tool == Tool.DRAW
        assert picked == ["#0000ff"]

    def test_temporary_eyedropper_keeps_stroke(self, controller, session):
        session.active_color = "#ff0000"
        down(controller, 0, 0)
        controller.key_down(Key.ALT)
        move(controller, 1, 0)
        controller.key_up(Key.ALT)
        up(controller)
        assert painted(session.active_buffer(), RED) == {(0, 0), (1, 0)}


# ══════════════════════════════════════════════════════════════════════════
# Selection
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def selection_controller(controller, session):
    """8x8 tile with a 2x2 red block at (1,1), selection tool active"""
    base = RasterBuffer.blank(8, 8)
    for x, y in ((1, 1), (2, 1), (1, 2), (2, 2)):
        base.set_pixel(x, y, RED)
    session.begin_editing(base)
    controller.set_tool(Tool.SELECTION)
    return controller


class TestSelection:

    def test_drag_selects_and_captures(self, selection_controller, session):
        down(selection_controller, 2, 2)
        move(selection_controller, 1, 1)
        assert isinstance(selection_controller.phase, Selecting)
        assert selection_controller.selection_rect == SelectionRect(1, 1, 2, 2)
        up(selection_controller)
        phase = selection_controller.phase
        assert isinstance(phase, Selected)
        assert phase.rect == SelectionRect(1, 1, 2, 2)
        assert phase.content == RasterBuffer.filled(2, 2, RED)
        assert not session.can_undo

    def test_move_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        down(selection_controller, 1, 1)
        assert isinstance(selection_controller.phase, Moving)
        move(selection_controller, 4, 5)
        preview = selection_controller.display_buffer()
        assert painted(preview) == {(4, 5), (5, 5), (4, 6), (5, 6)}
        up(selection_controller)

        assert selection_controller.phase.rect == SelectionRect(4, 5, 2, 2)
        assert painted(session.active_buffer()) == {(4, 5), (5, 5), (4, 6), (5, 6)}
        assert len(session.history_manager.past) == 1
        session.undo()
        assert painted(session.active_buffer()) == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_drag_outside_starts_new_selection(self, selection_controller):
        drag(selection_controller, [(1, 1), (2, 2)])
        down(selection_controller, 6, 6)
        assert isinstance(selection_controller.phase, Selecting)

    def test_arrow_nudges_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.key_down(Key.RIGHT)
        selection_controller.key_down(Key.DOWN)
        assert selection_controller.phase.rect == SelectionRect(2, 2, 2, 2)
        assert painted(session.active_buffer()) == {(2, 2), (3, 2), (2, 3), (3, 3)}
        assert len(session.history_manager.past) == 2

    def test_arrow_without_selection_nudges_layer(self, controller, session):
        drag(controller, [(0, 0)])
        controller.key_down(Key.RIGHT)
        assert painted(session.active_buffer()) == {(1, 0)}

    def test_delete_clears_and_discards(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (1, 2)])
        selection_controller.key_down(Key.DELETE)
        assert isinstance(selection_controller.phase, Idle)
        assert painted(session.active_buffer()) == {(2, 1), (2, 2)}

    def test_copy_paste(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.key_down(Key.COPY)
        assert selection_controller.clipboard.content() == RasterBuffer.filled(2, 2, RED)

        selection_controller.key_down(Key.PASTE)
        phase = selection_controller.phase
        assert isinstance(phase, Selected)
        assert phase.rect == SelectionRect(1, 1, 2, 2)
        # Pasted at the origin: pixels unchanged, then moved away
        drag(selection_controller, [(1, 1), (5, 5)])
        assert painted(session.active_buffer()) == {(5, 5), (6, 5), (5, 6), (6, 6)}

    def test_cut(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.key_down(Key.CUT)
        assert painted(session.active_buffer()) == set()
        assert not selection_controller.clipboard.is_empty

    def test_paste_with_empty_clipboard(self, selection_controller, session):
        selection_controller.key_down(Key.PASTE)
        assert isinstance(selection_controller.phase, Idle)
        assert not session.can_undo

    def test_clipboard_shared_between_controllers(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.copy_selection()
        other = ToolController(session, clipboard=selection_controller.clipboard)
        assert not other.clipboard.is_empty

    def test_escape_drops_selection(self, selection_controller):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.key_down(Key.ESCAPE)
        assert selection_controller.selection_rect is None

    def test_switching_tool_drops_selection(self, selection_controller):
        drag(selection_controller, [(1, 1), (2, 2)])
        selection_controller.set_tool(Tool.DRAW)
        assert isinstance(selection_controller.phase, Idle)

    def test_transparent_pixels_in_selection_do_not_erase(self, selection_controller, session):
        # Select (0,0)-(1,1): only (1,1) is red
        drag(selection_controller, [(0, 0), (1, 1)])
        down(selection_controller, 0, 0)
        move(selection_controller, 1, 0)
        up(selection_controller)
        buffer = session.active_buffer()
        # Moved block lands on (1,0)-(2,1); its transparent pixels leave (2,1) red
        assert buffer.get_pixel(2, 1) == RED
        assert buffer.get_pixel(1, 1) == TRANSPARENT

    def test_flip_outside_controller_drops_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        session.flip(FLIP_HORIZONTAL)
        assert isinstance(selection_controller.phase, Idle)
        assert selection_controller.selection_rect is None

        # With no selection left, the arrow moves the flipped layer as a whole
        selection_controller.key_down(Key.RIGHT)
        assert painted(session.active_buffer()) == {(6, 1), (7, 1), (6, 2), (7, 2)}

    def test_layer_switch_drops_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        session.add_layer()
        assert isinstance(selection_controller.phase, Idle)

    def test_rotate_during_stroke_drops_stroke(self, controller, session):
        open_tile(controller, 8)
        down(controller, 0, 0)
        session.rotate(ROTATE_CW)
        assert isinstance(controller.phase, Idle)
        up(controller)
        assert painted(session.active_buffer()) == set()
        assert len(session.history_manager.past) == 1

    def test_unrelated_change_keeps_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        session.rename_layer(session.layers.active_layer_id, 'Outline')
        session.set_layer_visibility(session.layers.active_layer_id, False)
        assert isinstance(selection_controller.phase, Selected)

    def test_drag_past_edge_clips_selection(self, selection_controller, session):
        drag(selection_controller, [(1, 1), (2, 2)])
        down(selection_controller, 1, 1)
        move(selection_controller, 7, 7)
        assert selection_controller.selection_rect == SelectionRect(7, 7, 1, 1)
        up(selection_controller)

        phase = selection_controller.phase
        assert phase.rect == SelectionRect(7, 7, 1, 1)
        assert phase.content == RasterBuffer.filled(1, 1, RED)
        assert painted(session.active_buffer()) == {(7, 7)}

    def test_paste_larger_than_buffer_is_cropped(self, selection_controller, session):
        selection_controller.clipboard.copy(RasterBuffer.filled(10, 3, GREEN), SelectionRect(0, 0, 10, 3))
        selection_controller.key_down(Key.PASTE)

        phase = selection_controller.phase
        assert phase.rect == SelectionRect(0, 0, 8, 3)
        assert phase.rect.clamp(8, 8) == phase.rect
        assert phase.content.size == (8, 3)
        assert painted(session.active_buffer(), GREEN) == {(x, y) for x in range(8) for y in range(3)}
