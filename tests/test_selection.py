"""
Tests for selection rectangles, region operations and the clipboard.

Covers:
- SelectionRect normalisation and clamping
- copy_region / paste_region / clear_region
- Transparent source pixels leave the destination untouched
- Single-slot clipboard isolation
"""
import pytest

from models.raster_buffer import RasterBuffer
from models.selection import Clipboard, SelectionRect
from services.region_ops import clear_region, copy_region, paste_region

from conftest import RED, GREEN, BLUE, TRANSPARENT


class TestSelectionRect:

    def test_from_corners_normalises(self):
        assert SelectionRect.from_corners(3, 4, 1, 1) == SelectionRect(1, 1, 3, 4)

    def test_contains_is_half_open(self):
        rect = SelectionRect(1, 1, 2, 2)
        assert rect.contains(1, 1) and rect.contains(2, 2)
        assert not rect.contains(3, 1)

    def test_clamp(self):
        assert SelectionRect(-1, 2, 4, 4).clamp(4, 4) == SelectionRect(0, 2, 3, 2)
        assert SelectionRect(5, 5, 2, 2).clamp(4, 4).is_empty

    def test_moves(self):
        rect = SelectionRect(1, 1, 2, 3)
        assert rect.moved_to(0, 2) == SelectionRect(0, 2, 2, 3)
        assert rect.offset(1, -1) == SelectionRect(2, 0, 2, 3)


class TestRegionOps:

    def test_copy_region_exact(self, gradient):
        region = copy_region(gradient, SelectionRect(1, 1, 3, 2))
        assert region.size == (3, 2)
        for x, y, rgba in region.iter_pixels():
            assert rgba == gradient.get_pixel(x + 1, y + 1)

    def test_copy_region_clamps(self, gradient):
        assert copy_region(gradient, SelectionRect(3, 2, 10, 10)).size == (2, 1)

    def test_copy_empty_region_rejected(self, gradient):
        with pytest.raises(ValueError):
            copy_region(gradient, SelectionRect(9, 9, 2, 2))

    def test_copy_then_paste_same_origin_is_identity(self, gradient):
        rect = SelectionRect(1, 0, 3, 3)
        region = copy_region(gradient, rect)
        assert paste_region(gradient, region, rect.x, rect.y) == gradient

    def test_paste_transparent_pixels_non_destructive(self, red8):
        source = RasterBuffer.blank(2, 2)
        source.set_pixel(0, 0, BLUE)
        result = paste_region(red8, source, 3, 3)
        assert result.get_pixel(3, 3) == BLUE
        assert result.get_pixel(4, 4) == RED
        assert result.get_pixel(4, 3) == RED

    def test_paste_drops_out_of_bounds(self, blank4):
        source = RasterBuffer.filled(3, 3, GREEN)
        result = paste_region(blank4, source, 2, -1)
        painted = {(x, y) for x, y, rgba in result.iter_pixels() if rgba == GREEN}
        assert painted == {(2, 0), (3, 0), (2, 1), (3, 1)}

    def test_paste_fully_outside(self, blank4):
        assert paste_region(blank4, RasterBuffer.filled(2, 2, RED), 10, 10) == blank4

    def test_paste_returns_new_buffer(self, blank4):
        paste_region(blank4, RasterBuffer.filled(1, 1, RED), 0, 0)
        assert blank4.get_pixel(0, 0) == TRANSPARENT

    def test_clear_region(self, red8):
        result = clear_region(red8, SelectionRect(6, 6, 5, 5))
        assert result.get_pixel(7, 7) == TRANSPARENT
        assert result.get_pixel(6, 6) == TRANSPARENT
        assert result.get_pixel(5, 6) == RED
        assert red8.get_pixel(7, 7) == RED


class TestClipboard:

    def test_starts_empty(self):
        clipboard = Clipboard()
        assert clipboard.is_empty
        assert clipboard.content() is None
        assert clipboard.origin_rect is None

    def test_copy_is_isolated(self, red8):
        clipboard = Clipboard()
        clipboard.copy(red8, SelectionRect(0, 0, 8, 8))
        red8.set_pixel(0, 0, BLUE)
        content = clipboard.content()
        assert content.get_pixel(0, 0) == RED
        content.set_pixel(1, 1, BLUE)
        assert clipboard.content().get_pixel(1, 1) == RED

    def test_copy_overwrites(self, red8, blank4):
        clipboard = Clipboard()
        clipboard.copy(red8, SelectionRect(0, 0, 8, 8))
        clipboard.copy(blank4, SelectionRect(1, 1, 4, 4))
        assert clipboard.content() == blank4
        assert clipboard.origin_rect == SelectionRect(1, 1, 4, 4)

    def test_clear(self, red8):
        clipboard = Clipboard()
        clipboard.copy(red8, SelectionRect(0, 0, 8, 8))
        clipboard.clear()
        assert clipboard.is_empty
