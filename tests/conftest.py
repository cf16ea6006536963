"""
Shared fixtures for Pixel Sprite Editor tests.

Provides buffers, layer stacks with private id generators, and editor
sessions/controllers that do not share ids between tests.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Qt widgets in tests never need a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from models.raster_buffer import RasterBuffer
from session import EditorSession, EditorOptions
from tools import ToolController
from utils.id_generator import IdGenerator


RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


# ── Buffers ─────────────────────────────────────────────────────────────

@pytest.fixture
def blank4():
    return RasterBuffer.blank(4, 4)


@pytest.fixture
def blank8():
    return RasterBuffer.blank(8, 8)


@pytest.fixture
def red8():
    return RasterBuffer.filled(8, 8, RED)


@pytest.fixture
def gradient():
    """5x3 buffer where every pixel is distinct: (x*40, y*80, x+y, 255)"""
    buffer = RasterBuffer.blank(5, 3)
    for y in range(3):
        for x in range(5):
            buffer.set_pixel(x, y, (x * 40, y * 80, x + y, 255))
    return buffer


# ── Ids ─────────────────────────────────────────────────────────────────

@pytest.fixture
def layer_ids():
    return IdGenerator('layer')


@pytest.fixture
def sprite_ids():
    return IdGenerator('sprite')


# ── Session and tools ───────────────────────────────────────────────────

@pytest.fixture
def session(layer_ids, sprite_ids):
    """Session with a blank 4x4 tile open and empty history"""
    session = EditorSession(options=EditorOptions(), layer_ids=layer_ids, sprite_ids=sprite_ids)
    session.begin_editing(RasterBuffer.blank(4, 4))
    return session


@pytest.fixture
def controller(session):
    return ToolController(session)
