"""Editing tools: the tool state machine and its phase types"""

from .tool_types import Tool, Key, Idle, Stroking, ShapePreview, Selecting, Selected, Moving
from .scratch import ScratchBuffer
from .tool_controller import ToolController

__all__ = [
    'Tool', 'Key', 'ToolController', 'ScratchBuffer',
    'Idle', 'Stroking', 'ShapePreview', 'Selecting', 'Selected', 'Moving',
]
