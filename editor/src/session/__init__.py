"""Editor session: the editable state, its history, and its operations"""

from .options import EditorOptions
from .history_mixin import HistorySnapshot
from .editor_session import EditorSession

__all__ = ['EditorSession', 'EditorOptions', 'HistorySnapshot']
