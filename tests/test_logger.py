"""
Tests for the UI error reporting helper.

Covers:
- Debug mode re-raises untouched
- Release mode logs before re-raising when no window is registered
"""
import logging

import pytest

from utils import logger as editor_logger


def test_debug_mode_reraises(monkeypatch):
    monkeypatch.setattr(editor_logger, 'DEBUG_MODE', True)
    error = ValueError("bad hex")
    with pytest.raises(ValueError) as info:
        editor_logger.loggerRaise(error, "Invalid color")
    assert info.value is error


def test_release_mode_logs_then_reraises(monkeypatch, caplog):
    monkeypatch.setattr(editor_logger, 'DEBUG_MODE', False)
    monkeypatch.setattr(editor_logger, '_main_window', None)
    with caplog.at_level(logging.ERROR, logger='Editor'):
        with pytest.raises(RuntimeError):
            editor_logger.loggerRaise(RuntimeError("arena busy"), "Tool action failed")
    messages = [record.getMessage() for record in caplog.records]
    assert any("Tool action failed" in m and "arena busy" in m for m in messages)
    assert any("No main window" in m for m in messages)
