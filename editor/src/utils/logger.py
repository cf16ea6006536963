"""Logging setup and UI error reporting for the pixel editor"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Running from source raises straight through; packaged builds show a popup.
# PIXEL_EDITOR_DEBUG=0/1 overrides the detection.
_debug_env = os.environ.get('PIXEL_EDITOR_DEBUG')
DEBUG_MODE = (_debug_env != '0') if _debug_env is not None else not getattr(sys, 'frozen', False)

_main_window = None
_logger = logging.getLogger('Editor')


def configure_logging(verbose: bool = False):
    """Route all editor loggers to stdout.

    Warnings and errors only unless verbose, in which case every history
    step and layer/bank operation is logged.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_main_window(window):
    """Set the window that owns error popups"""
    global _main_window
    _main_window = window


def loggerRaise(e: Exception, user_message: str = None, title: str = "Editor Error"):
    """Report an exception that escaped a canvas or window handler.

    Args:
        e: The exception to report
        user_message: Short description of what the user was doing (optional)
        title: Title for the popup dialog

    Debug builds re-raise immediately. Release builds log the traceback,
    show a critical message box over the main window, then re-raise.
    """
    if DEBUG_MODE:
        raise e

    message = f"{user_message}\n\n{e}" if user_message else str(e)
    _logger.error(message, exc_info=e)

    if _main_window is not None:
        from PyQt5.QtWidgets import QMessageBox
        QMessageBox.critical(_main_window, title, message)
    else:
        _logger.error("No main window for popup: %s", title)

    raise e
