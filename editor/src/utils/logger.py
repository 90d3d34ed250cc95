"""Global logging and error reporting utilities"""
import logging
import sys

from PyQt5.QtWidgets import QMessageBox

logger = logging.getLogger(__name__)

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def setup_logging(level=logging.WARNING):
    """Configure the root logger for console output"""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def report_error(e: Exception, user_message: str = None, title: str = "Error"):
    """Report a recoverable error to the user without raising

    Used for loader errors (unsupported media, corrupt files): the session
    keeps its previous state so there is nothing to unwind.
    """
    message = user_message if user_message else str(e)
    logger.warning("%s: %s", title, message)
    if _main_window:
        QMessageBox.warning(_main_window, title, message)


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle unexpected exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    logger.error(user_message or str(e), exc_info=e)

    message = user_message if user_message else str(e)
    if _main_window:
        QMessageBox.critical(_main_window, title, message)
    else:
        logger.error("ERROR POPUP (no window): %s - %s", title, message)

    raise e
