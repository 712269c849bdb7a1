"""
Logging Module - Progress-Aware Logging

Routes stdlib ``logging`` records through clog's line format and keeps them
from tearing animated output.

Usage:
    from clog.logging import setup_logging

    manager = setup_logging(console_level=logging.INFO)

    # Progress mode is entered automatically by the render loop
    with manager.progress_mode():
        # Warnings buffered, info suppressed, errors printed above the block
        pass
"""

from clog.logging.manager import LoggingManager, setup_logging
from clog.logging.handlers import ClogFormatter, ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'setup_logging',
    'ClogFormatter',
    'ProgressAwareConsoleHandler',
]
