"""
Progress-Aware Console Handler

Bridges stdlib logging records into clog lines and keeps them from tearing
an animated block while one is on screen.
"""

import logging
import sys
from typing import List, Optional, TYPE_CHECKING

from clog.fields import Field, fields_from_kwargs
from clog.levels import from_stdlib

if TYPE_CHECKING:
    from clog.logger import Logger
    from clog.logging.manager import LoggingManager

CLOG_FIELDS_ATTR = "clog_fields"


class ClogFormatter(logging.Formatter):
    """
    Formats stdlib records as clog lines.

    Structured fields come from the ``clog_fields`` extra (a dict); an
    attached exception becomes the ``error`` field::

        logging.getLogger(__name__).info("saved", extra={"clog_fields": {"id": 7}})
    """

    def __init__(self, clog_logger: Optional["Logger"] = None) -> None:
        super().__init__()
        self._clog_logger = clog_logger

    @property
    def clog_logger(self) -> "Logger":
        if self._clog_logger is None:
            from clog.logger import get_default
            return get_default()
        return self._clog_logger

    def record_fields(self, record: logging.LogRecord) -> List[Field]:
        fields = fields_from_kwargs(dict(getattr(record, CLOG_FIELDS_ATTR, None) or {}))
        if record.exc_info and record.exc_info[1] is not None:
            fields.append(Field("error", record.exc_info[1]))
        return fields

    def format(self, record: logging.LogRecord) -> str:
        return self.clog_logger.format_line(
            from_stdlib(record.levelno),
            record.getMessage(),
            self.record_fields(record),
        )


class ProgressAwareConsoleHandler(logging.StreamHandler):
    """
    Console handler that respects progress mode.

    When progress mode is active:
    - ERROR messages are displayed immediately above the animated block
    - WARNING messages are buffered for later display
    - INFO/DEBUG messages are suppressed

    When progress mode is inactive:
    - Normal console logging behavior (all levels displayed)
    """

    def __init__(self, stream=None, logging_manager: Optional["LoggingManager"] = None) -> None:
        """
        Initialize progress-aware console handler.

        Args:
            stream: Output stream (default: sys.stdout)
            logging_manager: LoggingManager instance for coordination
        """
        super().__init__(stream or sys.stdout)
        self._logging_manager = logging_manager
        self._progress_mode = False

    @property
    def progress_mode(self) -> bool:
        return self._progress_mode

    def set_progress_mode(self, enabled: bool) -> None:
        """Enable or disable progress mode."""
        self._progress_mode = enabled

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record with progress-aware handling.

        Args:
            record: LogRecord to emit
        """
        try:
            if not self._progress_mode:
                super().emit(record)
                return

            if record.levelno >= logging.ERROR:
                if self._logging_manager:
                    self._logging_manager.display_critical_error(record)
                else:
                    self._emit_to_stderr(record)

            elif record.levelno >= logging.WARNING:
                if self._logging_manager:
                    self._logging_manager.buffer_warning(record)

            # INFO and DEBUG: suppressed while animating (still go to file)

        except Exception:
            self.handleError(record)

    def _emit_to_stderr(self, record: logging.LogRecord) -> None:
        """Write the record to stderr when no manager is attached."""
        try:
            sys.stderr.write(f"{self.format(record)}\n")
            sys.stderr.flush()
        except Exception:
            pass  # Avoid cascading errors

    def handleError(self, record: logging.LogRecord) -> None:
        """Report emit() failures without disturbing the animated block."""
        try:
            if self._progress_mode:
                sys.stderr.write("Logging error occurred\n")
                sys.stderr.flush()
            else:
                super().handleError(record)
        except Exception:
            pass
