"""
Logging Manager - Core Handler Management

Main LoggingManager class that routes stdlib logging through clog lines and
coordinates console output with animated blocks.
"""

import logging
import sys
import time
from contextlib import ExitStack, contextmanager
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from clog.logging.handlers import ClogFormatter, ProgressAwareConsoleHandler

if TYPE_CHECKING:
    from clog.logger import Logger
    from clog.progress.core.tracker import ProgressRenderer

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFERED_WARNINGS = 50


class LoggingManager:
    """
    Thread-safe logging manager with dynamic console handler control.

    While an animation is on screen (progress mode), console records would
    tear the redrawn block. The manager then buffers warnings, drops
    info/debug records from the console and prints errors above the block
    after clearing it. File logging is never affected.

    Features:
    - Reference-counted progress mode for nested or concurrent animations
    - Warning buffering with a bounded buffer
    - Critical error display between animation frames
    - Context manager support with guaranteed cleanup
    """

    _global_lock = RLock()
    _instance: Optional["LoggingManager"] = None

    def __init__(self) -> None:
        """Initialize logging manager with thread-safe state."""
        self._lock = RLock()
        self._clog_logger: Optional["Logger"] = None
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []

        # Progress mode state
        self._progress_mode_active = False
        self._progress_mode_count = 0
        self._renderers: List["ProgressRenderer"] = []

        # Message buffering
        self._buffered_warnings: List[Tuple[float, str, Dict[str, Any]]] = []
        self._max_buffered_messages = DEFAULT_MAX_BUFFERED_WARNINGS

        self._rich_console: Optional[Console] = None
        self._callback_lock = RLock()

    @classmethod
    def get_instance(cls) -> "LoggingManager":
        """Get or create singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (used by tests)."""
        with cls._global_lock:
            cls._instance = None

    @property
    def clog_logger(self) -> Optional["Logger"]:
        return self._clog_logger

    @property
    def console_handler(self) -> Optional[ProgressAwareConsoleHandler]:
        return self._console_handler

    def setup(
        self,
        clog_logger: Optional["Logger"] = None,
        console_level: int = logging.INFO,
        log_file: Optional[Path] = None,
    ) -> None:
        """
        Route stdlib logging through clog.

        Args:
            clog_logger: Logger whose format and output the console uses
                (default: the package default logger)
            console_level: Logging level for console output
            log_file: Optional file receiving every record at DEBUG
        """
        if clog_logger is None:
            from clog.logger import get_default
            clog_logger = get_default()

        from clog.progress.config import get_config

        with self._lock:
            self._clog_logger = clog_logger
            self._max_buffered_messages = get_config().max_buffered_warnings

            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)
            self._original_handlers = root_logger.handlers.copy()
            root_logger.handlers.clear()

            if log_file is not None:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._file_handler = logging.FileHandler(log_file)
                self._file_handler.setLevel(logging.DEBUG)
                self._file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
                root_logger.addHandler(self._file_handler)

            self._console_handler = ProgressAwareConsoleHandler(
                stream=clog_logger.output.stream,
                logging_manager=self,
            )
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(ClogFormatter(clog_logger))
            root_logger.addHandler(self._console_handler)

            logger.debug("Logging manager setup complete")

    def enable_progress_mode(self, renderer: Optional["ProgressRenderer"] = None) -> None:
        """
        Enable progress mode - suppress console logging.

        Thread-safe with reference counting for nested calls. The renderer,
        when given, is cleared before an error is printed so the error
        lands above the animated block.
        """
        with self._lock:
            self._progress_mode_count += 1
            if renderer is not None:
                self._renderers.append(renderer)

            if not self._progress_mode_active:
                self._progress_mode_active = True

                if self._console_handler:
                    self._console_handler.set_progress_mode(True)
                else:
                    logger.debug("No console handler installed; nothing to suppress")

                self._buffered_warnings.clear()
                logger.debug("Progress mode enabled - console logging suppressed")

    def disable_progress_mode(self, renderer: Optional["ProgressRenderer"] = None) -> None:
        """
        Disable progress mode - restore console logging.

        Only disables when all nested calls have completed, then displays
        any buffered warning messages.
        """
        with self._lock:
            if renderer is not None and renderer in self._renderers:
                self._renderers.remove(renderer)
            if self._progress_mode_count > 0:
                self._progress_mode_count -= 1

            if self._progress_mode_count == 0 and self._progress_mode_active:
                self._progress_mode_active = False

                if self._console_handler:
                    self._console_handler.set_progress_mode(False)

                self._display_buffered_warnings()
                logger.debug("Progress mode disabled - console logging restored")

    @contextmanager
    def progress_mode(self, renderer: Optional["ProgressRenderer"] = None) -> Iterator[None]:
        """
        Context manager for progress mode with guaranteed cleanup.

        Usage:
            with logging_manager.progress_mode():
                # Console logging suppressed
                pass
            # Console logging automatically restored
        """
        self.enable_progress_mode(renderer)
        try:
            yield
        finally:
            self.disable_progress_mode(renderer)

    def is_progress_mode_active(self) -> bool:
        """Check if progress mode is currently active."""
        with self._lock:
            return self._progress_mode_active

    @property
    def buffered_warnings(self) -> List[str]:
        with self._callback_lock:
            return [message for _, message, _ in self._buffered_warnings]

    def buffer_warning(self, record: logging.LogRecord) -> None:
        """
        Buffer a warning message for later display.

        Args:
            record: LogRecord to buffer
        """
        with self._callback_lock:
            if len(self._buffered_warnings) >= self._max_buffered_messages:
                self._buffered_warnings.pop(0)

            formatted_message = self._console_handler.format(record) if self._console_handler else str(record.msg)

            self._buffered_warnings.append((
                time.time(),
                formatted_message,
                {
                    'level': record.levelno,
                    'name': record.name,
                    'funcName': record.funcName,
                    'lineno': record.lineno
                }
            ))

    def display_critical_error(self, record: logging.LogRecord) -> None:
        """
        Display an error immediately while animating.

        Every attached renderer is suspended (cleared, draws held off) while
        the error is written; the render loop redraws the block below the
        error on its next tick.

        Args:
            record: LogRecord to display
        """
        with self._lock, ExitStack() as suspended:
            for renderer in list(self._renderers):
                try:
                    suspended.enter_context(renderer.suspend())
                except Exception as e:
                    logger.debug(f"Renderer suspend failed: {e}")

            try:
                if self._clog_logger is not None and self._console_handler is not None:
                    self._clog_logger.output.write(self._console_handler.format(record) + "\n")
                else:
                    self._display_rich_error(record)
            except Exception:
                self._display_fallback_error(record)

    def _display_rich_error(self, record: logging.LogRecord) -> None:
        """Display error as a Rich panel on stderr."""
        if not self._rich_console:
            self._rich_console = Console(stderr=True)

        error_text = Text()
        error_text.append("ERROR", style="bold red")
        if record.name:
            error_text.append(f" ({record.name})", style="dim red")
        error_text.append(f": {record.getMessage()}", style="red")
        error_text.append(f"\nLocation: {record.funcName}() line {record.lineno}", style="dim")

        panel = Panel(
            error_text,
            title="⚠️  Critical Error",
            border_style="red",
            padding=(0, 1),
            expand=False,
        )
        self._rich_console.print(panel)

    def _display_fallback_error(self, record: logging.LogRecord) -> None:
        """Fallback error display using plain text to stderr."""
        try:
            error_line = f"ERROR: {record.getMessage()}"
            if record.name:
                error_line += f" ({record.name})"
            error_line += f" [{record.funcName}:{record.lineno}]"
            sys.stderr.write(f"{error_line}\n")
            sys.stderr.flush()
        except Exception:
            pass

    def _write(self, text: str) -> None:
        if self._clog_logger is not None:
            self._clog_logger.output.write(text + "\n")
        else:
            print(text)

    def _display_buffered_warnings(self) -> None:
        """Display all buffered warning messages when progress mode ends."""
        with self._callback_lock:
            if not self._buffered_warnings:
                return

            try:
                self._write(f"⚠️  {len(self._buffered_warnings)} warning(s) occurred while animating:")
                for timestamp, message, details in self._buffered_warnings:
                    elapsed = time.time() - timestamp
                    self._write(f"[{elapsed:.1f}s ago] {message}")
            except Exception as e:
                logger.error(f"Failed to display buffered warnings: {e}")
            finally:
                self._buffered_warnings.clear()

    def cleanup(self) -> None:
        """
        Clean up logging manager resources.

        Restores the original root handlers and closes the file handler.
        """
        with self._lock:
            try:
                self._progress_mode_active = False
                self._progress_mode_count = 0
                self._renderers.clear()
                if self._console_handler:
                    self._console_handler.set_progress_mode(False)

                self._display_buffered_warnings()

                if self._console_handler is not None:
                    root_logger = logging.getLogger()
                    root_logger.handlers.clear()
                    root_logger.handlers.extend(self._original_handlers)
                    self._original_handlers = []
                    self._console_handler = None

                if self._file_handler:
                    self._file_handler.close()
                    self._file_handler = None

                logger.debug("Logging manager cleanup complete")

            except Exception as e:
                sys.stderr.write(f"Warning: Logging manager cleanup error: {e}\n")


def setup_logging(
    clog_logger: Optional["Logger"] = None,
    console_level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> LoggingManager:
    """
    Setup logging with progress-aware management.

    Args:
        clog_logger: Logger used to format console records
        console_level: Console logging level
        log_file: Optional log file path

    Returns:
        LoggingManager instance for advanced control
    """
    manager = LoggingManager.get_instance()
    manager.setup(clog_logger, console_level, log_file)
    return manager
