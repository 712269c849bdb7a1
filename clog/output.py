"""
Output Module

Terminal output wrapper: colour mode resolution, cached terminal width and
ANSI rendering through a Rich console.
"""

import io
import logging
import os
import sys
from enum import Enum
from threading import RLock
from typing import Optional, TextIO, Union

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS, Console
from rich.control import Control
from rich.style import Style

from clog.exceptions import InvalidColorModeError
from clog.hyperlink import hyperlinks_enabled

logger = logging.getLogger(__name__)

StyleType = Union[str, Style]


class ColorMode(Enum):
    """How colours are decided for an output."""
    AUTO = "auto"        # Colours when writing to a TTY and NO_COLOR is unset
    ALWAYS = "always"    # Force colours (truecolor) regardless of the stream
    NEVER = "never"      # Plain text only

    @classmethod
    def parse(cls, value: str) -> "ColorMode":
        """Parse a colour mode name (case-insensitive)."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidColorModeError(value) from None


def no_color_env_set() -> bool:
    """Whether the NO_COLOR convention variable is present."""
    return "NO_COLOR" in os.environ


def _isatty(stream: TextIO) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


class Output:
    """
    A writable terminal target.

    Wraps a text stream together with a Rich console configured for the
    chosen colour mode. Width lookups are cached because every animation
    tick asks for it.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        mode: ColorMode = ColorMode.AUTO,
        width: Optional[int] = None,
    ) -> None:
        """
        Initialize output.

        Args:
            stream: Target stream (default: sys.stdout)
            mode: Colour mode
            width: Fixed terminal width; overrides detection when set
        """
        self.stream = stream or sys.stdout
        self.mode = mode
        self._lock = RLock()
        self._fixed_width = width
        self._cached_width: Optional[int] = None
        self._is_tty = _isatty(self.stream)

        if mode == ColorMode.ALWAYS:
            self._colors_disabled = False
        elif mode == ColorMode.NEVER:
            self._colors_disabled = True
        else:
            self._colors_disabled = not self._is_tty or no_color_env_set()

        if self._colors_disabled:
            self.console = Console(
                file=self.stream, color_system=None, no_color=True,
                highlight=False, width=width,
            )
        elif mode == ColorMode.ALWAYS:
            self.console = Console(
                file=self.stream, force_terminal=True, color_system="truecolor",
                highlight=False, width=width,
            )
        else:
            self.console = Console(file=self.stream, highlight=False, width=width)

    @classmethod
    def stdout(cls, mode: ColorMode = ColorMode.AUTO) -> "Output":
        return cls(sys.stdout, mode)

    @classmethod
    def stderr(cls, mode: ColorMode = ColorMode.AUTO) -> "Output":
        return cls(sys.stderr, mode)

    @classmethod
    def buffer(cls, mode: ColorMode = ColorMode.NEVER, width: Optional[int] = 80) -> "Output":
        """Output over an in-memory buffer; read it back with getvalue()."""
        return cls(io.StringIO(), mode, width)

    def getvalue(self) -> str:
        """Return everything written so far when backed by a StringIO."""
        if isinstance(self.stream, io.StringIO):
            return self.stream.getvalue()
        return ""

    @property
    def is_tty(self) -> bool:
        return self._is_tty

    @property
    def colors_disabled(self) -> bool:
        return self._colors_disabled

    @property
    def color_system(self) -> Optional[ColorSystem]:
        """Colour system used for rendering, or None when colours are off."""
        if self._colors_disabled:
            return None
        if self.mode == ColorMode.ALWAYS:
            return ColorSystem.TRUECOLOR
        name = self.console.color_system
        return COLOR_SYSTEMS.get(name) if name else None

    def width(self) -> int:
        """
        Terminal width in columns.

        Returns 0 when the stream is not a terminal (and no fixed width was
        given), which callers treat as "unknown".
        """
        if self._fixed_width is not None:
            return self._fixed_width
        if not self._is_tty:
            return 0

        with self._lock:
            if self._cached_width is None:
                self._cached_width = self.console.size.width
            return self._cached_width

    def refresh_width(self) -> None:
        """Drop the cached width so the next width() call re-detects it."""
        with self._lock:
            self._cached_width = None

    def render(self, text: str, style: Optional[StyleType]) -> str:
        """
        Render text with a style into an ANSI string.

        Args:
            text: Plain text
            style: Rich Style or style definition; None leaves text untouched

        Returns:
            Styled text, or the text itself when colours are disabled
        """
        if not text or style is None or self._colors_disabled:
            return text
        if isinstance(style, str):
            style = Style.parse(style)
        return style.render(text, color_system=self.color_system)

    def hyperlink(self, url: str, text: str) -> str:
        """
        Wrap text in an OSC 8 hyperlink to url.

        Plain text is returned when colours are disabled for this output or
        hyperlinks are switched off globally.
        """
        if not text or self._colors_disabled or not hyperlinks_enabled():
            return text
        return Style(link=url).render(text, color_system=self.color_system)

    def write(self, text: str) -> None:
        """Write text and flush."""
        with self._lock:
            self.stream.write(text)
            self.stream.flush()

    def hide_cursor(self) -> None:
        if not self._colors_disabled:
            self.write(str(Control.show_cursor(False)))

    def show_cursor(self) -> None:
        if not self._colors_disabled:
            self.write(str(Control.show_cursor(True)))
