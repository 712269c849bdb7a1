"""
Rich Line Renderer

Redraws a block of animated lines in place using Rich control codes.
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator, List, Optional, Sequence, TYPE_CHECKING

from rich.control import Control

from clog.progress.core.tracker import ProgressRenderer

if TYPE_CHECKING:
    from clog.output import Output

logger = logging.getLogger(__name__)

CLEAR_LINE = "\x1b[2K\r"


def cursor_up(n: int) -> str:
    return str(Control.move(0, -n)) if n > 0 else ""


class RichLineRenderer(ProgressRenderer):
    """
    In-place line renderer.

    The cursor rests at the end of the last drawn line; each draw moves back
    to the first line of the block, clears and rewrites every line. A single
    line is redrawn with a plain clear-line sequence.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._output: Optional["Output"] = None
        self._drawn = 0

    def is_available(self) -> bool:
        """Check if Rich is available."""
        try:
            from rich.console import Console
            return True
        except ImportError:
            return False

    def start(self, output: "Output") -> None:
        with self._lock:
            self._output = output
            self._drawn = 0
            output.hide_cursor()

    def draw(self, lines: Sequence[str]) -> None:
        with self._lock:
            if self._output is None:
                return
            frame: List[str] = [cursor_up(self._drawn - 1)]
            frame.append("\n".join(CLEAR_LINE + line for line in lines))
            # A shrinking block leaves stale lines below; wipe them
            stale = self._drawn - len(lines)
            if stale > 0:
                frame.append("\n" + "\n".join(CLEAR_LINE for _ in range(stale)))
                frame.append(cursor_up(stale))
            self._output.write("".join(frame))
            self._drawn = len(lines)

    def clear(self) -> None:
        with self._lock:
            if self._output is None or self._drawn == 0:
                return
            n = self._drawn
            frame = cursor_up(n - 1) + "\n".join(CLEAR_LINE for _ in range(n)) + cursor_up(n - 1)
            self._output.write(frame)
            self._drawn = 0

    @contextmanager
    def suspend(self) -> Iterator[None]:
        """Clear the block and hold off draws from the render thread until the body ends."""
        with self._lock:
            self.clear()
            yield

    def stop(self) -> None:
        with self._lock:
            if self._output is None:
                return
            if self._drawn:
                self.clear()
            else:
                self._output.write(CLEAR_LINE)
            self._output.show_cursor()
            self._output = None
