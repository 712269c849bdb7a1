"""
tqdm Line Renderer

Fallback renderer that shows each animated line as a tqdm status line,
stacked with tqdm's own positioning.
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator, List, Optional, Sequence, TYPE_CHECKING

try:
    from tqdm import tqdm
    TQDM_AVAILABLE = True
except ImportError:
    TQDM_AVAILABLE = False
    tqdm = None

from clog.progress.core.tracker import ProgressRenderer

if TYPE_CHECKING:
    from clog.output import Output

logger = logging.getLogger(__name__)


class TqdmLineRenderer(ProgressRenderer):
    """
    tqdm-based line renderer for compatibility.

    Features:
    - One tqdm bar per line, formatted to show only the description
    - Stacked lines via tqdm's position argument
    - tqdm handles cursor movement and cleanup (leave=False)
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._output: Optional["Output"] = None
        self._bars: List["tqdm"] = []

    def is_available(self) -> bool:
        """Check if tqdm is available."""
        return TQDM_AVAILABLE

    def start(self, output: "Output") -> None:
        with self._lock:
            self._output = output
            self._bars = []

    def _create_line(self, position: int) -> "tqdm":
        return tqdm(
            total=None,
            bar_format="{desc}",
            position=position,
            leave=False,
            file=self._output.stream,
            dynamic_ncols=True,
        )

    def draw(self, lines: Sequence[str]) -> None:
        if not TQDM_AVAILABLE:
            return
        with self._lock:
            if self._output is None:
                return
            while len(self._bars) < len(lines):
                self._bars.append(self._create_line(len(self._bars)))
            for pbar, line in zip(self._bars, lines):
                pbar.set_description_str(line, refresh=True)

    def clear(self) -> None:
        with self._lock:
            for pbar in self._bars:
                try:
                    pbar.clear()
                except Exception as e:
                    logger.debug(f"tqdm clear failed: {e}")

    @contextmanager
    def suspend(self) -> Iterator[None]:
        """Clear the block and hold off draws from the render thread until the body ends."""
        with self._lock:
            self.clear()
            yield

    def stop(self) -> None:
        with self._lock:
            # Close all status lines
            for pbar in self._bars:
                try:
                    pbar.close()
                except Exception as e:
                    logger.debug(f"tqdm close failed: {e}")
            self._bars = []
            self._output = None


def is_tqdm_available() -> bool:
    """Check if tqdm library is available."""
    return TQDM_AVAILABLE
