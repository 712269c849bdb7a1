"""
Core Progress Tracker Module

Render loop that drives one or more animation slots and delegates drawing
to a pluggable line renderer.
"""

import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import ALL_COMPLETED, wait
from contextlib import contextmanager
from enum import Enum
from threading import Event, RLock
from typing import Dict, Iterator, List, Optional, Sequence, TYPE_CHECKING

from clog.exceptions import AnimationCancelledError, AnimationTimeoutError
from clog.progress.core.slot import AnimationSlot, SlotStatus

if TYPE_CHECKING:
    from clog.logging import LoggingManager
    from clog.output import Output

logger = logging.getLogger(__name__)


class ProgressMode(Enum):
    """Progress display modes."""
    AUTO = "auto"      # Animate when the output has colours enabled
    ON = "on"          # Always animate
    OFF = "off"        # Print each line once, no animation


class ProgressRenderer(ABC):
    """Abstract base class for line renderers."""

    @abstractmethod
    def start(self, output: "Output") -> None:
        """Prepare the terminal for drawing."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Erase the drawn block and restore the terminal."""
        pass

    @abstractmethod
    def draw(self, lines: Sequence[str]) -> None:
        """Replace the previously drawn block with lines."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Erase the drawn block; the next draw starts from a fresh position."""
        pass

    @contextmanager
    def suspend(self) -> Iterator[None]:
        """
        Erase the block for the duration of the body so text can be written
        where it was. Renderers with a draw lock hold it until the body ends.
        """
        self.clear()
        yield

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this renderer is available in the current environment."""
        pass


class ProgressTracker:
    """
    Render loop for animation slots.

    Waits for the slots' tasks on the calling thread, redrawing every tick
    until all tasks are done, the cancel event is set or the timeout runs
    out. Integrates with LoggingManager so stdlib log records do not tear
    the animated block.
    """

    def __init__(
        self,
        output: "Output",
        mode: ProgressMode = ProgressMode.AUTO,
        renderer: Optional[ProgressRenderer] = None,
        logging_manager: Optional["LoggingManager"] = None,
    ) -> None:
        """
        Initialize progress tracker.

        Args:
            output: Output the slots are drawn on
            mode: Progress display mode
            renderer: Line renderer; auto-selected when None
            logging_manager: LoggingManager instance (default: the singleton)
        """
        self.output = output
        self.mode = mode
        self._lock = RLock()
        self._renderer = renderer
        self._slots: List[AnimationSlot] = []

        if logging_manager is None:
            from clog.logging import LoggingManager
            logging_manager = LoggingManager.get_instance()
        self._logging_manager = logging_manager

    def set_renderer(self, renderer: Optional[ProgressRenderer]) -> None:
        """Set the line renderer."""
        with self._lock:
            self._renderer = renderer

    def should_animate(self) -> bool:
        if self.mode == ProgressMode.OFF:
            return False
        if self.mode == ProgressMode.ON:
            return True
        return not self.output.colors_disabled

    def run(
        self,
        slots: Sequence[AnimationSlot],
        cancel: Optional[Event] = None,
        timeout: Optional[float] = None,
        delay: float = 0.0,
        visible: bool = True,
    ) -> None:
        """
        Drive slots until their tasks finish.

        Args:
            slots: Started slots, drawn top to bottom
            cancel: Event that stops waiting when set
            timeout: Seconds before giving up on unfinished tasks
            delay: Seconds to wait before showing anything; tasks finishing
                within the delay produce no output at all
            visible: False waits for the tasks without drawing anything
        """
        with self._lock:
            self._slots = list(slots)
        if not slots:
            return

        deadline = time.monotonic() + timeout if timeout is not None else None
        tick = min(slot.animation.tick_rate for slot in slots)

        if delay > 0:
            delay_end = time.monotonic() + delay
            while time.monotonic() < delay_end:
                if self._poll(slots, cancel, deadline, min(tick, delay_end - time.monotonic())):
                    return

        if not visible:
            while not self._poll(slots, cancel, deadline, tick):
                pass
            return

        if not self.should_animate():
            for slot in slots:
                self.output.write(slot.render_static() + "\n")
            while not self._poll(slots, cancel, deadline, tick):
                pass
            return

        self._animate(slots, cancel, deadline, tick)

    def _poll(
        self,
        slots: Sequence[AnimationSlot],
        cancel: Optional[Event],
        deadline: Optional[float],
        wait_for: float,
    ) -> bool:
        """Wait up to wait_for seconds; True once every slot is finished."""
        pending = [s.future for s in slots if not s.finished and s.future is not None]
        if pending:
            wait(pending, timeout=max(0.0, wait_for), return_when=ALL_COMPLETED)

        for slot in slots:
            slot.collect()

        if all(slot.finished for slot in slots):
            return True

        if cancel is not None and cancel.is_set():
            self._abandon(slots, AnimationCancelledError("animation cancelled"))
            return True
        if deadline is not None and time.monotonic() >= deadline:
            self._abandon(slots, AnimationTimeoutError("animation deadline exceeded"))
            return True
        return False

    def _abandon(self, slots: Sequence[AnimationSlot], error: BaseException) -> None:
        for slot in slots:
            slot.abandon(error)
        logger.debug(f"Stopped waiting for {len(slots)} slot(s): {error}")

    def _animate(
        self,
        slots: Sequence[AnimationSlot],
        cancel: Optional[Event],
        deadline: Optional[float],
        tick: float,
    ) -> None:
        renderer = self._renderer or self._auto_select_renderer()
        self.output.refresh_width()

        if renderer is not None:
            try:
                renderer.start(self.output)
                logger.debug(f"Started line renderer: {type(renderer).__name__}")
            except Exception as e:
                logger.warning(f"Failed to start line renderer: {e}")
                # Fall back to no display on renderer error
                renderer = None

        attached = renderer
        progress_mode = False
        if self._logging_manager is not None:
            try:
                self._logging_manager.enable_progress_mode(attached)
                progress_mode = True
            except Exception as e:
                logger.warning(f"Failed to enable logging progress mode: {e}")

        try:
            while not self._poll(slots, cancel, deadline, tick):
                if renderer is None:
                    continue
                try:
                    renderer.draw([slot.render() for slot in slots])
                except Exception as e:
                    logger.warning(f"Line renderer draw failed: {e}")
                    renderer = None
        finally:
            if attached is not None:
                try:
                    attached.stop()
                except Exception as e:
                    logger.warning(f"Error stopping line renderer: {e}")
            if progress_mode:
                self._logging_manager.disable_progress_mode(attached)

    def _auto_select_renderer(self) -> Optional[ProgressRenderer]:
        """Select the renderer configured as preferred, or the best available one."""
        try:
            from clog.progress.config import auto_select_renderer

            renderer = auto_select_renderer()
            if renderer is None:
                logger.warning("No suitable line renderer available")
            return renderer
        except Exception as e:
            logger.error(f"Failed to auto-select renderer: {e}")
            return None

    def get_summary(self) -> Dict[int, Dict]:
        """Get summary of all slots, keyed by line index."""
        with self._lock:
            summary = {}
            for index, slot in enumerate(self._slots):
                progress = slot.snapshot()
                summary[index] = {
                    'status': progress.status.value,
                    'current': progress.current,
                    'total': progress.total,
                    'message': progress.message,
                    'error': progress.error,
                    'fields': progress.fields,
                }
            return summary

    def has_failures(self) -> bool:
        """Check if any slot failed or was abandoned."""
        with self._lock:
            return any(
                slot.status in (SlotStatus.FAILED, SlotStatus.CANCELLED)
                for slot in self._slots
            )

    def is_complete(self) -> bool:
        """Check if all slots completed successfully."""
        with self._lock:
            if not self._slots:
                return False
            return all(slot.status == SlotStatus.COMPLETED for slot in self._slots)
