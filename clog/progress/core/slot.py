"""
Animation Slot Module

One animated line on screen: the animation, the task feeding it, the shared
message/field cells and the formatting snapshot it renders with.
"""

import datetime
import logging
import time
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from clog.fields import Elapsed, Field, replace_field
from clog.progress.core.state import ProgressUpdate, make_update

if TYPE_CHECKING:
    from clog.logger import LineFormatter
    from clog.progress.animations.base import Animation

logger = logging.getLogger(__name__)


class SlotStatus(Enum):
    """Lifecycle of a slot's task."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class SlotProgress:
    """Point-in-time copy of a slot's state."""
    current: int = 0
    total: Optional[int] = None
    status: SlotStatus = SlotStatus.PENDING
    message: str = ""
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class AnimationSlot:
    """
    A single animated line and the task behind it.

    The task runs on an executor thread and talks to the slot only through
    its ProgressUpdate handle; the render loop reads the same cells.
    """

    def __init__(
        self,
        animation: "Animation",
        message: str,
        fields: Sequence[Field],
        formatter: "LineFormatter",
        prefix: str,
        elapsed_key: str = "",
    ) -> None:
        """
        Initialize an animation slot.

        Args:
            animation: Animation drawing the line
            message: Initial message
            fields: Initial fields (logger fields merged with builder fields)
            formatter: Formatting snapshot for the slot's level
            prefix: Icon shown before the message
            elapsed_key: Field key refreshed with the elapsed time, "" for none
        """
        self.animation = animation
        self.formatter = formatter
        self.prefix = prefix
        self.elapsed_key = elapsed_key
        self.update, self._message, self._fields = make_update(animation.state, message, fields)

        self._lock = RLock()
        self._status = SlotStatus.PENDING
        self._error: Optional[BaseException] = None
        self._future: Optional[Future] = None
        self._start_time = time.monotonic()
        self._end_time: Optional[float] = None

    def start(self, executor: Executor, task: Callable[[ProgressUpdate], Any]) -> None:
        """Submit task to executor; the elapsed clock starts now."""
        with self._lock:
            self._start_time = time.monotonic()
            self._status = SlotStatus.RUNNING
            self._future = executor.submit(task, self.update)

    @property
    def future(self) -> Optional[Future]:
        return self._future

    @property
    def status(self) -> SlotStatus:
        with self._lock:
            return self._status

    @property
    def error(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    @property
    def finished(self) -> bool:
        with self._lock:
            return self._status in (SlotStatus.COMPLETED, SlotStatus.FAILED, SlotStatus.CANCELLED)

    @property
    def message(self) -> str:
        return self._message.load()

    def task_done(self) -> bool:
        return self._future is not None and self._future.done()

    def collect(self) -> None:
        """Record the outcome of a finished task."""
        with self._lock:
            if self.finished or not self.task_done():
                return
            self._end_time = time.monotonic()
            error = self._future.exception()
            if error is None:
                self._status = SlotStatus.COMPLETED
            else:
                self._error = error
                self._status = SlotStatus.FAILED
                logger.debug(f"Animation task failed: {error!r}")

    def abandon(self, error: BaseException) -> None:
        """Stop waiting for the task; its result is replaced by error."""
        with self._lock:
            if self.finished:
                return
            self._end_time = time.monotonic()
            self._error = error
            self._status = SlotStatus.CANCELLED

    def elapsed(self) -> float:
        with self._lock:
            end = self._end_time if self._end_time is not None else time.monotonic()
            return end - self._start_time

    def current_fields(self) -> List[Field]:
        """Fields as they should be shown now (elapsed and percent refreshed)."""
        fields = self._fields.load()
        if self.elapsed_key:
            fields = replace_field(fields, self.elapsed_key, Elapsed(self.elapsed()))
        return list(fields) + self.animation.extra_fields()

    def render(self, now: Optional[datetime.datetime] = None) -> str:
        """Render the slot's line; finished slots show a still line."""
        fields_text = self.formatter.fields(self.current_fields())
        if self.finished:
            return self.formatter.compose(
                self.prefix, self.formatter.message(self.message), fields_text, now
            )
        return self.animation.compose(
            self.formatter, self.prefix, self.message, fields_text, self.elapsed(), now
        )

    def render_static(self) -> str:
        """Plain line used when the output cannot animate."""
        return self.formatter.line(self.message, self.current_fields(), self.prefix)

    def snapshot(self) -> SlotProgress:
        state = self.animation.state
        with self._lock:
            return SlotProgress(
                current=state.progress.load() if state is not None else 0,
                total=state.total.load() if state is not None else None,
                status=self._status,
                message=self.message,
                fields={f.key: f.value for f in self.current_fields()},
                error=str(self._error) if self._error is not None else None,
            )
