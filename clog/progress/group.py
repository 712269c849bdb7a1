"""
Animation Group

Runs several animated tasks concurrently and draws them as one block of
lines, top to bottom in the order they were added.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Event, RLock
from typing import Any, Callable, List, Optional, TYPE_CHECKING

from clog.exceptions import GroupClosedError
from clog.progress.core.slot import AnimationSlot
from clog.progress.core.state import ProgressUpdate
from clog.progress.result import GroupResult, WaitResult
from clog.progress.utils import create_progress_tracker

if TYPE_CHECKING:
    from clog.logger import Logger
    from clog.progress.builder import AnimationBuilder

logger = logging.getLogger(__name__)

class GroupEntry:
    """A builder added to a group, waiting for its task."""

    def __init__(self, group: "Group", builder: "AnimationBuilder") -> None:
        self._group = group
        self._builder = builder

    def run(self, task: Callable[[], Any]) -> WaitResult:
        """Start task without a progress handle."""
        return self.progress(lambda _update: task())

    def progress(self, task: Callable[[ProgressUpdate], Any]) -> WaitResult:
        """
        Start task with a ProgressUpdate handle.

        The task starts immediately; the returned result is final once
        Group.wait() has returned.
        """
        slot = self._builder.build_slot()
        self._group._start(slot, task)
        return WaitResult(slot, self._builder.logger)


class Group:
    """
    Block of concurrent animations.

    Example::

        group = log.group(timeout=30)
        a = group.add(log.bar("Downloading", 100)).progress(download)
        b = group.add(log.spinner("Indexing")).run(index)
        group.wait().send()
        a.send()
        b.send()
    """

    def __init__(
        self,
        clog_logger: "Logger",
        cancel: Optional[Event] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.logger = clog_logger
        self.cancel = cancel
        self.timeout = timeout
        self._lock = RLock()
        self._slots: List[AnimationSlot] = []
        self._visible = False
        self._closed = False
        # One worker per entry so no task queues behind another
        self._executors: List[ThreadPoolExecutor] = []

    def add(self, builder: "AnimationBuilder") -> GroupEntry:
        """
        Add an animation to the block.

        Raises:
            GroupClosedError: If wait() was already called
        """
        with self._lock:
            if self._closed:
                raise GroupClosedError()
            if builder.logger.enabled(builder.level):
                self._visible = True
        return GroupEntry(self, builder)

    def _start(self, slot: AnimationSlot, task: Callable[[ProgressUpdate], Any]) -> None:
        with self._lock:
            if self._closed:
                raise GroupClosedError()
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="clog-group")
            self._executors.append(executor)
            self._slots.append(slot)
            slot.start(executor, task)

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def wait(self) -> GroupResult:
        """
        Draw every entry until all tasks finish, the cancel event is set or
        the timeout runs out.

        Returns:
            GroupResult whose error joins the failures of all entries

        Raises:
            GroupClosedError: If called a second time
        """
        with self._lock:
            if self._closed:
                raise GroupClosedError()
            self._closed = True
            slots = list(self._slots)
            visible = self._visible
            executors = list(self._executors)
        try:
            tracker = create_progress_tracker(self.logger.output)
            tracker.run(slots, cancel=self.cancel, timeout=self.timeout, visible=visible)
            if tracker.has_failures():
                logger.debug(f"Group finished with failures: {tracker.get_summary()}")
        finally:
            for executor in executors:
                executor.shutdown(wait=False)
        return GroupResult(slots, self.logger)
