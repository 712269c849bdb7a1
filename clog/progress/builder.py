"""
Animation Builder

Fluent configuration for a single animation, finished by wait() or
progress() which run a task while the animation is drawn.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Event
from typing import Any, Callable, List, Optional, TYPE_CHECKING

from clog.fields import Elapsed, Field, fields_from_kwargs, merge_fields
from clog.levels import Level, parse_level
from clog.progress.animations.bar import BarAnimation
from clog.progress.animations.base import Animation
from clog.progress.animations.pulse import PulseAnimation
from clog.progress.animations.shimmer import Direction, ShimmerAnimation
from clog.progress.animations.spinner import SpinnerAnimation, SpinnerType
from clog.progress.bar.style import BarStyle
from clog.progress.config import get_config
from clog.progress.core.slot import AnimationSlot
from clog.progress.core.state import ProgressUpdate
from clog.progress.result import WaitResult
from clog.progress.utils import create_progress_tracker

if TYPE_CHECKING:
    from clog.logger import Logger

logger = logging.getLogger(__name__)

DEFAULT_ELAPSED_KEY = "elapsed"


class AnimationBuilder:
    """
    Configures one animation before running it.

    Created by the logger's factory methods (``spinner``, ``bar``, ``pulse``,
    ``shimmer``); every setter returns the builder::

        err = log.spinner("Deploying").elapsed().wait(deploy).send()
    """

    def __init__(self, animation: Animation, msg: str, clog_logger: Optional["Logger"] = None) -> None:
        if clog_logger is None:
            from clog.logger import get_default
            clog_logger = get_default()
        self.animation = animation
        self.logger = clog_logger
        self._message = msg
        self._level = Level.INFO
        self._prefix: Optional[str] = None
        self._delay = 0.0
        self._fields: List[Field] = []
        self._elapsed_key = ""

    def after(self, delay: float) -> "AnimationBuilder":
        """Show nothing unless the task is still running after delay seconds."""
        self._delay = max(0.0, delay)
        return self

    def prefix(self, prefix: str) -> "AnimationBuilder":
        self._prefix = prefix
        return self

    def at_level(self, level) -> "AnimationBuilder":
        """Level the animated line is formatted (and filtered) at."""
        self._level = parse_level(level)
        return self

    def field(self, key: str, value: Any) -> "AnimationBuilder":
        self._fields.append(Field(key, value))
        return self

    def with_fields(self, **fields: Any) -> "AnimationBuilder":
        self._fields.extend(fields_from_kwargs(fields))
        return self

    def elapsed(self, key: str = DEFAULT_ELAPSED_KEY) -> "AnimationBuilder":
        """Show a live elapsed-time field under key."""
        self._elapsed_key = key
        self._fields.append(Field(key, Elapsed(0)))
        return self

    def style(self, style: BarStyle) -> "AnimationBuilder":
        """Bar style; only valid for bar animations."""
        if not isinstance(self.animation, BarAnimation):
            raise TypeError("style() applies to bar animations only")
        self.animation.style = style
        return self

    def spinner_type(self, spinner_type: SpinnerType) -> "AnimationBuilder":
        if not isinstance(self.animation, SpinnerAnimation):
            raise TypeError("spinner_type() applies to spinner animations only")
        self.animation.spinner_type = spinner_type
        return self

    def shimmer_direction(self, direction: Direction) -> "AnimationBuilder":
        if not isinstance(self.animation, ShimmerAnimation):
            raise TypeError("shimmer_direction() applies to shimmer animations only")
        self.animation.direction = direction
        return self

    def speed(self, speed: float) -> "AnimationBuilder":
        """Cycles per second for pulse and shimmer animations."""
        if not isinstance(self.animation, (PulseAnimation, ShimmerAnimation)):
            raise TypeError("speed() applies to pulse and shimmer animations only")
        self.animation.speed = speed
        return self

    @property
    def level(self) -> Level:
        return self._level

    @property
    def delay(self) -> float:
        return self._delay

    def build_slot(self) -> AnimationSlot:
        """Snapshot the builder and logger settings into a slot."""
        formatter = self.logger.line_formatter(self._level)
        prefix = self._prefix if self._prefix is not None else get_config().default_prefix
        fields = merge_fields(self.logger.fields, self._fields)
        return AnimationSlot(
            self.animation,
            self._message,
            fields,
            formatter,
            prefix,
            elapsed_key=self._elapsed_key,
        )

    def wait(
        self,
        task: Callable[[], Any],
        cancel: Optional[Event] = None,
        timeout: Optional[float] = None,
    ) -> WaitResult:
        """
        Run task while animating and return its result.

        Args:
            task: Callable without arguments; an exception it raises
                becomes the result's error
            cancel: Event that stops waiting when set
            timeout: Seconds before giving up on the task

        Returns:
            WaitResult; call send() on it to log the outcome
        """
        return self.progress(lambda _update: task(), cancel=cancel, timeout=timeout)

    def progress(
        self,
        task: Callable[[ProgressUpdate], Any],
        cancel: Optional[Event] = None,
        timeout: Optional[float] = None,
    ) -> WaitResult:
        """
        Run task with a ProgressUpdate handle while animating.

        The task runs on a worker thread. On cancel or timeout the result
        carries AnimationCancelledError or AnimationTimeoutError straight
        away; the worker itself is not interrupted.
        """
        slot = self.build_slot()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="clog-task")
        try:
            slot.start(executor, task)
            tracker = create_progress_tracker(self.logger.output)
            tracker.run(
                [slot],
                cancel=cancel,
                timeout=timeout,
                delay=self._delay,
                visible=self.logger.enabled(self._level),
            )
        finally:
            executor.shutdown(wait=False)
        return WaitResult(slot, self.logger)
