"""
Progress State

Shared cells through which a running task reports progress to the render
loop. Each cell is individually atomic; readers may observe the progress
and total cells from slightly different moments, which the bar renderer
tolerates by clamping.
"""

import logging
from threading import Lock
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from clog.fields import Field, fields_from_kwargs, merge_fields

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AtomicInt:
    """Integer cell with atomic load/store."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: int = 0) -> None:
        self._lock = Lock()
        self._value = value

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value


class AtomicRef(Generic[T]):
    """Reference cell with atomic load/store, used for message and fields snapshots."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: T) -> None:
        self._lock = Lock()
        self._value = value

    def load(self) -> T:
        with self._lock:
            return self._value

    def store(self, value: T) -> None:
        with self._lock:
            self._value = value


class ProgressState:
    """
    The progress/total cell pair of one bar.

    The constructor clamps a non-positive total to 1.
    """

    def __init__(self, total: int) -> None:
        self.progress = AtomicInt(0)
        self.total = AtomicInt(total if total > 0 else 1)

    def snapshot(self):
        """Return (current, total) as read now; the pair is not read atomically."""
        return self.progress.load(), self.total.load()


class ProgressUpdate:
    """
    Handle given to a running task for reporting progress.

    Bar handles clamp progress into [0, total] and keep the total positive.
    Handles of non-bar animations (no state) ignore progress calls. Message
    and field changes are staged on the handle and published with send().

    All setters return the handle so calls can be chained::

        update.set_total(len(items)).set_progress(0)
        update.msg("Copying").field("file", name).send()
    """

    def __init__(
        self,
        state: Optional[ProgressState] = None,
        message: Optional[AtomicRef[str]] = None,
        fields: Optional[AtomicRef[List[Field]]] = None,
    ) -> None:
        self._state = state
        self._message_ref = message
        self._fields_ref = fields
        self._base: List[Field] = list(fields.load()) if fields is not None else []
        self._msg: Optional[str] = message.load() if message is not None else None
        self._pending: List[Field] = []

    @classmethod
    def detached(cls) -> "ProgressUpdate":
        """A handle connected to nothing; every call is a no-op."""
        return cls()

    def set_progress(self, current: int) -> "ProgressUpdate":
        """Set the current progress, clamped into [0, total]."""
        if self._state is not None:
            total = self._state.total.load()
            self._state.progress.store(max(0, min(current, total)))
        return self

    def set_total(self, total: int) -> "ProgressUpdate":
        """
        Set the total; values <= 0 become 1.

        The stored progress is left as is even if it now exceeds the total;
        rendering clamps it.
        """
        if self._state is not None:
            self._state.total.store(total if total > 0 else 1)
        return self

    def increment(self, step: int = 1) -> "ProgressUpdate":
        """Advance progress by step (clamped like set_progress)."""
        if self._state is not None:
            self.set_progress(self._state.progress.load() + step)
        return self

    def msg(self, message: str) -> "ProgressUpdate":
        """Stage a new message; shown after send()."""
        self._msg = message
        return self

    def field(self, key: str, value: Any) -> "ProgressUpdate":
        """Stage a field; shown after send()."""
        self._pending.append(Field(key, value))
        return self

    def with_fields(self, **fields: Any) -> "ProgressUpdate":
        self._pending.extend(fields_from_kwargs(fields))
        return self

    def send(self) -> None:
        """Publish the staged message and fields to the render loop."""
        if self._message_ref is not None and self._msg is not None:
            self._message_ref.store(self._msg)
        if self._fields_ref is not None:
            self._base = merge_fields(self._base, self._pending)
            self._fields_ref.store(list(self._base))
        self._pending = []

    @property
    def current(self) -> int:
        return self._state.progress.load() if self._state is not None else 0

    @property
    def total(self) -> int:
        return self._state.total.load() if self._state is not None else 0


def make_update(
    state: Optional[ProgressState],
    message: str,
    fields: Sequence[Field],
):
    """Create the message/fields cells and the task handle bound to them."""
    message_ref: AtomicRef[str] = AtomicRef(message)
    fields_ref: AtomicRef[List[Field]] = AtomicRef(list(fields))
    return ProgressUpdate(state, message_ref, fields_ref), message_ref, fields_ref
