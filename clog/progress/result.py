"""
Animation Results

Outcome of an animated task, turned into a final log entry on send().
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, TYPE_CHECKING

from clog.exceptions import GroupError
from clog.fields import Field, fields_from_kwargs, merge_fields
from clog.levels import Level

if TYPE_CHECKING:
    from clog.logger import Logger
    from clog.progress.core.slot import AnimationSlot

logger = logging.getLogger(__name__)


class TaskResult(ABC):
    """
    Common result behaviour: choose level, message and prefix for the final
    entry, then write it with send().

    Setters return the result so calls chain::

        err = result.on_success_message("Done").on_error_level(Level.WARN).send()
    """

    def __init__(self, clog_logger: "Logger", success_level: Level = Level.INFO) -> None:
        self._logger = clog_logger
        self._success_level = success_level
        self._success_msg: Optional[str] = None
        self._error_level = Level.ERROR
        self._error_msg: Optional[str] = None
        self._prefix: Optional[str] = None
        self._fields: List[Field] = []

    @property
    @abstractmethod
    def error(self) -> Optional[BaseException]:
        """The task error, or None on success."""
        pass

    def _default_message(self) -> str:
        return ""

    def _base_fields(self) -> Sequence[Field]:
        return []

    def field(self, key: str, value: Any) -> "TaskResult":
        self._fields.append(Field(key, value))
        return self

    def with_fields(self, **fields: Any) -> "TaskResult":
        self._fields.extend(fields_from_kwargs(fields))
        return self

    def on_error_level(self, level: Level) -> "TaskResult":
        self._error_level = level
        return self

    def on_error_message(self, message: str) -> "TaskResult":
        """Use message on failure; the error itself goes to an "error" field."""
        self._error_msg = message
        return self

    def on_success_level(self, level: Level) -> "TaskResult":
        self._success_level = level
        return self

    def on_success_message(self, message: str) -> "TaskResult":
        self._success_msg = message
        return self

    def prefix(self, prefix: str) -> "TaskResult":
        """Prefix for the final entry instead of the level's emoji."""
        self._prefix = prefix
        return self

    def send(self) -> Optional[BaseException]:
        """
        Log the outcome and return the task's error (None on success).

        Success logs the message at the success level. Failure logs at the
        error level, either the error text or the custom error message with
        the error attached as a field.
        """
        err = self.error
        fields = merge_fields(self._base_fields(), self._fields)

        if err is None:
            message = self._success_msg if self._success_msg is not None else self._default_message()
            self._logger.emit(self._success_level, message, fields, self._prefix)
        elif self._error_msg is not None:
            fields = merge_fields(fields, [Field("error", err)])
            self._logger.emit(self._error_level, self._error_msg, fields, self._prefix)
        else:
            self._logger.emit(self._error_level, str(err) or type(err).__name__, fields, self._prefix)
        return err

    def err(self) -> Optional[BaseException]:
        """Alias of send()."""
        return self.send()

    def msg(self, message: str) -> Optional[BaseException]:
        """Set the success message and send()."""
        self._success_msg = message
        return self.send()

    def silent(self) -> Optional[BaseException]:
        """Return the error without logging anything."""
        return self.error


class WaitResult(TaskResult):
    """Result of a single animated task."""

    def __init__(self, slot: "AnimationSlot", clog_logger: "Logger", success_level: Level = Level.INFO) -> None:
        super().__init__(clog_logger, success_level)
        self._slot = slot

    @property
    def error(self) -> Optional[BaseException]:
        return self._slot.error

    @property
    def elapsed(self) -> float:
        """Seconds the task ran (or until it was abandoned)."""
        return self._slot.elapsed()

    def _default_message(self) -> str:
        # The last message the task published
        return self._slot.message

    def _base_fields(self) -> Sequence[Field]:
        return self._slot.current_fields()


class GroupResult(TaskResult):
    """Result of a whole group; failures are joined into a GroupError."""

    def __init__(self, slots: Sequence["AnimationSlot"], clog_logger: "Logger") -> None:
        super().__init__(clog_logger, Level.INFO)
        self._slots = list(slots)

    @property
    def errors(self) -> List[BaseException]:
        return [slot.error for slot in self._slots if slot.error is not None]

    @property
    def error(self) -> Optional[BaseException]:
        errors = self.errors
        if not errors:
            return None
        return GroupError(errors)
