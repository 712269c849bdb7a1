"""
Structured Logger

Leveled, field-carrying console logger. Child loggers derived with
``with_()`` copy the configuration and share the parent's output lock so
lines written from related loggers never interleave.
"""

import datetime
import logging
import sys
from enum import Enum
from threading import RLock
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TYPE_CHECKING

from clog.color import ColorStop
from clog.fields import Field, QuoteMode, fields_from_kwargs, format_fields, merge_fields
from clog.levels import LEVEL_LABELS, LEVEL_PREFIXES, Level, parse_level
from clog.output import Output
from clog.styles import Styles, default_styles

if TYPE_CHECKING:
    from threading import Event
    from clog.progress.builder import AnimationBuilder
    from clog.progress.group import Group
    from clog.progress.animations.spinner import SpinnerType

logger = logging.getLogger(__name__)


class Part(Enum):
    """Segments of a log line, in configurable order."""
    TIMESTAMP = "timestamp"
    LEVEL = "level"
    PREFIX = "prefix"
    MESSAGE = "message"
    FIELDS = "fields"


DEFAULT_PARTS = (Part.TIMESTAMP, Part.LEVEL, Part.PREFIX, Part.MESSAGE, Part.FIELDS)
DEFAULT_TIME_FORMAT = "%H:%M:%S"


def build_line(order: Sequence[Part], parts: Mapping[Part, str]) -> str:
    """Join the non-empty parts in the given order with single spaces."""
    return " ".join(parts[p] for p in order if parts.get(p))


class LineFormatter:
    """
    Immutable snapshot of a logger's formatting settings for one level.

    Render loops take one snapshot when they start so that every tick
    formats consistently without touching the logger's lock.
    """

    def __init__(
        self,
        level: Level,
        output: Output,
        label: str,
        prefix: str,
        parts: Sequence[Part],
        report_timestamp: bool,
        time_format: str,
        styles: Styles,
        quote_mode: QuoteMode,
        style_fields: bool,
    ) -> None:
        self.level = level
        self.output = output
        self.prefix = prefix
        self.parts = tuple(parts)
        self.report_timestamp = report_timestamp
        self.time_format = time_format
        self.styles = styles
        self.quote_mode = quote_mode
        self.style_fields = style_fields
        self.label = output.render(label, styles.levels.get(level))

    @property
    def colored(self) -> bool:
        return not self.output.colors_disabled

    def timestamp(self, now: Optional[datetime.datetime] = None) -> str:
        if not self.report_timestamp:
            return ""
        now = now or datetime.datetime.now()
        return self.output.render(now.strftime(self.time_format), self.styles.timestamp)

    def message(self, msg: str) -> str:
        """Message text with the level's message style applied."""
        return self.output.render(msg, self.styles.messages.get(self.level))

    def fields(self, fields: Sequence[Field]) -> str:
        return format_fields(
            fields,
            self.styles,
            self.output.render,
            quote_mode=self.quote_mode,
            colored=self.colored and self.style_fields,
            link=self.output.hyperlink,
        )

    def compose(
        self,
        prefix: str,
        message: str,
        fields_text: str,
        now: Optional[datetime.datetime] = None,
    ) -> str:
        """Assemble a line from already rendered message and fields text."""
        return build_line(self.parts, {
            Part.TIMESTAMP: self.timestamp(now),
            Part.LEVEL: self.label,
            Part.PREFIX: prefix,
            Part.MESSAGE: message,
            Part.FIELDS: fields_text,
        })

    def line(
        self,
        msg: str,
        fields: Sequence[Field] = (),
        prefix: Optional[str] = None,
        now: Optional[datetime.datetime] = None,
    ) -> str:
        """Format a complete log line."""
        return self.compose(
            self.prefix if prefix is None else prefix,
            self.message(msg),
            self.fields(fields),
            now,
        )


class Logger:
    """
    Console logger with levels, fields and animated progress indicators.

    Thread-safe: configuration and writes are guarded by an RLock that is
    shared with every child created through with_() / with_prefix().
    """

    def __init__(
        self,
        output: Optional[Output] = None,
        level: Level = Level.INFO,
        fields: Optional[Sequence[Field]] = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            output: Target output (default: stdout, auto colour)
            level: Minimum level that is written
            fields: Fields attached to every entry
        """
        self._lock = RLock()
        self._output = output or Output.stdout()
        self._level = level
        self._fields: List[Field] = list(fields or [])
        self._prefix: Optional[str] = None
        self._labels: Dict[Level, str] = dict(LEVEL_LABELS)
        self._prefixes: Dict[Level, str] = dict(LEVEL_PREFIXES)
        self._parts: List[Part] = list(DEFAULT_PARTS)
        self._report_timestamp = False
        self._time_format = DEFAULT_TIME_FORMAT
        self._styles = default_styles()
        self._quote_mode = QuoteMode.AUTO
        self._field_style_level = Level.INFO
        self._exit_func: Callable[[int], Any] = sys.exit

    # Configuration

    @property
    def level(self) -> Level:
        with self._lock:
            return self._level

    @property
    def output(self) -> Output:
        with self._lock:
            return self._output

    @property
    def fields(self) -> List[Field]:
        with self._lock:
            return list(self._fields)

    def set_level(self, level) -> None:
        """Set the minimum level; accepts a Level, number or name."""
        level = parse_level(level)
        with self._lock:
            self._level = level

    def set_output(self, output: Output) -> None:
        with self._lock:
            self._output = output

    def set_styles(self, styles: Styles) -> None:
        with self._lock:
            self._styles = styles

    def set_report_timestamp(self, enabled: bool) -> None:
        with self._lock:
            self._report_timestamp = enabled

    def set_time_format(self, time_format: str) -> None:
        with self._lock:
            self._time_format = time_format

    def set_parts(self, *parts: Part) -> None:
        """Set the order of line segments; omitted parts are hidden."""
        with self._lock:
            self._parts = list(parts) if parts else list(DEFAULT_PARTS)

    def set_quote_mode(self, mode: QuoteMode) -> None:
        with self._lock:
            self._quote_mode = mode

    def set_field_style_level(self, level: Level) -> None:
        """Entries below this level render their fields without colour."""
        with self._lock:
            self._field_style_level = level

    def set_labels(self, labels: Mapping[Level, str]) -> None:
        with self._lock:
            self._labels.update(labels)

    def set_prefixes(self, prefixes: Mapping[Level, str]) -> None:
        with self._lock:
            self._prefixes.update(prefixes)

    def set_exit_func(self, func: Callable[[int], Any]) -> None:
        """Function called with exit code 1 after a FATAL entry."""
        with self._lock:
            self._exit_func = func

    # Children

    def _clone(self) -> "Logger":
        with self._lock:
            child = Logger.__new__(Logger)
            child.__dict__.update(self.__dict__)
            child._fields = list(self._fields)
            child._labels = dict(self._labels)
            child._prefixes = dict(self._prefixes)
            child._parts = list(self._parts)
            # Shared on purpose: parent and child serialise through one lock
            child._lock = self._lock
            return child

    def with_(self, **fields: Any) -> "Logger":
        """Child logger carrying extra fields on every entry."""
        child = self._clone()
        child._fields = merge_fields(child._fields, fields_from_kwargs(fields))
        return child

    def with_prefix(self, prefix: str) -> "Logger":
        """Child logger whose entries use a fixed prefix instead of the level emoji."""
        child = self._clone()
        child._prefix = prefix
        return child

    # Formatting

    def _label(self, level: Level) -> str:
        width = max(len(label) for label in self._labels.values())
        return self._labels.get(level, level.name[:3]).rjust(width)

    def line_formatter(self, level: Level) -> LineFormatter:
        """Snapshot of the formatting settings for entries at level."""
        with self._lock:
            return LineFormatter(
                level=level,
                output=self._output,
                label=self._label(level),
                prefix=self._prefix if self._prefix is not None else self._prefixes.get(level, ""),
                parts=self._parts,
                report_timestamp=self._report_timestamp,
                time_format=self._time_format,
                styles=self._styles,
                quote_mode=self._quote_mode,
                style_fields=level >= self._field_style_level,
            )

    def format_line(
        self,
        level: Level,
        msg: str,
        fields: Sequence[Field] = (),
        prefix: Optional[str] = None,
    ) -> str:
        """Format an entry (logger fields first, then entry fields) without writing it."""
        with self._lock:
            merged = merge_fields(self._fields, fields)
            return self.line_formatter(level).line(msg, merged, prefix)

    def enabled(self, level: Level) -> bool:
        with self._lock:
            return level >= self._level

    # Entries

    def emit(
        self,
        level: Level,
        msg: str,
        fields: Sequence[Field] = (),
        prefix: Optional[str] = None,
    ) -> None:
        """
        Write one entry.

        Args:
            level: Entry level; entries below the logger level are dropped
            msg: Message text
            fields: Entry fields, appended after the logger's own fields
            prefix: Prefix override for this entry
        """
        with self._lock:
            if level < self._level:
                return
            line = self.format_line(level, msg, fields, prefix)
            self._output.write(line + "\n")
            exit_func = self._exit_func

        if level >= Level.FATAL:
            exit_func(1)

    def log(self, level, msg: str, **fields: Any) -> None:
        self.emit(parse_level(level), msg, fields_from_kwargs(fields))

    def trace(self, msg: str, **fields: Any) -> None:
        self.emit(Level.TRACE, msg, fields_from_kwargs(fields))

    def debug(self, msg: str, **fields: Any) -> None:
        self.emit(Level.DEBUG, msg, fields_from_kwargs(fields))

    def info(self, msg: str, **fields: Any) -> None:
        self.emit(Level.INFO, msg, fields_from_kwargs(fields))

    def dry(self, msg: str, **fields: Any) -> None:
        """Log a dry-run notice (an action that would have been taken)."""
        self.emit(Level.DRY, msg, fields_from_kwargs(fields))

    def warn(self, msg: str, **fields: Any) -> None:
        self.emit(Level.WARN, msg, fields_from_kwargs(fields))

    warning = warn

    def error(self, msg: str, **fields: Any) -> None:
        self.emit(Level.ERROR, msg, fields_from_kwargs(fields))

    def fatal(self, msg: str, **fields: Any) -> None:
        """Log at FATAL and call the exit function with code 1."""
        self.emit(Level.FATAL, msg, fields_from_kwargs(fields))

    # Animations

    def spinner(self, msg: str, spinner_type: Optional["SpinnerType"] = None) -> "AnimationBuilder":
        """Animation builder showing a spinner before the message."""
        from clog.progress.animations.spinner import SpinnerAnimation
        from clog.progress.builder import AnimationBuilder
        return AnimationBuilder(SpinnerAnimation(spinner_type), msg, self)

    def bar(self, msg: str, total: int) -> "AnimationBuilder":
        """
        Animation builder for a determinate progress bar.

        Args:
            msg: Message shown next to the bar
            total: Maximum progress value (values <= 0 become 1)
        """
        from clog.progress.animations.bar import BarAnimation
        from clog.progress.builder import AnimationBuilder
        return AnimationBuilder(BarAnimation(total), msg, self)

    def pulse(self, msg: str, *stops: ColorStop) -> "AnimationBuilder":
        """Animation builder fading the whole message through a gradient."""
        from clog.progress.animations.pulse import PulseAnimation
        from clog.progress.builder import AnimationBuilder
        return AnimationBuilder(PulseAnimation(list(stops) or None), msg, self)

    def shimmer(self, msg: str, *stops: ColorStop) -> "AnimationBuilder":
        """Animation builder sweeping a gradient across the message."""
        from clog.progress.animations.shimmer import ShimmerAnimation
        from clog.progress.builder import AnimationBuilder
        return AnimationBuilder(ShimmerAnimation(list(stops) or None), msg, self)

    def group(self, cancel: Optional["Event"] = None, timeout: Optional[float] = None) -> "Group":
        """Group rendering several animations as one block."""
        from clog.progress.group import Group
        return Group(self, cancel=cancel, timeout=timeout)


_default: Optional[Logger] = None
_default_lock = RLock()


def get_default() -> Logger:
    """Return the process-wide default logger, configured from the environment."""
    global _default
    with _default_lock:
        if _default is None:
            from clog.env import configure_from_env
            _default = Logger()
            configure_from_env(_default)
        return _default


def set_default(new_logger: Logger) -> None:
    global _default
    with _default_lock:
        _default = new_logger


def trace(msg: str, **fields: Any) -> None:
    get_default().trace(msg, **fields)


def debug(msg: str, **fields: Any) -> None:
    get_default().debug(msg, **fields)


def info(msg: str, **fields: Any) -> None:
    get_default().info(msg, **fields)


def dry(msg: str, **fields: Any) -> None:
    get_default().dry(msg, **fields)


def warn(msg: str, **fields: Any) -> None:
    get_default().warn(msg, **fields)


def error(msg: str, **fields: Any) -> None:
    get_default().error(msg, **fields)


def fatal(msg: str, **fields: Any) -> None:
    get_default().fatal(msg, **fields)


def with_(**fields: Any) -> Logger:
    return get_default().with_(**fields)


def spinner(msg: str, spinner_type: Optional["SpinnerType"] = None) -> "AnimationBuilder":
    return get_default().spinner(msg, spinner_type)


def bar(msg: str, total: int) -> "AnimationBuilder":
    return get_default().bar(msg, total)


def pulse(msg: str, *stops: ColorStop) -> "AnimationBuilder":
    return get_default().pulse(msg, *stops)


def shimmer(msg: str, *stops: ColorStop) -> "AnimationBuilder":
    return get_default().shimmer(msg, *stops)


def group(cancel: Optional["Event"] = None, timeout: Optional[float] = None) -> "Group":
    return get_default().group(cancel, timeout)
