"""
Structured Fields

Key/value fields attached to log entries and animations, plus the value
formatting and styling used when rendering them as ``key=value`` pairs.
"""

import datetime
from enum import Enum
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from rich.style import Style

from clog.hyperlink import Link, PathLink, link_target
from clog.styles import NIL, Styles


class Field(NamedTuple):
    """A single key/value pair."""
    key: str
    value: Any


class QuoteMode(Enum):
    """When string-like field values are quoted."""
    AUTO = "auto"        # Quote only values with spaces, quotes or unprintables
    ALWAYS = "always"    # Quote every string-like value
    NEVER = "never"      # Never quote


class Elapsed(float):
    """Seconds since an animation started; rendered as a short duration."""

    def __repr__(self) -> str:
        return f"Elapsed({float(self)!r})"


class Percent(float):
    """A percentage value (0-100) rendered with a trailing % sign."""

    def __new__(cls, value: float, precision: int = 0) -> "Percent":
        obj = super().__new__(cls, value)
        obj.precision = precision
        return obj


class ValueKind(Enum):
    DEFAULT = "default"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NIL = "nil"
    ERROR = "error"
    DURATION = "duration"
    TIME = "time"
    SEQUENCE = "sequence"
    LINK = "link"


# Kinds that are eligible for quoting
_QUOTABLE = {ValueKind.DEFAULT, ValueKind.STRING, ValueKind.ERROR, ValueKind.TIME}

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_duration(seconds: float, precision: Optional[int] = None) -> str:
    """
    Format seconds as a compact duration such as "250ms", "1.5s" or "2m3s".

    Args:
        seconds: Duration in seconds
        precision: Decimal places kept on the seconds part; None keeps up
            to three and trims trailing zeros
    """
    negative = seconds < 0
    seconds = abs(seconds)
    sign = "-" if negative else ""

    if seconds == 0:
        return "0s"
    if seconds < 1:
        millis = seconds * 1000
        if millis < 1:
            return f"{sign}{round(seconds * 1_000_000)}µs"
        return f"{sign}{_trim_number(millis, 3 if precision is None else precision)}ms"

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{int(hours)}h")
    if hours or minutes:
        parts.append(f"{int(minutes)}m")
    parts.append(f"{_trim_number(secs, 3 if precision is None else precision)}s")
    return sign + "".join(parts)


def format_elapsed(seconds: float) -> str:
    """Elapsed-time rendering: whole milliseconds under a second, else 0.1s steps."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    return format_duration(seconds, precision=1)


def _trim_number(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_value(value: Any, time_format: str = DEFAULT_TIME_FORMAT) -> Tuple[str, ValueKind]:
    """
    Convert a field value to text.

    Returns:
        Tuple of (text, kind); the kind drives quoting and styling
    """
    if value is None:
        return NIL, ValueKind.NIL
    if isinstance(value, BaseException):
        return str(value) or type(value).__name__, ValueKind.ERROR
    if isinstance(value, Elapsed):
        return format_elapsed(float(value)), ValueKind.DURATION
    if isinstance(value, Percent):
        return f"{float(value):.{value.precision}f}%", ValueKind.NUMBER
    if isinstance(value, bool):
        return ("true" if value else "false"), ValueKind.BOOL
    if isinstance(value, int):
        return str(value), ValueKind.NUMBER
    if isinstance(value, float):
        return repr(value), ValueKind.NUMBER
    if isinstance(value, Link):
        return value.text, ValueKind.LINK
    if isinstance(value, PathLink):
        return value.display(), ValueKind.LINK
    if isinstance(value, str):
        return value, ValueKind.STRING
    if isinstance(value, datetime.timedelta):
        return format_duration(value.total_seconds()), ValueKind.DURATION
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.strftime(time_format), ValueKind.TIME
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [format_value(item, time_format)[0] for item in value]
        return "[" + ", ".join(items) + "]", ValueKind.SEQUENCE
    return str(value), ValueKind.DEFAULT


def needs_quoting(text: str) -> bool:
    """Whether an unquoted value would be ambiguous on a log line."""
    if "\x1b" in text:
        return False
    if text == "":
        return True
    return any(ch.isspace() or ch == '"' or not ch.isprintable() for ch in text)


def quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t").replace("\r", "\\r")
    return f'"{escaped}"'


def _value_style(styles: Styles, key: str, text: str, kind: ValueKind) -> Optional[Style]:
    if key in styles.keys:
        return styles.keys[key]
    if text in styles.values:
        return styles.values[text]
    return {
        ValueKind.STRING: styles.field_string,
        ValueKind.NUMBER: styles.field_number,
        ValueKind.DURATION: styles.field_duration,
        ValueKind.TIME: styles.field_time,
        ValueKind.ERROR: styles.field_error,
        ValueKind.LINK: styles.field_link,
    }.get(kind)


def format_fields(
    fields: Iterable[Field],
    styles: Styles,
    render: Callable[[str, Optional[Style]], str],
    quote_mode: QuoteMode = QuoteMode.AUTO,
    colored: bool = True,
    time_format: str = DEFAULT_TIME_FORMAT,
    link: Optional[Callable[[str, str], str]] = None,
) -> str:
    """
    Render fields as space separated ``key=value`` pairs.

    Args:
        fields: Fields in display order
        styles: Styles for keys, separator and values
        render: Function applying a style to a text chunk
        quote_mode: Quoting policy for string-like values
        colored: When False no style is applied (plain key=value)
        time_format: strftime format for datetime values
        link: Function wrapping text in a hyperlink (url, text); Link and
            PathLink values stay plain text without it
    """
    parts = []
    sep = styles.separator_text or "="
    for key, value in fields:
        text, kind = format_value(value, time_format)
        if (quote_mode != QuoteMode.NEVER and kind in _QUOTABLE
                and (quote_mode == QuoteMode.ALWAYS or needs_quoting(text))):
            text = quote(text)

        if colored:
            value_text = render(text, _value_style(styles, key, text, kind))
        else:
            value_text = text
        if kind == ValueKind.LINK and link is not None:
            value_text = link(link_target(value), value_text)

        if not colored:
            parts.append(f"{key}{sep}{value_text}")
            continue

        parts.append(
            render(key, styles.key_default)
            + render(sep, styles.separator)
            + value_text
        )
    return " ".join(parts)


def merge_fields(base: Sequence[Field], extra: Sequence[Field]) -> List[Field]:
    """
    Merge two field lists.

    Keys present in ``extra`` replace the value of the same key in ``base``
    in place; new keys are appended in order.
    """
    merged = list(base)
    index = {f.key: i for i, f in enumerate(merged)}
    for f in extra:
        if f.key in index:
            merged[index[f.key]] = f
        else:
            index[f.key] = len(merged)
            merged.append(f)
    return merged


def replace_field(fields: Sequence[Field], key: str, value: Any) -> List[Field]:
    """Copy of fields with the first field named key set to value."""
    out = list(fields)
    for i, f in enumerate(out):
        if f.key == key:
            out[i] = Field(key, value)
            break
    return out


def fields_from_kwargs(kwargs: dict) -> List[Field]:
    return [Field(key, value) for key, value in kwargs.items()]
