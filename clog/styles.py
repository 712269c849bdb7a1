"""
Logger Styles

Rich styles for each visual part of a log line. Any entry may be None to
disable styling for that part.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from rich.style import Style

from clog.levels import Level

NIL = "<nil>"


def default_level_styles() -> Dict[Level, Optional[Style]]:
    return {
        Level.TRACE: Style(bold=True, dim=True, color="cyan"),
        Level.DEBUG: Style(bold=True, color="cyan"),
        Level.INFO: Style(bold=True, color="green"),
        Level.DRY: Style(bold=True, color="magenta"),
        Level.WARN: Style(bold=True, color="yellow"),
        Level.ERROR: Style(bold=True, color="red"),
        Level.FATAL: Style(bold=True, color="red"),
    }


def default_message_styles() -> Dict[Level, Optional[Style]]:
    """Per-level message styles (unstyled by default)."""
    return {level: None for level in Level}


def default_value_styles() -> Dict[str, Optional[Style]]:
    return {
        "true": Style(color="green"),
        "false": Style(color="red"),
        NIL: Style(dim=True),
        '""': Style(dim=True),
    }


@dataclass
class Styles:
    """Styles for the logger's pretty output."""

    levels: Dict[Level, Optional[Style]] = field(default_factory=default_level_styles)
    messages: Dict[Level, Optional[Style]] = field(default_factory=default_message_styles)
    values: Dict[str, Optional[Style]] = field(default_factory=default_value_styles)
    keys: Dict[str, Optional[Style]] = field(default_factory=dict)

    key_default: Optional[Style] = field(default_factory=lambda: Style(color="blue"))
    separator: Optional[Style] = field(default_factory=lambda: Style(dim=True))
    separator_text: str = "="
    timestamp: Optional[Style] = field(default_factory=lambda: Style(dim=True))

    field_string: Optional[Style] = field(default_factory=lambda: Style(color="bright_white"))
    field_number: Optional[Style] = field(default_factory=lambda: Style(color="magenta"))
    field_duration: Optional[Style] = field(default_factory=lambda: Style(color="magenta"))
    field_time: Optional[Style] = field(default_factory=lambda: Style(color="magenta"))
    field_error: Optional[Style] = field(default_factory=lambda: Style(color="red"))
    field_link: Optional[Style] = field(default_factory=lambda: Style(color="cyan", underline=True))


def default_styles() -> Styles:
    """Return a fresh copy of the default styles."""
    return Styles()
