"""
Log Levels

Level enumeration shared by the logger, animations and the stdlib bridge.
Values line up with the standard logging module so records can be mapped
in both directions.
"""

import logging
from enum import IntEnum
from typing import Dict, Union

from clog.exceptions import InvalidLevelError


class Level(IntEnum):
    """Severity of a log entry."""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    DRY = 25
    WARN = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL

    @property
    def label(self) -> str:
        """Short three-letter label shown in front of each entry."""
        return LEVEL_LABELS[self]

    @property
    def prefix(self) -> str:
        """Default emoji prefix for the level."""
        return LEVEL_PREFIXES[self]


LEVEL_LABELS: Dict[Level, str] = {
    Level.TRACE: "TRC",
    Level.DEBUG: "DBG",
    Level.INFO: "INF",
    Level.DRY: "DRY",
    Level.WARN: "WRN",
    Level.ERROR: "ERR",
    Level.FATAL: "FTL",
}

LEVEL_PREFIXES: Dict[Level, str] = {
    Level.TRACE: "🔍",
    Level.DEBUG: "🐞",
    Level.INFO: "ℹ️",
    Level.DRY: "🚧",
    Level.WARN: "⚠️",
    Level.ERROR: "❌",
    Level.FATAL: "💥",
}

_LEVEL_NAMES: Dict[str, Level] = {
    "trace": Level.TRACE,
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "dry": Level.DRY,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
    "fatal": Level.FATAL,
    "critical": Level.FATAL,
}

# Make the extra levels printable by stdlib handlers
logging.addLevelName(Level.TRACE, "TRACE")
logging.addLevelName(Level.DRY, "DRY")


def parse_level(value: Union[str, int, Level]) -> Level:
    """
    Parse a level name (case-insensitive) or number.

    Args:
        value: Level name such as "info" or "warning", or a numeric level

    Returns:
        Matching Level

    Raises:
        InvalidLevelError: If the value does not name a level
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, int):
        try:
            return Level(value)
        except ValueError:
            raise InvalidLevelError(str(value)) from None

    name = value.strip().lower()
    if name not in _LEVEL_NAMES:
        raise InvalidLevelError(value)
    return _LEVEL_NAMES[name]


def from_stdlib(levelno: int) -> Level:
    """Map a stdlib record level to the closest Level at or below it."""
    for level in sorted(Level, reverse=True):
        if levelno >= level:
            return level
    return Level.TRACE


def max_label_width() -> int:
    """Width of the longest level label, used to right-align labels."""
    return max(len(label) for label in LEVEL_LABELS.values())
