"""
Bar Line Layout

Places a rendered bar relative to the message on one terminal line.
"""

from rich.cells import cell_len
from rich.text import Text

from clog.progress.bar.style import BarAlign


def visible_length(text: str) -> int:
    """Terminal cells occupied by text, ignoring ANSI escape sequences."""
    if "\x1b" not in text:
        return cell_len(text)
    return Text.from_ansi(text).cell_len


def align_line(
    message: str,
    bar: str,
    separator: str,
    align: BarAlign,
    terminal_width: int,
) -> str:
    """
    Combine message and bar according to align.

    Padded alignments fill the gap between the two with spaces so the line
    spans the terminal width; when there is no room (gap <= 0) they fall
    back to joining with the separator. INLINE returns the message as is
    because the bar is already part of it.
    """
    if align == BarAlign.INLINE:
        return message
    if align == BarAlign.LEFT:
        return bar + separator + message
    if align == BarAlign.RIGHT:
        return message + separator + bar

    gap = terminal_width - visible_length(message) - visible_length(bar)
    joiner = " " * gap if gap > 0 else separator
    if align == BarAlign.LEFT_PAD:
        return bar + joiner + message
    return message + joiner + bar
