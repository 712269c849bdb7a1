"""
Bar Rendering

Pure functions turning (current, total, style, terminal width) into the bar
string and its percent label. All cell arithmetic is done on integers so a
given input always produces the same cells.
"""

from typing import Optional

from rich.color import ColorSystem
from rich.style import Style

from clog.color import gradient_style
from clog.progress.bar.style import (
    BarStyle,
    DEFAULT_EMPTY_CHAR,
    DEFAULT_FILLED_CHAR,
    DEFAULT_MAX_WIDTH,
    DEFAULT_MIN_WIDTH,
    ResolutionMode,
    WIDTH_DIVISOR,
)

PERCENT_MAX = 100


def resolve_width(style: BarStyle, terminal_width: int) -> int:
    """
    Number of cells between the caps.

    A fixed ``style.width`` wins. Otherwise a quarter of the terminal width
    (or the minimum when the width is unknown) clamped to [min, max].
    """
    if style.width > 0:
        return style.width

    min_w = style.min_width if style.min_width > 0 else DEFAULT_MIN_WIDTH
    max_w = style.max_width if style.max_width > 0 else DEFAULT_MAX_WIDTH

    candidate = terminal_width // WIDTH_DIVISOR if terminal_width > 0 else min_w
    return max(min_w, min(max_w, candidate))


def _styled(text: str, style: Optional[Style], color_system: Optional[ColorSystem]) -> str:
    if not text:
        return ""
    if style is None:
        return text
    return style.render(text, color_system=color_system)


def render_bar(
    current: int,
    total: int,
    style: BarStyle,
    terminal_width: int = 0,
    color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR,
) -> str:
    """
    Render the bar, caps included.

    Args:
        current: Progress value; clamped into [0, total]
        total: Maximum value; values <= 0 are treated as 1
        style: Bar appearance
        terminal_width: Terminal columns, 0 when unknown
        color_system: Colour system for styled segments; None renders plain text

    Returns:
        The bar string; styled segments carry ANSI escapes
    """
    if total <= 0:
        total = 1
    current = max(0, min(current, total))

    width = resolve_width(style, terminal_width)
    filled_char = style.filled_char or DEFAULT_FILLED_CHAR
    empty_char = style.empty_char or DEFAULT_EMPTY_CHAR

    head = ""
    trail = ""
    mode = style.resolution

    if mode == ResolutionMode.GRADIENT:
        steps = len(style.fill_gradient) + 1
        complete = min(width * steps, width * steps * current // total)
        filled, remainder = divmod(complete, steps)
        empty = width - filled
        if remainder > 0:
            head = style.fill_gradient[remainder - 1]
            empty -= 1
    elif mode == ResolutionMode.HALF_CELL:
        halves = min(width * 2, width * 2 * current // total)
        filled = halves // 2
        empty = width - filled
        if halves % 2 == 1:
            head = style.half_filled
            empty -= 1
        elif style.half_empty and filled > 0 and empty > 0:
            trail = style.half_empty
            empty -= 1
    else:
        filled = min(width, current * width // total)
        empty = width - filled
        if style.head_char and 0 < filled < width:
            head = style.head_char
            filled -= 1

    filled_style = style.filled_style
    if style.progress_gradient:
        filled_style = gradient_style(current / total, style.progress_gradient)

    return "".join((
        _styled(style.left_cap, style.cap_style, color_system),
        _styled(filled_char * filled, filled_style, color_system),
        _styled(head, filled_style, color_system),
        _styled(trail, style.empty_style, color_system),
        _styled(empty_char * empty, style.empty_style, color_system),
        _styled(style.right_cap, style.cap_style, color_system),
    ))


def format_percent(current: int, total: int, precision: int = 0, pad: bool = False) -> str:
    """
    Percent label such as "50%" or "33.33%".

    Args:
        current: Progress value
        total: Maximum value; <= 0 yields 0%
        precision: Decimal places
        pad: Right-justify to the width of "100%" at this precision so the
            label keeps a constant width
    """
    precision = max(0, precision)
    pct = 0.0
    if total > 0:
        pct = min(current / total * PERCENT_MAX, PERCENT_MAX)

    text = f"{pct:.{precision}f}%"
    if pad:
        return text.rjust(len(f"{PERCENT_MAX:.{precision}f}%"))
    return text
