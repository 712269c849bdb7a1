"""
Bar Style

Immutable description of a progress bar's appearance: glyphs, caps, width
bounds, alignment and percent label settings.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from rich.style import Style

from clog.color import ColorStop

DEFAULT_FILLED_CHAR = "━"
DEFAULT_EMPTY_CHAR = "─"
DEFAULT_MIN_WIDTH = 10
DEFAULT_MAX_WIDTH = 40
WIDTH_DIVISOR = 4
PERCENT_FIELD_INLINE = "progress"


class BarAlign(Enum):
    """Horizontal placement of the bar on the line."""
    RIGHT_PAD = "right_pad"    # Message left, bar pushed to the right edge
    LEFT_PAD = "left_pad"      # Bar left, message pushed to the right edge
    INLINE = "inline"          # Bar is part of the message text
    LEFT = "left"              # Bar, separator, message
    RIGHT = "right"            # Message, separator, bar


class PercentPosition(Enum):
    """Side of the bar the percent label is drawn on."""
    RIGHT = "right"
    LEFT = "left"


class ResolutionMode(Enum):
    """How many sub-steps a single bar cell can show."""
    FULL_CELL = "full_cell"    # 1x, optional head glyph
    HALF_CELL = "half_cell"    # 2x via half_filled (and half_empty)
    GRADIENT = "gradient"      # (len(fill_gradient) + 1)x


@dataclass(frozen=True)
class BarStyle:
    """
    Visual configuration of a determinate progress bar.

    Glyph precedence: a non-empty ``fill_gradient`` wins over ``half_filled``,
    which wins over ``head_char``; they are never combined.
    """

    filled_char: str = DEFAULT_FILLED_CHAR
    empty_char: str = DEFAULT_EMPTY_CHAR
    head_char: str = ""
    half_filled: str = ""
    half_empty: str = ""
    fill_gradient: Tuple[str, ...] = ()

    left_cap: str = "["
    right_cap: str = "]"
    separator: str = " "

    width: int = 0
    min_width: int = DEFAULT_MIN_WIDTH
    max_width: int = DEFAULT_MAX_WIDTH

    align: BarAlign = BarAlign.RIGHT_PAD

    percent_position: PercentPosition = PercentPosition.RIGHT
    percent_precision: int = 0
    pad_percent: bool = True
    hide_percent: bool = False
    percent_field: str = ""

    filled_style: Optional[Style] = None
    empty_style: Optional[Style] = None
    cap_style: Optional[Style] = None
    progress_gradient: Tuple[ColorStop, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists for the sequence attributes
        object.__setattr__(self, "fill_gradient", tuple(self.fill_gradient))
        object.__setattr__(self, "progress_gradient", tuple(self.progress_gradient))

    @property
    def resolution(self) -> ResolutionMode:
        if self.fill_gradient:
            return ResolutionMode.GRADIENT
        if self.half_filled:
            return ResolutionMode.HALF_CELL
        return ResolutionMode.FULL_CELL

    def percent_field_key(self) -> str:
        """
        Field key the percent label is emitted under, or "" to draw it beside the bar.

        An explicit ``percent_field`` wins; inline bars default to "progress".
        """
        if self.percent_field:
            return self.percent_field
        if self.align == BarAlign.INLINE:
            return PERCENT_FIELD_INLINE
        return ""

    def with_(self, **changes) -> "BarStyle":
        """Copy of this style with some attributes replaced."""
        return replace(self, **changes)
