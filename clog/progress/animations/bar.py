"""
Bar Animation

Determinate progress bar: reads the shared progress cells on every frame,
renders the bar and percent label and lays them out against the message.
"""

import datetime
from typing import List, Optional, TYPE_CHECKING

from clog.fields import Field, Percent
from clog.progress.animations.base import Animation, AnimationKind
from clog.progress.bar.layout import align_line
from clog.progress.bar.presets import default_bar_style
from clog.progress.bar.render import PERCENT_MAX, format_percent, render_bar
from clog.progress.bar.style import BarAlign, BarStyle, PercentPosition
from clog.progress.config import get_config
from clog.progress.core.state import ProgressState

if TYPE_CHECKING:
    from clog.logger import LineFormatter


class BarAnimation(Animation):
    """Progress bar animation backed by a ProgressState."""

    kind = AnimationKind.BAR

    def __init__(self, total: int, style: Optional[BarStyle] = None) -> None:
        self._state = ProgressState(total)
        self.style = style or default_bar_style()

    @property
    def tick_rate(self) -> float:
        return get_config().bar_tick_rate

    @property
    def state(self) -> ProgressState:
        return self._state

    def percent(self) -> float:
        current, total = self._state.snapshot()
        current = max(0, current)
        return min(current / max(total, 1) * PERCENT_MAX, PERCENT_MAX)

    def extra_fields(self) -> List[Field]:
        key = self.style.percent_field_key()
        if not key or self.style.hide_percent:
            return []
        return [Field(key, Percent(self.percent(), self.style.percent_precision))]

    def bar_text(self, terminal_width: int, formatter: "LineFormatter") -> str:
        """Bar with the percent label on its configured side (when shown beside it)."""
        style = self.style
        current, total = self._state.snapshot()
        bar = render_bar(current, total, style, terminal_width, formatter.output.color_system)
        if style.hide_percent or style.percent_field_key():
            return bar

        sep = style.separator or " "
        pct = format_percent(current, total, style.percent_precision, style.pad_percent)
        if style.percent_position == PercentPosition.LEFT:
            return pct + sep + bar
        return bar + sep + pct

    def compose(
        self,
        formatter: "LineFormatter",
        prefix: str,
        message: str,
        fields_text: str,
        elapsed: float,
        now: Optional[datetime.datetime] = None,
    ) -> str:
        style = self.style
        sep = style.separator or " "
        width = formatter.output.width()
        bar = self.bar_text(width, formatter)
        styled_message = formatter.message(message)

        if style.align == BarAlign.INLINE:
            return formatter.compose(prefix, styled_message + sep + bar, fields_text, now)

        line = formatter.compose(prefix, styled_message, fields_text, now)
        return align_line(line, bar, sep, style.align, width)
