"""
Progress Bar Engine

Width resolution, cell rendering, percent formatting and line layout for
determinate progress bars.
"""

from clog.progress.bar.style import BarAlign, BarStyle, PercentPosition, ResolutionMode
from clog.progress.bar.render import format_percent, render_bar, resolve_width
from clog.progress.bar.layout import align_line, visible_length
from clog.progress.bar.presets import (
    BAR_BASIC,
    BAR_BLOCK,
    BAR_DASH,
    BAR_GRADIENT,
    BAR_SMOOTH,
    BAR_THIN,
    PRESETS,
    default_bar_style,
)

__all__ = [
    'BarAlign',
    'BarStyle',
    'PercentPosition',
    'ResolutionMode',
    'format_percent',
    'render_bar',
    'resolve_width',
    'align_line',
    'visible_length',
    'BAR_BASIC',
    'BAR_BLOCK',
    'BAR_DASH',
    'BAR_GRADIENT',
    'BAR_SMOOTH',
    'BAR_THIN',
    'PRESETS',
    'default_bar_style',
]
