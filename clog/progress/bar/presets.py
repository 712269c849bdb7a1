"""
Bar Presets

Ready-made bar styles. Pass one to AnimationBuilder.style() or derive a
variant with ``BAR_THIN.with_(width=20)``.
"""

from clog.color import default_percent_gradient
from clog.progress.bar.style import BarStyle

#   [====>     ] 50%
BAR_BASIC = BarStyle(
    filled_char="=",
    empty_char=" ",
    head_char=">",
    left_cap="[",
    right_cap="]",
)

#   [█████░░░░░] 50%
BAR_BLOCK = BarStyle(
    filled_char="█",
    empty_char="░",
    left_cap="[",
    right_cap="]",
)

#   [-----     ] 50%
BAR_DASH = BarStyle(
    filled_char="-",
    empty_char=" ",
    left_cap="[",
    right_cap="]",
)

#   [██████▍   ] 64%
BAR_GRADIENT = BarStyle(
    filled_char="█",
    empty_char=" ",
    fill_gradient=("▏", "▎", "▍", "▌", "▋", "▊", "▉"),
    left_cap="[",
    right_cap="]",
)

#   [━━━━━╸────] 45%
BAR_THIN = BarStyle(
    filled_char="━",
    empty_char="─",
    half_filled="╸",
    half_empty="╺",
    left_cap="[",
    right_cap="]",
)

#   [████▌     ] 45%
BAR_SMOOTH = BarStyle(
    filled_char="█",
    empty_char=" ",
    half_filled="▌",
    left_cap="[",
    right_cap="]",
)

PRESETS = {
    "basic": BAR_BASIC,
    "block": BAR_BLOCK,
    "dash": BAR_DASH,
    "gradient": BAR_GRADIENT,
    "thin": BAR_THIN,
    "smooth": BAR_SMOOTH,
}


def default_bar_style() -> BarStyle:
    """The default bar style (BAR_THIN)."""
    return BAR_THIN


def colored(style: BarStyle) -> BarStyle:
    """Variant of style whose filled cells follow the red→yellow→green gradient."""
    return style.with_(progress_gradient=tuple(default_percent_gradient()))
