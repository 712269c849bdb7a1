"""
Spinner Animation

Cycles through a sequence of frames in the prefix position.
"""

from typing import NamedTuple, Optional, Tuple

from clog.progress.animations.base import Animation, AnimationKind


class SpinnerType(NamedTuple):
    """Spinner frames and the interval between them (seconds)."""
    frames: Tuple[str, ...]
    interval: float
    reverse: bool = False

    def frame_at(self, elapsed: float) -> str:
        """Frame shown after elapsed seconds."""
        frames = self.frames or DEFAULT_SPINNER.frames
        interval = self.interval if self.interval > 0 else DEFAULT_SPINNER.interval
        n = len(frames)
        i = int(elapsed / interval) % n
        if self.reverse:
            i = n - 1 - i
        return frames[i]

    def reversed(self) -> "SpinnerType":
        return self._replace(reverse=not self.reverse)


LINE = SpinnerType(("|", "/", "-", "\\"), 1 / 10)
DOT = SpinnerType(("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"), 1 / 10)
MINI_DOT = SpinnerType(("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), 1 / 12)
JUMP = SpinnerType(("⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"), 1 / 10)
PULSE = SpinnerType(("█", "▓", "▒", "░"), 1 / 8)
POINTS = SpinnerType(("∙∙∙", "●∙∙", "∙●∙", "∙∙●"), 1 / 7)
GLOBE = SpinnerType(("🌍", "🌎", "🌏"), 1 / 4)
MOON = SpinnerType(("🌔", "🌓", "🌒", "🌑", "🌘", "🌗", "🌖", "🌕"), 1 / 8)
METER = SpinnerType(("▱▱▱", "▰▱▱", "▰▰▱", "▰▰▰", "▰▰▱", "▰▱▱", "▱▱▱"), 1 / 7)
HAMBURGER = SpinnerType(("☱", "☲", "☴", "☲"), 1 / 3)
ELLIPSIS = SpinnerType(("", ".", "..", "..."), 1 / 3)

DEFAULT_SPINNER = MOON

SPINNERS = {
    "line": LINE,
    "dot": DOT,
    "mini_dot": MINI_DOT,
    "jump": JUMP,
    "pulse": PULSE,
    "points": POINTS,
    "globe": GLOBE,
    "moon": MOON,
    "meter": METER,
    "hamburger": HAMBURGER,
    "ellipsis": ELLIPSIS,
}


class SpinnerAnimation(Animation):
    """Spinner frames in place of the prefix; the message keeps its level style."""

    kind = AnimationKind.SPINNER

    def __init__(self, spinner_type: Optional[SpinnerType] = None) -> None:
        self.spinner_type = spinner_type or DEFAULT_SPINNER

    @property
    def tick_rate(self) -> float:
        return self.spinner_type.interval if self.spinner_type.interval > 0 else DEFAULT_SPINNER.interval

    def icon(self, prefix: str, elapsed: float) -> str:
        return self.spinner_type.frame_at(elapsed)
