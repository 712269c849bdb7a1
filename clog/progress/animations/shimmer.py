"""
Shimmer Animation

Sweeps a colour gradient across the characters of the message.
"""

import math
from enum import Enum
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from rich.style import Style

from clog.color import ColorStop, default_shimmer_gradient, gradient_style
from clog.progress.animations.base import Animation, AnimationKind
from clog.progress.config import get_config

if TYPE_CHECKING:
    from clog.logger import LineFormatter

# Colours are sampled from a fixed number of gradient positions
LUT_SIZE = 64


class Direction(Enum):
    """Direction the shimmer wave travels."""
    RIGHT = "right"
    LEFT = "left"
    MIDDLE_IN = "middle_in"
    MIDDLE_OUT = "middle_out"


def build_lut(stops: Sequence[ColorStop]) -> List[Style]:
    return [gradient_style(i / (LUT_SIZE - 1), stops) for i in range(LUT_SIZE)]


def char_index(i: int, n: int, phase: float, direction: Direction) -> int:
    """Lookup-table index for character i of n at the given phase."""
    pos = i / n
    if direction == Direction.LEFT:
        t = math.fmod(pos + phase, 1.0)
    elif direction == Direction.MIDDLE_IN:
        t = math.fmod(abs(2 * pos - 1.0) + phase, 1.0)
    elif direction == Direction.MIDDLE_OUT:
        t = math.fmod(1.0 - abs(2 * pos - 1.0) + phase, 1.0)
    else:
        t = math.fmod(pos - phase + 1.0, 1.0)
    return max(0, min(LUT_SIZE - 1, int(t * (LUT_SIZE - 1))))


def shimmer_text(
    text: str,
    phase: float,
    direction: Direction,
    lut: Sequence[Style],
    render: Callable[[str, Optional[Style]], str],
) -> str:
    """
    Colour each character of text by its position and the phase.

    Adjacent characters sharing a colour are rendered as one run;
    whitespace is passed through unstyled.
    """
    n = len(text)
    if n == 0:
        return text

    out = []
    run_start = 0
    run_key = None
    for i, ch in enumerate(text):
        key = -1 if ch.isspace() else char_index(i, n, phase, direction)
        if i > 0 and key != run_key:
            out.append(_flush(text[run_start:i], run_key, lut, render))
            run_start = i
        run_key = key
    out.append(_flush(text[run_start:], run_key, lut, render))
    return "".join(out)


def _flush(run: str, key: int, lut: Sequence[Style], render) -> str:
    if key < 0:
        return run
    return render(run, lut[key])


class ShimmerAnimation(Animation):
    """Per-character colour wave."""

    kind = AnimationKind.SHIMMER

    def __init__(
        self,
        stops: Optional[List[ColorStop]] = None,
        direction: Direction = Direction.RIGHT,
        speed: Optional[float] = None,
    ) -> None:
        self.stops = stops or default_shimmer_gradient()
        self.direction = direction
        self.speed = speed
        self._lut = build_lut(self.stops)

    @property
    def tick_rate(self) -> float:
        return get_config().shimmer_tick_rate

    def render_message(self, formatter: "LineFormatter", message: str, elapsed: float) -> str:
        speed = self.speed if self.speed and self.speed > 0 else get_config().shimmer_speed
        phase = math.fmod(elapsed * speed, 1.0)
        return shimmer_text(message, phase, self.direction, self._lut, formatter.output.render)
