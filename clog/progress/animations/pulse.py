"""
Pulse Animation

Fades the whole message through a colour gradient and back.
"""

import math
import re
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from rich.style import Style

from clog.color import ColorStop, default_pulse_gradient, gradient_style
from clog.progress.animations.base import Animation, AnimationKind
from clog.progress.config import get_config

if TYPE_CHECKING:
    from clog.logger import LineFormatter

_WHITESPACE_RUNS = re.compile(r"(\s+)")


def pulse_phase(elapsed: float, speed: float) -> float:
    """Position in [0, 1] along the gradient: a sine wave starting at 0."""
    return (1.0 + math.sin(2 * math.pi * elapsed * speed - math.pi / 2)) / 2


def apply_to_words(text: str, style: Style, render: Callable[[str, Optional[Style]], str]) -> str:
    """Style every non-whitespace run of text, leaving whitespace bare."""
    return "".join(
        chunk if not chunk or chunk.isspace() else render(chunk, style)
        for chunk in _WHITESPACE_RUNS.split(text)
    )


def pulse_text(
    text: str,
    phase: float,
    stops: Sequence[ColorStop],
    render: Callable[[str, Optional[Style]], str],
) -> str:
    """Colour text with the gradient colour at phase."""
    if not text:
        return text
    return apply_to_words(text, gradient_style(phase, stops), render)


class PulseAnimation(Animation):
    """Whole-message colour pulse."""

    kind = AnimationKind.PULSE

    def __init__(self, stops: Optional[List[ColorStop]] = None, speed: Optional[float] = None) -> None:
        self.stops = stops or default_pulse_gradient()
        self.speed = speed

    @property
    def tick_rate(self) -> float:
        return get_config().pulse_tick_rate

    def render_message(self, formatter: "LineFormatter", message: str, elapsed: float) -> str:
        speed = self.speed if self.speed and self.speed > 0 else get_config().pulse_speed
        return pulse_text(message, pulse_phase(elapsed, speed), self.stops, formatter.output.render)
