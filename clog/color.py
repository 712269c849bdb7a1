"""
Colour Gradients

Colour stops and gradient interpolation used by pulse and shimmer text and
by progress-coloured bars.
"""

from typing import List, NamedTuple, Sequence, Union

from rich.color import Color, blend_rgb
from rich.color_triplet import ColorTriplet
from rich.style import Style

WHITE = ColorTriplet(255, 255, 255)


class ColorStop(NamedTuple):
    """A colour anchored at a position in [0, 1] along a gradient."""
    position: float
    color: ColorTriplet


def color_stop(position: float, color: Union[str, ColorTriplet, Sequence[int]]) -> ColorStop:
    """
    Build a ColorStop from a colour definition.

    Args:
        position: Position along the gradient, 0 to 1
        color: "#rrggbb", a Rich colour name, or an (r, g, b) tuple
    """
    if isinstance(color, str):
        triplet = Color.parse(color).get_truecolor()
    else:
        triplet = ColorTriplet(*color)
    return ColorStop(float(position), triplet)


def interpolate_gradient(t: float, stops: Sequence[ColorStop]) -> ColorTriplet:
    """
    Colour at position t of a gradient.

    t is clamped to the first and last stop positions; between two stops the
    colours are blended linearly. An empty gradient yields white.
    """
    if not stops:
        return WHITE
    if len(stops) == 1:
        return stops[0].color

    if t <= stops[0].position:
        return stops[0].color
    if t >= stops[-1].position:
        return stops[-1].color

    for previous, current in zip(stops, stops[1:]):
        if t <= current.position:
            span = current.position - previous.position
            if span <= 0:
                return current.color
            return blend_rgb(previous.color, current.color, (t - previous.position) / span)
    return stops[-1].color


def gradient_style(t: float, stops: Sequence[ColorStop]) -> Style:
    """Foreground style with the gradient colour at t."""
    return Style(color=Color.from_triplet(interpolate_gradient(t, stops)))


def default_percent_gradient() -> List[ColorStop]:
    """Red to yellow to green, used for progress-coloured bars."""
    return [
        ColorStop(0.0, ColorTriplet(255, 85, 85)),
        ColorStop(0.5, ColorTriplet(255, 215, 0)),
        ColorStop(1.0, ColorTriplet(80, 200, 120)),
    ]


def default_pulse_gradient() -> List[ColorStop]:
    """Light blue through light green to white."""
    return [
        ColorStop(0.0, ColorTriplet(191, 230, 255)),
        ColorStop(0.5, ColorTriplet(209, 255, 224)),
        ColorStop(1.0, WHITE),
    ]


def default_shimmer_gradient() -> List[ColorStop]:
    """Pastel red, green and blue cycling back to red."""
    red = ColorTriplet(255, 179, 179)
    return [
        ColorStop(0.0, red),
        ColorStop(0.33, ColorTriplet(179, 255, 191)),
        ColorStop(0.67, ColorTriplet(179, 204, 255)),
        ColorStop(1.0, red),
    ]
