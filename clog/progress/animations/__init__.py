"""
Animations

Spinner, pulse, shimmer and bar animations drawn by the render loop.
"""

from clog.progress.animations.base import Animation, AnimationKind
from clog.progress.animations.bar import BarAnimation
from clog.progress.animations.pulse import PulseAnimation, pulse_phase, pulse_text
from clog.progress.animations.shimmer import Direction, ShimmerAnimation, shimmer_text
from clog.progress.animations.spinner import DEFAULT_SPINNER, SPINNERS, SpinnerAnimation, SpinnerType

__all__ = [
    'Animation',
    'AnimationKind',
    'BarAnimation',
    'PulseAnimation',
    'pulse_phase',
    'pulse_text',
    'Direction',
    'ShimmerAnimation',
    'shimmer_text',
    'DEFAULT_SPINNER',
    'SPINNERS',
    'SpinnerAnimation',
    'SpinnerType',
]
