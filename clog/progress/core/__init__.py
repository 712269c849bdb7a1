"""
Progress Core Module

Shared progress state, animation slots and the render loop.
"""

from clog.progress.core.state import AtomicInt, AtomicRef, ProgressState, ProgressUpdate
from clog.progress.core.slot import AnimationSlot, SlotProgress, SlotStatus
from clog.progress.core.tracker import ProgressMode, ProgressRenderer, ProgressTracker

__all__ = [
    'AtomicInt',
    'AtomicRef',
    'ProgressState',
    'ProgressUpdate',
    'AnimationSlot',
    'SlotProgress',
    'SlotStatus',
    'ProgressMode',
    'ProgressRenderer',
    'ProgressTracker',
]
