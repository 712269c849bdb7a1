"""
Progress Module

Animated output for long-running tasks: spinners, pulses, shimmers and
determinate progress bars, singly or as a group of lines.
"""

from clog.progress.core.tracker import ProgressTracker, ProgressRenderer, ProgressMode
from clog.progress.core.slot import AnimationSlot, SlotProgress, SlotStatus
from clog.progress.core.state import ProgressState, ProgressUpdate
from clog.progress.display.rich_renderer import RichLineRenderer
from clog.progress.display.tqdm_renderer import TqdmLineRenderer, is_tqdm_available
from clog.progress.config import (
    ProgressConfig,
    get_config,
    set_config,
    update_config,
    get_renderer_registry,
    auto_select_renderer
)
from clog.progress.builder import AnimationBuilder
from clog.progress.group import Group, GroupEntry
from clog.progress.result import GroupResult, TaskResult, WaitResult
from clog.progress.utils import (
    create_progress_tracker,
    parse_progress_mode,
    check_progress_dependencies
)

__all__ = [
    'ProgressTracker',
    'ProgressRenderer',
    'ProgressMode',
    'AnimationSlot',
    'SlotProgress',
    'SlotStatus',
    'ProgressState',
    'ProgressUpdate',
    'RichLineRenderer',
    'TqdmLineRenderer',
    'is_tqdm_available',
    'ProgressConfig',
    'get_config',
    'set_config',
    'update_config',
    'get_renderer_registry',
    'auto_select_renderer',
    'AnimationBuilder',
    'Group',
    'GroupEntry',
    'GroupResult',
    'TaskResult',
    'WaitResult',
    'create_progress_tracker',
    'parse_progress_mode',
    'check_progress_dependencies',
]
