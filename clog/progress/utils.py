"""
Progress Utilities

Helper functions for setting up the render loop.
"""

import logging
from typing import Optional, TYPE_CHECKING

from clog.progress.config import get_config, get_renderer_registry
from clog.progress.core import ProgressMode, ProgressRenderer, ProgressTracker

if TYPE_CHECKING:
    from clog.output import Output

logger = logging.getLogger(__name__)


def parse_progress_mode(mode_str: str) -> ProgressMode:
    """Parse a progress mode string, falling back to auto."""
    try:
        return ProgressMode(mode_str.lower())
    except ValueError:
        logger.warning(f"Invalid progress mode '{mode_str}', using 'auto'")
        return ProgressMode.AUTO


def create_progress_tracker(
    output: "Output",
    mode_str: Optional[str] = None,
    renderer: Optional[ProgressRenderer] = None,
) -> ProgressTracker:
    """
    Create a progress tracker for output.

    Args:
        output: Output the animation is drawn on
        mode_str: Progress mode string ("auto", "on", "off"); defaults to
            ProgressConfig.progress_mode
        renderer: Optional specific renderer to use

    Returns:
        ProgressTracker instance
    """
    mode = parse_progress_mode(mode_str or get_config().progress_mode)
    return ProgressTracker(output, mode=mode, renderer=renderer)


def check_progress_dependencies() -> dict:
    """
    Check availability of line renderer dependencies.

    Returns:
        Dictionary with availability information
    """
    available_renderers = get_renderer_registry().list_available()

    return {
        'rich_available': available_renderers.get('rich', False),
        'tqdm_available': available_renderers.get('tqdm', False),
        'any_available': any(available_renderers.values()),
        'available_renderers': available_renderers
    }
