"""
Line renderers for animated output.
"""

from clog.progress.display.rich_renderer import RichLineRenderer
from clog.progress.display.tqdm_renderer import TqdmLineRenderer, is_tqdm_available

__all__ = [
    'RichLineRenderer',
    'TqdmLineRenderer',
    'is_tqdm_available',
]
