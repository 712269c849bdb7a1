"""
Progress Configuration Module

Configuration dataclass and renderer selection with thread safety.
"""

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Dict, Type, Optional

from clog.progress.core.tracker import ProgressRenderer

logger = logging.getLogger(__name__)


@dataclass
class ProgressConfig:
    """Configuration settings for animations."""

    # Frame intervals (in seconds)
    bar_tick_rate: float = 0.05  # ~20fps
    pulse_tick_rate: float = 0.033  # ~30fps
    shimmer_tick_rate: float = 0.033

    # Animation speeds (cycles per second)
    pulse_speed: float = 0.5
    shimmer_speed: float = 0.5

    # Icon shown for pulse, shimmer and bar animations
    default_prefix: str = "⏳"

    # Rendering
    preferred_renderer: str = "auto"  # auto, rich or tqdm
    progress_mode: str = "auto"  # auto, on or off

    # Logging integration
    max_buffered_warnings: int = 50


# Global configuration instance
_config = ProgressConfig()
_config_lock = RLock()


def get_config() -> ProgressConfig:
    """Get the current global progress configuration."""
    with _config_lock:
        return _config


def set_config(config: ProgressConfig) -> None:
    """Set the global progress configuration."""
    global _config
    with _config_lock:
        _config = config


def update_config(**kwargs) -> None:
    """Update specific configuration values."""
    global _config
    with _config_lock:
        for key, value in kwargs.items():
            if hasattr(_config, key):
                setattr(_config, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")


class RendererRegistry:
    """Thread-safe registry for line renderers with auto-selection."""

    # Priority order: Rich > Tqdm
    PRIORITY = ('rich', 'tqdm')

    def __init__(self):
        self._lock = RLock()
        self._renderers: Dict[str, Type[ProgressRenderer]] = {}
        self._cached_selection: Optional[Type[ProgressRenderer]] = None

    def register(self, name: str, renderer_class: Type[ProgressRenderer]) -> None:
        """Register a renderer class."""
        with self._lock:
            self._renderers[name] = renderer_class
            # Invalidate cached selection
            self._cached_selection = None
            logger.debug(f"Registered renderer: {name}")

    def get_renderer(self, name: str) -> Optional[Type[ProgressRenderer]]:
        """Get a specific renderer by name."""
        with self._lock:
            return self._renderers.get(name)

    def auto_select(self) -> Optional[Type[ProgressRenderer]]:
        """
        Select the preferred renderer, or the best available one.

        The preferred renderer comes from ProgressConfig.preferred_renderer;
        "auto" walks the priority order.
        """
        preferred = get_config().preferred_renderer

        with self._lock:
            if preferred != "auto":
                renderer_class = self._renderers.get(preferred)
                if renderer_class is not None and self._check(preferred, renderer_class):
                    return renderer_class
                logger.warning(f"Preferred renderer '{preferred}' unavailable, selecting automatically")

            if self._cached_selection is not None:
                return self._cached_selection

            selected = None
            for name in self.PRIORITY:
                renderer_class = self._renderers.get(name)
                if renderer_class is not None and self._check(name, renderer_class):
                    selected = renderer_class
                    break

            self._cached_selection = selected
            if selected:
                logger.debug(f"Auto-selected renderer: {selected.__name__}")
            else:
                logger.warning("No suitable line renderer found")
            return selected

    def _check(self, name: str, renderer_class: Type[ProgressRenderer]) -> bool:
        try:
            return renderer_class().is_available()
        except Exception as e:
            logger.debug(f"Renderer {name} unavailable: {e}")
            return False

    def clear_cache(self) -> None:
        """Clear the renderer selection cache."""
        with self._lock:
            self._cached_selection = None

    def list_available(self) -> Dict[str, bool]:
        """List all renderers and their availability."""
        with self._lock:
            return {
                name: self._check(name, renderer_class)
                for name, renderer_class in self._renderers.items()
            }


# Global renderer registry
_renderer_registry = RendererRegistry()


def get_renderer_registry() -> RendererRegistry:
    """Get the global renderer registry."""
    return _renderer_registry


def auto_select_renderer() -> Optional[ProgressRenderer]:
    """
    Auto-select and instantiate the best available renderer.

    Returns:
        ProgressRenderer instance or None if no renderer available
    """
    renderer_class = _renderer_registry.auto_select()
    if renderer_class is None:
        return None

    try:
        return renderer_class()
    except Exception as e:
        logger.error(f"Failed to instantiate renderer {renderer_class.__name__}: {e}")
        return None


def _initialize_default_renderers():
    """Initialize the default renderer registry."""
    from clog.progress.display.rich_renderer import RichLineRenderer
    from clog.progress.display.tqdm_renderer import TqdmLineRenderer

    _renderer_registry.register('rich', RichLineRenderer)
    _renderer_registry.register('tqdm', TqdmLineRenderer)


# Initialize on import
_initialize_default_renderers()
