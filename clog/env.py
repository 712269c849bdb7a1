"""
Environment Configuration

Reads logger settings from environment variables (optionally seeded from a
.env file via python-dotenv):

- <PREFIX>_LOG_LEVEL / CLOG_LOG_LEVEL: minimum level; trace and debug also
  turn on timestamps
- <PREFIX>_RENDERER / CLOG_RENDERER: preferred progress renderer
- <PREFIX>_HYPERLINK_FORMAT: hyperlink preset applied to every slot
- <PREFIX>_HYPERLINK_{PATH,FILE,DIR,LINE,COLUMN}_FORMAT: per-slot URL
  templates (or preset names), applied after the preset
- NO_COLOR: disables colours for auto colour mode outputs
"""

import logging
import os
from threading import RLock
from typing import Optional, TYPE_CHECKING

from dotenv import load_dotenv

from clog.exceptions import InvalidHyperlinkPresetError, InvalidLevelError
from clog.hyperlink import SLOTS, set_hyperlink_format, set_hyperlink_preset
from clog.levels import Level, parse_level

if TYPE_CHECKING:
    from clog.logger import Logger

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "CLOG"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_RENDERER = "RENDERER"
ENV_HYPERLINK_FORMAT = "HYPERLINK_FORMAT"

_env_prefix = ""
_env_lock = RLock()
_dotenv_loaded = False


def load_environment(dotenv_path: Optional[str] = None) -> bool:
    """
    Load variables from a .env file once per process.

    Existing environment variables are never overridden.

    Returns:
        True if a .env file was found and loaded
    """
    global _dotenv_loaded
    with _env_lock:
        if _dotenv_loaded and dotenv_path is None:
            return False
        _dotenv_loaded = True
        return load_dotenv(dotenv_path, override=False)


def set_env_prefix(prefix: str) -> None:
    """
    Set a custom prefix checked before CLOG_ (e.g. "MYAPP" → MYAPP_LOG_LEVEL).

    The default logger is reconfigured immediately.
    """
    global _env_prefix
    with _env_lock:
        _env_prefix = prefix.rstrip("_")

    from clog.logger import get_default
    configure_from_env(get_default())


def get_env_prefix() -> str:
    with _env_lock:
        return _env_prefix


def env_var_name(suffix: str) -> str:
    """Name of the variable that is consulted first for suffix."""
    prefix = get_env_prefix() or DEFAULT_ENV_PREFIX
    return f"{prefix}_{suffix}"


def get_env(suffix: str) -> str:
    """Value for suffix under the custom prefix, falling back to CLOG_."""
    prefix = get_env_prefix()
    if prefix:
        value = os.getenv(f"{prefix}_{suffix}", "")
        if value:
            return value
    return os.getenv(f"{DEFAULT_ENV_PREFIX}_{suffix}", "")


def configure_from_env(target: "Logger") -> None:
    """Apply environment settings to a logger and the progress configuration."""
    load_environment()

    level_name = get_env(ENV_LOG_LEVEL).strip()
    if level_name:
        try:
            level = parse_level(level_name)
        except InvalidLevelError:
            logger.warning(
                f"Unrecognised log level '{level_name}' in {env_var_name(ENV_LOG_LEVEL)}, keeping {target.level.name.lower()}"
            )
        else:
            target.set_level(level)
            if level <= Level.DEBUG:
                target.set_report_timestamp(True)

    renderer = get_env(ENV_RENDERER).strip().lower()
    if renderer:
        if renderer in ("auto", "rich", "tqdm"):
            from clog.progress.config import update_config
            update_config(preferred_renderer=renderer)
        else:
            logger.warning(
                f"Invalid renderer '{renderer}' in {env_var_name(ENV_RENDERER)}, using 'auto'"
            )

    configure_hyperlinks_from_env()


def configure_hyperlinks_from_env() -> None:
    """Apply the hyperlink preset, then the per-slot template overrides."""
    preset = get_env(ENV_HYPERLINK_FORMAT).strip()
    if preset:
        try:
            set_hyperlink_preset(preset)
        except InvalidHyperlinkPresetError as e:
            logger.warning(f"{e} in {env_var_name(ENV_HYPERLINK_FORMAT)}")

    for slot in SLOTS:
        template = get_env(f"HYPERLINK_{slot.upper()}_FORMAT").strip()
        if template:
            set_hyperlink_format(slot, template)
