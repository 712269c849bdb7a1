"""
clog - Structured Console Logging

Leveled console logger with structured fields and animated progress output
(spinners, pulses, shimmers and progress bars).

Usage:
    import clog

    clog.info("Starting", env="prod")
    err = clog.bar("Downloading", 100).progress(download).send()
"""

from clog.color import ColorStop, color_stop
from clog.exceptions import (
    AnimationCancelledError,
    AnimationTimeoutError,
    ClogError,
    GroupClosedError,
    GroupError,
    InvalidColorModeError,
    InvalidHyperlinkPresetError,
    InvalidLevelError,
)
from clog.fields import Elapsed, Field, Percent, QuoteMode
from clog.hyperlink import (
    Link,
    PathLink,
    hyperlink,
    path_link,
    set_hyperlink_format,
    set_hyperlink_preset,
    set_hyperlinks_enabled,
    url_link,
)
from clog.levels import Level, parse_level
from clog.logger import (
    Logger,
    Part,
    bar,
    debug,
    dry,
    error,
    fatal,
    get_default,
    group,
    info,
    pulse,
    set_default,
    shimmer,
    spinner,
    trace,
    warn,
    with_,
)
from clog.output import ColorMode, Output
from clog.styles import Styles, default_styles

__version__ = "0.4.0"

__all__ = [
    'ColorStop',
    'color_stop',
    'AnimationCancelledError',
    'AnimationTimeoutError',
    'ClogError',
    'GroupClosedError',
    'GroupError',
    'InvalidColorModeError',
    'InvalidHyperlinkPresetError',
    'InvalidLevelError',
    'Elapsed',
    'Field',
    'Percent',
    'QuoteMode',
    'Link',
    'PathLink',
    'hyperlink',
    'path_link',
    'set_hyperlink_format',
    'set_hyperlink_preset',
    'set_hyperlinks_enabled',
    'url_link',
    'Level',
    'parse_level',
    'Logger',
    'Part',
    'bar',
    'debug',
    'dry',
    'error',
    'fatal',
    'get_default',
    'group',
    'info',
    'pulse',
    'set_default',
    'shimmer',
    'spinner',
    'trace',
    'warn',
    'with_',
    'ColorMode',
    'Output',
    'Styles',
    'default_styles',
]
