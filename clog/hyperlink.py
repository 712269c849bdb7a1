"""
Terminal Hyperlinks

Clickable OSC 8 links for field values. URLs for file paths are built from
configurable templates so a path can open straight in an editor:

- {path}: absolute path of the file or directory
- {line}, {column} (or {col}): position inside the file

Template slots fall back to each other when unset:

- dir    -> path -> file://{path}
- file   -> path -> file://{path}
- line   -> file://{path}
- column -> line -> file://{path}

Links degrade to their display text when the output has colours disabled
or hyperlinks are switched off.
"""

import logging
import os
from threading import RLock
from typing import Dict, NamedTuple, Optional, TYPE_CHECKING

from clog.exceptions import InvalidHyperlinkPresetError

if TYPE_CHECKING:
    from clog.output import Output

logger = logging.getLogger(__name__)

SLOT_PATH = "path"
SLOT_FILE = "file"
SLOT_DIR = "dir"
SLOT_LINE = "line"
SLOT_COLUMN = "column"

SLOTS = (SLOT_PATH, SLOT_FILE, SLOT_DIR, SLOT_LINE, SLOT_COLUMN)


class HyperlinkPreset(NamedTuple):
    """URL templates of a known editor or terminal."""
    description: str
    path: str
    line: str
    column: str


HYPERLINK_PRESETS: Dict[str, HyperlinkPreset] = {
    "cursor": HyperlinkPreset(
        "Cursor (cursor://)",
        "cursor://file{path}",
        "cursor://file{path}:{line}",
        "cursor://file{path}:{line}:{column}",
    ),
    "kitty": HyperlinkPreset(
        "kitty terminal (file:// with fragment line number)",
        "file://{path}",
        "file://{path}#{line}",
        "file://{path}#{line}",
    ),
    "macvim": HyperlinkPreset(
        "MacVim (mvim://)",
        "mvim://open?url=file://{path}",
        "mvim://open?url=file://{path}&line={line}",
        "mvim://open?url=file://{path}&line={line}&column={column}",
    ),
    "subl": HyperlinkPreset(
        "Sublime Text (subl://)",
        "subl://open?url=file://{path}",
        "subl://open?url=file://{path}&line={line}",
        "subl://open?url=file://{path}&line={line}&column={column}",
    ),
    "textmate": HyperlinkPreset(
        "TextMate (txmt://)",
        "txmt://open?url=file://{path}",
        "txmt://open?url=file://{path}&line={line}",
        "txmt://open?url=file://{path}&line={line}&column={column}",
    ),
    "vscode": HyperlinkPreset(
        "VS Code (vscode://)",
        "vscode://file{path}",
        "vscode://file{path}:{line}",
        "vscode://file{path}:{line}:{column}",
    ),
    "vscode-insiders": HyperlinkPreset(
        "VS Code Insiders (vscode-insiders://)",
        "vscode-insiders://file{path}",
        "vscode-insiders://file{path}:{line}",
        "vscode-insiders://file{path}:{line}:{column}",
    ),
    "vscodium": HyperlinkPreset(
        "VSCodium (vscodium://)",
        "vscodium://file{path}",
        "vscodium://file{path}:{line}",
        "vscodium://file{path}:{line}:{column}",
    ),
}

_lock = RLock()
_formats: Dict[str, str] = {}
_enabled = True


class Link(NamedTuple):
    """Field value rendered as text that opens url when clicked."""
    url: str
    text: str


class PathLink(NamedTuple):
    """Field value for a file or directory, optionally at a line and column."""
    path: str
    line: int = 0
    column: int = 0

    def display(self) -> str:
        return path_display_text(self.path, self.line, self.column)

    def url(self) -> str:
        return resolve_path_url(self.path, self.line, self.column)


def url_link(url: str) -> Link:
    """Link whose display text is the URL itself."""
    return Link(url, url)


def hyperlinks_enabled() -> bool:
    with _lock:
        return _enabled


def set_hyperlinks_enabled(enabled: bool) -> None:
    """Switch OSC 8 rendering on or off for every output."""
    global _enabled
    with _lock:
        _enabled = enabled


def _expand_preset(value: str, slot: str) -> str:
    preset = HYPERLINK_PRESETS.get(value.strip().lower())
    if preset is None:
        return value
    if slot == SLOT_LINE:
        return preset.line
    if slot == SLOT_COLUMN:
        return preset.column
    return preset.path


def set_hyperlink_format(slot: str, template: str) -> None:
    """
    Set the URL template of one slot.

    Args:
        slot: One of path, file, dir, line, column
        template: Full template, or a preset name (e.g. "vscode") whose
            template for the slot is used
    """
    if slot not in SLOTS:
        raise ValueError(f"Unknown hyperlink slot '{slot}'. Valid: {', '.join(SLOTS)}")
    with _lock:
        _formats[slot] = _expand_preset(template, slot)


def get_hyperlink_format(slot: str) -> Optional[str]:
    with _lock:
        return _formats.get(slot)


def set_hyperlink_preset(name: str) -> None:
    """
    Configure every slot from a named preset.

    Slots set afterwards override the preset individually.

    Raises:
        InvalidHyperlinkPresetError: If the preset is unknown
    """
    preset = HYPERLINK_PRESETS.get(name.strip().lower())
    if preset is None:
        raise InvalidHyperlinkPresetError(name, sorted(HYPERLINK_PRESETS))
    with _lock:
        _formats[SLOT_PATH] = preset.path
        _formats[SLOT_FILE] = preset.path
        _formats[SLOT_DIR] = preset.path
        _formats[SLOT_LINE] = preset.line
        _formats[SLOT_COLUMN] = preset.column
    logger.debug(f"Hyperlink preset '{name}' applied")


def reset_hyperlinks() -> None:
    """Forget every template and re-enable hyperlinks."""
    global _enabled
    with _lock:
        _formats.clear()
        _enabled = True


def _first_format(*slots: str) -> Optional[str]:
    with _lock:
        for slot in slots:
            template = _formats.get(slot)
            if template:
                return template
    return None


def build_path_url(abs_path: str, line: int = 0, column: int = 0, is_dir: bool = False) -> str:
    """Fill the template chosen by the slot fallback chain for a path."""
    if is_dir:
        template = _first_format(SLOT_DIR, SLOT_PATH)
    elif column > 0:
        template = _first_format(SLOT_COLUMN, SLOT_LINE)
    elif line > 0:
        template = _first_format(SLOT_LINE)
    else:
        template = _first_format(SLOT_FILE, SLOT_PATH)

    if template is None:
        return "file://" + abs_path

    return (
        template.replace("{path}", abs_path)
        .replace("{line}", str(line))
        .replace("{column}", str(column))
        .replace("{col}", str(column))
    )


def resolve_path_url(path: str, line: int = 0, column: int = 0) -> str:
    """URL for path, made absolute against the working directory."""
    abs_path = os.path.abspath(path)
    return build_path_url(abs_path, line, column, os.path.isdir(abs_path))


def path_display_text(path: str, line: int = 0, column: int = 0) -> str:
    """path, path:line or path:line:column."""
    if line > 0 and column > 0:
        return f"{path}:{line}:{column}"
    if line > 0:
        return f"{path}:{line}"
    return path


def link_target(value) -> Optional[str]:
    """URL of a Link or PathLink value, None for anything else."""
    if isinstance(value, Link):
        return value.url
    if isinstance(value, PathLink):
        return value.url()
    return None


def _default_output() -> "Output":
    from clog.logger import get_default
    return get_default().output


def hyperlink(url: str, text: str, output: Optional["Output"] = None) -> str:
    """
    Wrap text in an OSC 8 hyperlink.

    Args:
        url: Link target
        text: Display text
        output: Output whose colour settings apply (default: the default
            logger's output)

    Returns:
        Linked text, or text unchanged when colours or hyperlinks are off
    """
    return (output or _default_output()).hyperlink(url, text)


def path_link(path: str, line: int = 0, column: int = 0, output: Optional["Output"] = None) -> str:
    """Clickable path (with optional line and column) as a string."""
    link = PathLink(path, line, column)
    out = output or _default_output()
    if out.colors_disabled or not hyperlinks_enabled():
        return link.display()
    return out.hyperlink(link.url(), link.display())
