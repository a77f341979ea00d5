"""Color theme for tree output.

Colors come from ThemeColors defaults, overridden key by key from
``~/.config/fstree/theme.toml``::

    [colors]
    dir_opened = "#69B9A1"
    selected = "#faf870"

Besides the general message styles, the Rich theme defines one style per
kind of tree line (opened directory, closed directory, file, selected
node) and one for the cursor positions printed in front of each line.
"""

import logging
import sys
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from rich.theme import Theme

from fstree.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for every themed style."""

    model_config = ConfigDict(extra="forbid")

    # Messages and tables
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Tree lines
    dir_opened: str = "#69B9A1"
    dir_closed: str = "#0e8ac8"
    file: str = "#ffffff"
    selected: str = "#faf870"
    position: str = "#226666"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: ValidationInfo) -> str:
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if color[:1] != "#":
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        if len(color) not in (4, 7):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if not _HEX_DIGITS.issuperset(color[1:]):
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the string values of the [colors] table of a theme file.

    Returns None when the file is missing or unreadable, so callers fall
    back to the defaults.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Build the theme colors, applying overrides from a theme file.

    Args:
        path: Theme file. Defaults to the XDG config location.

    Returns:
        Validated colors; the defaults if the overrides are invalid.
    """
    theme_path = path or get_theme_path()
    overrides = _load_toml_colors(theme_path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors(**overrides)
    except ValueError as e:
        logger.warning("Invalid colors in %s: %s", theme_path, e)
        print(f"Warning: Invalid theme configuration in {theme_path}: {e}", file=sys.stderr)
        return ThemeColors()
    logger.debug("Applied %d color override(s) from %s", len(overrides), theme_path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map theme colors onto Rich style names."""
    c = colors or load_theme()
    return Theme(
        {
            "text": c.text,
            "muted": c.muted,
            "dim": c.muted,
            "header": c.header,
            "bold_header": f"bold {c.header}",
            "border": c.border,
            "success": c.success,
            "warning": c.warning,
            "error": f"bold {c.error}",
            "info": c.info,
            "dir_opened": f"bold {c.dir_opened}",
            "dir_closed": c.dir_closed,
            "file": c.file,
            "selected": f"bold {c.selected}",
            "position": c.position,
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme, loaded on first use and cached."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Reload the theme from disk, replacing the cached one."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
