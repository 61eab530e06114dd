"""Colours for scrub's stderr output.

The bundled ``data/theme.toml`` defines every colour. A user file at
``~/.config/scrub/theme.toml`` may override any subset of the same
``[colors]`` table; a broken override is reported once and ignored.
"""

import logging
import re
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from scrub.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Rich style per output role; placeholders name ThemeColors fields
_STYLE_TEMPLATES: dict[str, str] = {
    "text": "{text}",
    "muted": "{muted}",
    "dim": "{muted}",
    "header": "{header}",
    "bold_header": "bold {header}",
    "border": "{border}",
    "success": "{success}",
    "warning": "{warning}",
    "error": "bold {error}",
    "removed": "{removed}",
    "simulated": "{simulated}",
}


class ThemeColors(BaseModel):
    """Hex colours for each output role (``#RGB`` or ``#RRGGBB``)."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    removed: str = "#f53263"
    simulated: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: {v!r} is not a #RGB or #RRGGBB colour"
            raise ValueError(msg)
        return v.strip()


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped inside the package."""
    return resources.files("scrub.data").joinpath("theme.toml")  # type: ignore[return-value]


def read_theme_file(path: Path) -> dict[str, str]:
    """Read the string entries of the ``[colors]`` table.

    A missing file yields no colours. An unreadable or malformed file is
    reported on stderr and also yields none.
    """
    try:
        with open(path, "rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        print(f"Warning: Ignoring theme file {path}: {e}", file=sys.stderr)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Bundled colours with the user's overrides applied on top."""
    colors = read_theme_file(Path(get_bundled_theme_path()))
    overrides = read_theme_file(get_theme_path())
    if overrides:
        logger.debug("Applying %d theme overrides from %s", len(overrides), get_theme_path())

    try:
        return ThemeColors(**{**colors, **overrides})
    except ValidationError as e:
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the shared console."""
    values = (colors or load_theme()).model_dump()
    return Theme({role: template.format(**values) for role, template in _STYLE_TEMPLATES.items()})


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme, loaded on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
