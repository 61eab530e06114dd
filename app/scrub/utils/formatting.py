"""Rich console formatting utilities.

Every diagnostic and simulated-action line scrub produces goes to
stderr through ``err_console``, one line per event. Paths are escaped
before being embedded in markup so names containing ``[`` print verbatim.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from scrub.core.theme import get_theme

if TYPE_CHECKING:
    from scrub.core.config import ScrubConfig


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stderr.isatty():
        return "truecolor"
    return None


# Shared stderr console (theme loaded once at import).
# soft_wrap keeps long paths on a single line.
err_console = Console(
    theme=get_theme(),
    stderr=True,
    color_system=_detect_color_system(),
    soft_wrap=True,
    highlight=False,
    emoji=False,
)


def print_action(message: str) -> None:
    """Print a simulated filesystem action, e.g. ``unlink(/tmp/x.bak)``."""
    err_console.print(f"[simulated]{escape(message)}[/]")


def print_verbose(config: ScrubConfig, message: str) -> None:
    """Print an informational line only when the run is verbose."""
    if config.verbose:
        err_console.print(f"[muted]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[success]{escape(message)}[/]")
