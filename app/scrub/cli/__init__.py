"""CLI package for scrub.

This package contains the Typer application and the run summary display.
"""

from scrub.cli.main import app, main, run

__all__ = ["app", "main", "run"]
