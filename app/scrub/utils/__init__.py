"""Utility modules for scrub.

This module exports the shared console and message printers.
"""

from scrub.utils.formatting import (
    err_console,
    print_action,
    print_error,
    print_success,
    print_verbose,
    print_warning,
)

__all__ = [
    "err_console",
    "print_action",
    "print_error",
    "print_success",
    "print_verbose",
    "print_warning",
]
