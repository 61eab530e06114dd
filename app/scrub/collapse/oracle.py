"""Directory emptiness check."""

import os
from collections.abc import Set

from scrub.collapse.models import Outcome
from scrub.utils.formatting import print_error


def is_empty(path: str, ignoring: Set[str] = frozenset()) -> bool:
    """Check whether a directory has no entries besides ``.`` and ``..``.

    Entries whose full path is in ``ignoring`` are not counted; a simulated
    run passes the paths it pretended to remove so the cascade can be
    reported as a real run would perform it.

    A directory that cannot be opened is reported as an error and treated
    as non-empty, so nothing is removed on its account.

    Args:
        path: Directory to inspect.
        ignoring: Full entry paths to disregard.

    Returns:
        True if no counted entry exists.
    """
    try:
        with os.scandir(path) as entries:
            return all(entry.path in ignoring for entry in entries)
    except OSError as e:
        reason = Outcome.io_error(path, e).describe_error()
        print_error(f"Could not open directory {path} to check emptiness: {reason}")
        return False
