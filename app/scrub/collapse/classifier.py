"""Directory entry classification.

Maps raw entries read with os.scandir to an EntryKind. Symbolic links are
never followed: a link is a special file regardless of its target.
"""

import logging
import os
import stat

from scrub.collapse.models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

_SPECIAL_MODE_TESTS = (
    stat.S_ISBLK,
    stat.S_ISCHR,
    stat.S_ISFIFO,
    stat.S_ISLNK,
    stat.S_ISSOCK,
)


def classify_mode(mode: int) -> EntryKind:
    """Classify an ``st_mode`` value.

    Args:
        mode: Mode bits from an lstat() result.

    Returns:
        EntryKind for the mode; UNKNOWN for types scrub does not recognise.
    """
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    if any(test(mode) for test in _SPECIAL_MODE_TESTS):
        return EntryKind.SPECIAL_FILE
    return EntryKind.UNKNOWN


def classify_entry(entry: os.DirEntry[str]) -> EntryKind:
    """Classify a scandir entry without following symlinks.

    Uses the type cached by the directory read where the filesystem
    reports one, falling back to lstat() otherwise. An entry whose type
    cannot be determined at all is UNKNOWN.

    Args:
        entry: Entry yielded by os.scandir().

    Returns:
        EntryKind classification.
    """
    try:
        if entry.is_symlink():
            return EntryKind.SPECIAL_FILE
        if entry.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return EntryKind.REGULAR_FILE
        mode = entry.stat(follow_symlinks=False).st_mode
    except OSError as e:
        logger.debug("Cannot determine type of %s: %s", entry.path, e)
        return EntryKind.UNKNOWN
    return classify_mode(mode)


def to_directory_entry(entry: os.DirEntry[str]) -> DirectoryEntry:
    """Build the walker's DirectoryEntry for a scandir entry."""
    return DirectoryEntry(name=entry.name, full_path=entry.path, kind=classify_entry(entry))
