"""Collapse domain models.

This module defines the transient values produced while walking a tree:
the kind of each directory entry, the entry itself, and the outcome of
processing a single path.
"""

import errno
import os
from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Kind of a directory entry as seen by the walker.

    Attributes:
        DIRECTORY: Directory, recursed into.
        REGULAR_FILE: Regular file, subject to clobber matching.
        SPECIAL_FILE: Block/character device, FIFO, symlink or socket.
        UNKNOWN: Type could not be determined; handled like REGULAR_FILE.
    """

    DIRECTORY = "directory"
    REGULAR_FILE = "regular_file"
    SPECIAL_FILE = "special_file"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A single entry read from a directory.

    Attributes:
        name: Basename of the entry.
        full_path: Parent path joined with the basename.
        kind: Classified entry kind.
    """

    name: str
    full_path: str
    kind: EntryKind

    @property
    def is_directory(self) -> bool:
        """Check if the entry is a directory (never a link to one)."""
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_special(self) -> bool:
        """Check if the entry is a device, FIFO, socket or symlink."""
        return self.kind == EntryKind.SPECIAL_FILE


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of processing a single path: ok, or an I/O error code.

    Attributes:
        path: Path that was processed.
        error_code: OS error number, None when the operation succeeded.
        error: OS error message, None when the operation succeeded.
        removed: Whether the path was actually removed from the filesystem.
        dry_run: Whether the removal was only simulated.
    """

    path: str
    error_code: int | None = None
    error: str | None = None
    removed: bool = False
    dry_run: bool = False

    @classmethod
    def ok(cls, path: str, *, removed: bool = False, dry_run: bool = False) -> "Outcome":
        """Create a successful outcome."""
        return cls(path=path, removed=removed, dry_run=dry_run)

    @classmethod
    def io_error(cls, path: str, exc: OSError) -> "Outcome":
        """Create a failed outcome from an OSError.

        Errors without an errno (rare, e.g. raised by wrappers) are
        reported as EIO.
        """
        code = exc.errno if exc.errno is not None else errno.EIO
        return cls(path=path, error_code=code, error=exc.strerror or os.strerror(code))

    @property
    def success(self) -> bool:
        """Check if the path was processed without an OS error."""
        return self.error_code is None

    @property
    def failed(self) -> bool:
        """Check if processing the path hit an OS error."""
        return self.error_code is not None

    def describe_error(self) -> str:
        """Format the error as ``[Errno N] message`` for log lines."""
        if self.error_code is None:
            return ""
        return f"[Errno {self.error_code}] {self.error or os.strerror(self.error_code)}"
