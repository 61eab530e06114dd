"""Single-entry removal.

The FileEliminator decides whether one path is clobbered and performs
(or simulates) its removal, choosing rmdir or unlink from the entry's
current type.
"""

import logging
import stat
from collections.abc import Set
from pathlib import Path

from scrub.collapse.models import Outcome
from scrub.collapse.policy import should_clobber
from scrub.core.config import ScrubConfig
from scrub.utils.formatting import print_action, print_error

logger = logging.getLogger(__name__)


class FileEliminator:
    """Removes individual filesystem entries.

    Every removal attempt, real, simulated or failed, is kept in
    ``removals`` for the run report. In simulate mode the pretended
    removals are also tracked in ``simulated_paths`` so emptiness checks
    can discount them.

    Attributes:
        removals: Outcomes of all removal attempts, in order.
    """

    def __init__(self, config: ScrubConfig) -> None:
        """Initialize the FileEliminator.

        Args:
            config: Run configuration (clobber rules and simulate flag).
        """
        self._config = config
        self.removals: list[Outcome] = []
        self._simulated: set[str] = set()

    @property
    def simulated_paths(self) -> Set[str]:
        """Paths a simulated run pretended to remove (a live, read-only view)."""
        return self._simulated

    def process_file(self, path: str) -> Outcome:
        """Remove a path if its basename matches the clobber rules.

        Args:
            path: Path of a file, special file or (for roots) any node.

        Returns:
            Ok when not clobbered or removed; the I/O error otherwise.
        """
        basename = Path(path).name
        if not should_clobber(self._config, basename):
            return Outcome.ok(path)

        outcome = self.unlink_path(path)
        if outcome.failed:
            print_error(f"Could not unlink {path}: {outcome.describe_error()}")
        return outcome

    def unlink_path(self, path: str) -> Outcome:
        """Remove a single entry without consulting the clobber rules.

        Directories are removed with rmdir (and so must be empty); every
        other type, including symlinks to directories, with unlink.

        Args:
            path: Path to remove.

        Returns:
            Outcome of the removal.
        """
        if self._config.simulate:
            print_action(f"unlink({path})")
            self._simulated.add(path)
            outcome = Outcome.ok(path, dry_run=True)
            self.removals.append(outcome)
            return outcome

        target = Path(path)
        try:
            if stat.S_ISDIR(target.lstat().st_mode):
                target.rmdir()
            else:
                target.unlink()
        except OSError as e:
            outcome = Outcome.io_error(path, e)
        else:
            logger.debug("Removed %s", path)
            outcome = Outcome.ok(path, removed=True)

        self.removals.append(outcome)
        return outcome
