"""Recursive tree collapse.

The TreeWalker descends depth-first, clobbering matched files on the way,
and after each subdirectory has been fully processed removes it if it
ended up empty. Because children are resolved before their parent looks
at them, a chain of directories that only held clobbered files collapses
upward in a single pass.
"""

import logging
import os

from scrub.collapse.classifier import to_directory_entry
from scrub.collapse.eliminator import FileEliminator
from scrub.collapse.models import DirectoryEntry, Outcome
from scrub.collapse.oracle import is_empty
from scrub.collapse.policy import is_hidden
from scrub.core.config import ScrubConfig
from scrub.utils.formatting import print_error, print_verbose

logger = logging.getLogger(__name__)


class TreeWalker:
    """Collapses directory trees.

    Filesystem failures are logged and never abort the walk: a failure
    deep in a subtree leaves siblings and other roots unaffected.

    Args:
        config: Run configuration.
        eliminator: Performs the individual removals. A new one is created
            from ``config`` when omitted.
    """

    def __init__(self, config: ScrubConfig, eliminator: FileEliminator | None = None) -> None:
        self._config = config
        self._eliminator = eliminator if eliminator is not None else FileEliminator(config)

    @property
    def eliminator(self) -> FileEliminator:
        return self._eliminator

    def process_directory(self, path: str) -> Outcome:
        """Collapse everything below ``path``; ``path`` itself is kept.

        Args:
            path: Directory to process.

        Returns:
            Ok, or the I/O error if the directory could not be opened or
            its listing broke off part-way.
        """
        try:
            entries = os.scandir(path)
        except OSError as e:
            return Outcome.io_error(path, e)

        with entries:
            try:
                for raw_entry in entries:
                    self._process_entry(to_directory_entry(raw_entry))
            except OSError as e:
                outcome = Outcome.io_error(path, e)
                print_error(f"Listing of {path} failed part-way: {outcome.describe_error()}")
                return outcome

        return Outcome.ok(path)

    def _process_entry(self, entry: DirectoryEntry) -> None:
        """Dispatch one entry according to its kind."""
        if entry.is_directory:
            if self._config.preserve_hidden and is_hidden(entry.name):
                logger.debug("Preserving hidden directory %s", entry.full_path)
                return
            self._collapse_subdirectory(entry.full_path)
            return

        if entry.is_special and self._config.preserve_special:
            logger.debug("Preserving special file %s", entry.full_path)
            return

        # Regular, unknown, and unpreserved special files
        outcome = self._eliminator.process_file(entry.full_path)
        if outcome.failed:
            print_verbose(
                self._config,
                f"process_file({entry.full_path}) failed: {outcome.describe_error()}",
            )

    def _collapse_subdirectory(self, path: str) -> None:
        """Process a subdirectory, then remove it if nothing is left inside.

        The removal depends on emptiness alone, not on the clobber rules.
        """
        outcome = self.process_directory(path)
        if outcome.failed:
            print_error(f"Could not process directory {path}: {outcome.describe_error()}")
            return

        if not is_empty(path, ignoring=self._eliminator.simulated_paths):
            print_verbose(self._config, f"Directory {path} is not empty. Not unlinking.")
            return

        removal = self._eliminator.unlink_path(path)
        if removal.failed:
            print_error(f"Could not unlink directory {path}: {removal.describe_error()}")
