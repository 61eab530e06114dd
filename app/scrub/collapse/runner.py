"""Per-root driver and run report.

Runs the tree walker over every root given on the command line and
records which roots are still non-empty afterwards.
"""

import errno
import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass, field

from scrub.collapse.eliminator import FileEliminator
from scrub.collapse.models import Outcome
from scrub.collapse.oracle import is_empty
from scrub.collapse.walker import TreeWalker
from scrub.core.config import ScrubConfig
from scrub.utils.formatting import print_error, print_verbose

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Aggregated result of a collapse run.

    Attributes:
        roots: Roots in the order they were processed.
        dirty_roots: Root directories that still have entries.
        root_errors: Roots that could not be inspected, with their errno.
        node_roots: Outcome for each root that is not a directory.
        removals: Outcome of every removal attempt.
    """

    roots: list[str] = field(default_factory=list)
    dirty_roots: list[str] = field(default_factory=list)
    root_errors: dict[str, int] = field(default_factory=dict)
    node_roots: dict[str, Outcome] = field(default_factory=dict)
    removals: list[Outcome] = field(default_factory=list)

    @property
    def dirty(self) -> bool:
        """True if any processed root directory is not empty."""
        return bool(self.dirty_roots)

    @property
    def removed_count(self) -> int:
        return sum(1 for r in self.removals if r.removed)

    @property
    def simulated_count(self) -> int:
        return sum(1 for r in self.removals if r.dry_run)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.removals if r.failed)

    @property
    def exit_code(self) -> int:
        """Process exit status for this run.

        ENOTEMPTY if any root is dirty, otherwise the errno of the first
        root that could not be inspected, otherwise 0.
        """
        if self.dirty:
            return errno.ENOTEMPTY
        return next(iter(self.root_errors.values()), 0)


def collapse_roots(config: ScrubConfig, roots: Iterable[str]) -> RunReport:
    """Collapse each root and report which ones were left non-empty.

    Directories are walked and then checked for emptiness; any other root
    (a file, pipe, link to a file ...) is matched against the clobber rules
    directly. Roots are resolved through symlinks.

    Args:
        config: Run configuration.
        roots: Paths named by the user.

    Returns:
        RunReport for the whole run.
    """
    eliminator = FileEliminator(config)
    walker = TreeWalker(config, eliminator)
    report = RunReport()

    for root in roots:
        report.roots.append(root)

        try:
            mode = os.stat(root).st_mode
        except OSError as e:
            outcome = Outcome.io_error(root, e)
            print_error(f"Could not stat {root}: {outcome.describe_error()}")
            report.root_errors[root] = outcome.error_code or errno.EIO
            continue

        if stat.S_ISDIR(mode):
            print_verbose(config, f"Processing directory {root}")
            outcome = walker.process_directory(root)
            if outcome.failed:
                print_error(f"Could not process directory {root}: {outcome.describe_error()}")

            if not is_empty(root, ignoring=eliminator.simulated_paths):
                logger.debug("Root %s is not empty", root)
                report.dirty_roots.append(root)
        else:
            print_verbose(config, f"Processing node {root}")
            report.node_roots[root] = eliminator.process_file(root)

    report.removals = list(eliminator.removals)
    return report
