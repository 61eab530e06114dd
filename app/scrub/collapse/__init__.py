"""Tree collapse module.

This module provides the clobber policy, entry classification, single
entry removal, the recursive tree walker and the per-root run driver.
"""

from scrub.collapse.classifier import classify_entry, classify_mode
from scrub.collapse.eliminator import FileEliminator
from scrub.collapse.models import DirectoryEntry, EntryKind, Outcome
from scrub.collapse.oracle import is_empty
from scrub.collapse.policy import (
    is_hidden,
    should_clobber,
    should_clobber_extension,
    should_clobber_name,
)
from scrub.collapse.runner import RunReport, collapse_roots
from scrub.collapse.walker import TreeWalker

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "FileEliminator",
    "Outcome",
    "RunReport",
    "TreeWalker",
    "classify_entry",
    "classify_mode",
    "collapse_roots",
    "is_empty",
    "is_hidden",
    "should_clobber",
    "should_clobber_extension",
    "should_clobber_name",
]
