"""Clobber and hidden-name policy.

Pure predicates deciding whether a basename is subject to deletion and
whether it counts as hidden. Matching is exact and case-sensitive; there
is no globbing.
"""

from scrub.core.config import ScrubConfig


def should_clobber_name(config: ScrubConfig, name: str) -> bool:
    """Check if a basename is listed for deletion verbatim."""
    return name in config.clobber_names


def should_clobber_extension(config: ScrubConfig, extension: str) -> bool:
    """Check if an extension (no leading dot) is listed for deletion."""
    return extension in config.clobber_extensions


def should_clobber(config: ScrubConfig, basename: str) -> bool:
    """Check if a file should be deleted according to the configuration.

    The exact name is checked first. Otherwise the extension is the text
    after the last ``.``; a name without any ``.`` can only match by name.

    Args:
        config: Run configuration.
        basename: File name without directory components.

    Returns:
        True if the file is to be clobbered.
    """
    if should_clobber_name(config, basename):
        return True

    _, dot, extension = basename.rpartition(".")
    if not dot:
        return False
    return should_clobber_extension(config, extension)


def is_hidden(basename: str) -> bool:
    """Check if a name is hidden (begins with ``.``).

    ``.`` and ``..`` are hidden too; callers never see them from scandir.
    """
    return basename.startswith(".")
