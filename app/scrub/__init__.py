"""scrub - collapse directory trees.

Deletes files matched by name or extension and removes every directory
that becomes empty as a result, bottom-up.
"""

__version__ = "0.3.0"
