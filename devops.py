"""DevOps tasks for scrub.

Usage: uv run devops.py <task>
Tasks: fmt, test, clean
"""

import errno
import subprocess
import sys

# Source roots are never empty, so scrub reports ENOTEMPTY for them
_CLEAN_OK = (0, errno.ENOTEMPTY)


def _run(commands: list[list[str]], ok_codes: tuple[int, ...] = (0,)) -> None:
    """Execute a sequence of commands, exiting on the first unexpected status."""
    for cmd in commands:
        returncode = subprocess.run(cmd, check=False).returncode  # nosec: B603, B607
        if returncode not in ok_codes:
            print(f"Command failed: {' '.join(cmd)}", file=sys.stderr)
            sys.exit(returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run(
        [
            ["ruff", "format", "."],
            ["ruff", "check", "--fix", "."],
        ]
    )


def test() -> None:
    """Run tests with PyTest."""
    _run([["uv", "run", "pytest", "-q"]])


def clean() -> None:
    """Remove bytecode and the __pycache__ directories it leaves behind, using scrub itself."""
    _run(
        [
            ["uv", "run", "scrub", "-c", "pyc", "-c", "pyo", "app", "tests"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache"],
        ],
        ok_codes=_CLEAN_OK,
    )


TASKS = {"fmt": format_code, "test": test, "clean": clean}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(errno.EINVAL)
    TASKS[sys.argv[1]]()
