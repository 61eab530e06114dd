"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from scrub.core.config import ScrubConfig


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so no user config leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Build a directory tree under tmp_path/root.

    Entries ending in "/" are created as directories, everything else as
    a small file (parents created as needed).
    """

    def _make(entries: list[str]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("content")
        return root

    return _make


@pytest.fixture
def tmp_config() -> ScrubConfig:
    """Configuration clobbering *.tmp and Thumbs.db."""
    return ScrubConfig(
        clobber_extensions=frozenset({"tmp"}),
        clobber_names=frozenset({"Thumbs.db"}),
    )


@pytest.fixture
def snapshot() -> Callable[[Path], set[str]]:
    """Relative paths of everything below a root, directories suffixed with "/"."""

    def _snapshot(root: Path) -> set[str]:
        result: set[str] = set()
        for path in root.rglob("*"):
            rel = path.relative_to(root).as_posix()
            result.add(f"{rel}/" if path.is_dir() and not path.is_symlink() else rel)
        return result

    return _snapshot
