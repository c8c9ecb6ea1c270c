"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

FILES_PER_DIR = 5
TOP_DIRS = ("A", "B", "C")
MID_DIRS = ("a", "b", "c")
LEAF_DIRS = ("1", "2", "3")
LINK_NAME = "link-A-c-1"


def _add_files(directory: Path) -> None:
    for i in range(FILES_PER_DIR):
        (directory / f"file{i}.txt").write_text(f"{directory.name}/{i}\n")


def build_fixture_tree(root: Path, depth: int = 3, symlink: bool = True) -> Path:
    """Create the reference tree under ``root``.

    Every directory holds five files. With ``depth=3`` the root has
    A, B, C; each of those has a, b, c; each of those has 1, 2, 3. The
    root also holds an absolute symlink ``link-A-c-1`` to ``A/c/1``.
    That is 241 entries over 5 depths.
    """
    root.mkdir(parents=True, exist_ok=True)
    _add_files(root)
    levels = (TOP_DIRS, MID_DIRS, LEAF_DIRS)[:depth]

    parents = [root]
    for names in levels:
        children: list[Path] = []
        for parent in parents:
            for name in names:
                child = parent / name
                child.mkdir()
                _add_files(child)
                children.append(child)
        parents = children

    if symlink and depth >= 3:
        os.symlink(str(root / "A" / "c" / "1"), str(root / LINK_NAME))
    return root


@pytest.fixture
def create_tree(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a reference tree below ``tmp_path``."""

    def _create(name: str = "fixture", depth: int = 3, symlink: bool = True) -> Path:
        return build_fixture_tree(tmp_path / name, depth=depth, symlink=symlink)

    return _create


@pytest.fixture
def fixture_tree(create_tree: Callable[..., Path]) -> Path:
    """The full 241-entry reference tree."""
    return create_tree()


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "xdg-config"
    home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home
