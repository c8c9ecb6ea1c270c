"""Unit tests for single-path resolution."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from treefs.filesystem.errors import RecursiveSymlinkError, TraversalIOError
from treefs.filesystem.models import EntryKind
from treefs.filesystem.resolver import resolve, resolve_async


class TestResolve:
    """Tests for the synchronous resolver."""

    def test_file(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("x")

        entry = resolve(str(target))

        assert entry.kind == EntryKind.FILE
        assert entry.basename == "a.txt"
        assert entry.stat is not None
        assert entry.stat.st_size == 1

    def test_directory(self, tmp_path: Path) -> None:
        entry = resolve(str(tmp_path))

        assert entry.kind == EntryKind.DIRECTORY
        assert entry.is_dir

    def test_explicit_basename(self, tmp_path: Path) -> None:
        assert resolve(str(tmp_path), "given").basename == "given"

    def test_symlink_to_directory(self, tmp_path: Path) -> None:
        (tmp_path / "d").mkdir()
        os.symlink(str(tmp_path / "d"), str(tmp_path / "link"))

        entry = resolve(str(tmp_path / "link"))

        assert entry.kind == EntryKind.SYMLINK
        assert entry.link_target == str(tmp_path / "d")
        assert entry.is_dir
        assert not entry.broken

    def test_relative_link_resolved_from_link_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "real.txt").write_text("x")
        os.symlink("real.txt", str(sub / "link"))
        monkeypatch.chdir(tmp_path)

        entry = resolve(str(sub / "link"))

        assert entry.link_target == "real.txt"
        assert entry.is_file
        assert not entry.broken

    def test_broken_link(self, tmp_path: Path) -> None:
        os.symlink(str(tmp_path / "nowhere"), str(tmp_path / "dangling"))

        entry = resolve(str(tmp_path / "dangling"))

        assert entry.kind == EntryKind.SYMLINK
        assert entry.broken
        assert entry.is_file
        assert not entry.is_dir

    def test_recursive_link(self, tmp_path: Path) -> None:
        (tmp_path / "real").write_text("x")
        os.symlink(str(tmp_path / "real"), str(tmp_path / "first"))
        os.symlink(str(tmp_path / "first"), str(tmp_path / "second"))

        with pytest.raises(RecursiveSymlinkError) as exc_info:
            resolve(str(tmp_path / "second"))

        assert exc_info.value.path == str(tmp_path / "second")
        assert exc_info.value.link_target == str(tmp_path / "first")

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(TraversalIOError) as exc_info:
            resolve(str(tmp_path / "missing"))

        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert exc_info.value.path == str(tmp_path / "missing")

    def test_readlink_failure(self, tmp_path: Path) -> None:
        os.symlink("anything", str(tmp_path / "link"))

        with (
            patch("treefs.filesystem.resolver.os.readlink", side_effect=PermissionError(13, "no")),
            pytest.raises(TraversalIOError),
        ):
            resolve(str(tmp_path / "link"))


class TestResolveAsync:
    """Tests for the asynchronous resolver."""

    @pytest.mark.asyncio
    async def test_matches_sync(self, tmp_path: Path) -> None:
        (tmp_path / "d").mkdir()
        (tmp_path / "f").write_text("x")
        os.symlink(str(tmp_path / "d"), str(tmp_path / "l"))
        os.symlink(str(tmp_path / "gone"), str(tmp_path / "b"))

        for name in ("d", "f", "l", "b"):
            path = str(tmp_path / name)
            assert await resolve_async(path) == resolve(path)

    @pytest.mark.asyncio
    async def test_recursive_link(self, tmp_path: Path) -> None:
        (tmp_path / "real").write_text("x")
        os.symlink(str(tmp_path / "real"), str(tmp_path / "first"))
        os.symlink(str(tmp_path / "first"), str(tmp_path / "second"))

        with pytest.raises(RecursiveSymlinkError):
            await resolve_async(str(tmp_path / "second"))

    @pytest.mark.asyncio
    async def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(TraversalIOError):
            await resolve_async(str(tmp_path / "missing"))
