"""Generation and removal of index files that re-export sibling modules.

For every directory holding qualifying modules, an index file (by
default ``__init__.py``) is written with one star-import per module.
Discovery runs on ``find_recurse_async``; writes and deletions happen
one at a time through a CancellableSequencer.
"""

import fnmatch
import logging
import os

import aiofiles
import aiofiles.os

from treefs.core.config import IndexConfig
from treefs.filesystem.errors import TraversalIOError
from treefs.filesystem.finder import find_recurse_async
from treefs.filesystem.sequencer import CancellableSequencer

logger = logging.getLogger(__name__)


def is_module(basename: str, config: IndexConfig) -> bool:
    """Whether a file should be re-exported by its directory's index.

    Args:
        basename: File name.
        config: Index settings.

    Returns:
        True for files with the configured suffix that are not the index
        itself, not excluded, and importable by name.
    """
    if not basename.endswith(config.suffix) or basename == config.filename:
        return False
    if any(fnmatch.fnmatch(basename, pattern) for pattern in config.exclude):
        return False
    return basename[: -len(config.suffix)].isidentifier()


async def collect_modules(
    dirname: str,
    config: IndexConfig | None = None,
) -> dict[str, list[str]]:
    """Map each directory under ``dirname`` to its qualifying module files.

    Args:
        dirname: Root directory.
        config: Index settings. Defaults if None.

    Returns:
        Directory path to module basenames, in discovery order.

    Raises:
        TraversalError: If the traversal fails.
    """
    cfg = config or IndexConfig()
    modules: dict[str, list[str]] = {}
    async with find_recurse_async(dirname, file_only=True) as stream:
        async for entry in stream:
            if is_module(entry.basename, cfg):
                modules.setdefault(entry.dirname, []).append(entry.basename)
    return modules


def render_index(basenames: list[str], suffix: str = ".py") -> str:
    """Index file content re-exporting ``basenames``, sorted by module name."""
    names = sorted(name[: -len(suffix)] for name in basenames)
    return "".join(f"from .{name} import *\n" for name in names)


async def _write_text(path: str, content: str) -> None:
    async with aiofiles.open(path, mode="w", encoding="utf-8") as f:
        await f.write(content)


async def generate_index(
    dirname: str,
    config: IndexConfig | None = None,
) -> list[str]:
    """Write an index file in every directory that has modules.

    Existing index files are overwritten.

    Args:
        dirname: Root directory.
        config: Index settings. Defaults if None.

    Returns:
        Paths of the written index files.

    Raises:
        TraversalError: If discovery fails.
        TraversalIOError: If an index file cannot be written.
    """
    cfg = config or IndexConfig()
    modules = await collect_modules(dirname, cfg)

    seq = CancellableSequencer()
    written: list[str] = []
    with seq.guard():
        for directory, basenames in modules.items():
            path = os.path.join(directory, cfg.filename)
            try:
                await seq.run_next(_write_text(path, render_index(basenames, cfg.suffix)))
            except OSError as e:
                raise TraversalIOError(path, e) from e
            written.append(path)
    seq.complete()

    logger.info("Generated %d index files under %s", len(written), dirname)
    return written


async def delete_index(
    dirname: str,
    config: IndexConfig | None = None,
) -> list[str]:
    """Delete every index file under ``dirname``.

    Args:
        dirname: Root directory.
        config: Index settings. Defaults if None.

    Returns:
        Paths of the deleted index files.

    Raises:
        TraversalError: If discovery fails.
        TraversalIOError: If an index file cannot be removed.
    """
    cfg = config or IndexConfig()
    async with find_recurse_async(dirname, file_only=True) as stream:
        targets = [entry.path async for entry in stream if entry.basename == cfg.filename]

    seq = CancellableSequencer()
    with seq.guard():
        for path in targets:
            try:
                await seq.run_next(aiofiles.os.unlink(path))
            except OSError as e:
                raise TraversalIOError(path, e) from e
    seq.complete()

    logger.info("Deleted %d index files under %s", len(targets), dirname)
    return targets
