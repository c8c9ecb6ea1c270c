"""Bottom-up deletion of a walked tree.

A DepthIndexedTree is flattened shallowest-first and then reversed, so
every entry is removed before any entry at a lower depth that could
contain it. Files and symlinks are unlinked; directories are removed
with rmdir, which only succeeds on an empty directory. No recursive
removal primitive is ever used.
"""

import logging
import os

import aiofiles.os

from treefs.filesystem.errors import TraversalIOError
from treefs.filesystem.models import DepthIndexedTree, Entry
from treefs.filesystem.sequencer import CancellableSequencer
from treefs.filesystem.walker import walk, walk_async

logger = logging.getLogger(__name__)


def deletion_order(tree: DepthIndexedTree) -> list[Entry]:
    """Entries of ``tree`` in the order they must be removed: deepest first."""
    entries = tree.flatten()
    entries.reverse()
    return entries


def _unlinks(entry: Entry) -> bool:
    """Links (even to directories) and files are unlinked, never rmdir'ed."""
    return entry.is_link or not entry.is_dir


def delete_tree(tree: DepthIndexedTree) -> int:
    """Delete every entry of a walked tree, deepest first.

    Args:
        tree: Snapshot produced by :func:`~treefs.filesystem.walker.walk`.

    Returns:
        Number of entries removed.

    Raises:
        TraversalIOError: On the first failing unlink or rmdir. Entries
            removed before the failure stay removed.
    """
    removed = 0
    for entry in deletion_order(tree):
        try:
            if _unlinks(entry):
                os.unlink(entry.path)
            else:
                os.rmdir(entry.path)
        except OSError as e:
            raise TraversalIOError(entry.path, e) from e
        removed += 1

    logger.debug("Deleted %d entries", removed)
    return removed


async def delete_tree_async(
    tree: DepthIndexedTree,
    sequencer: CancellableSequencer | None = None,
) -> int:
    """Asynchronous form of :func:`delete_tree`, one entry at a time.

    Args:
        tree: Snapshot to delete.
        sequencer: Cancellation context. A private one is created when
            omitted.

    Returns:
        Number of entries removed.

    Raises:
        TraversalIOError: On the first failing unlink or rmdir.
        TraversalCancelledError: If the sequencer was cancelled.
    """
    seq = sequencer if sequencer is not None else CancellableSequencer()
    removed = 0
    with seq.guard():
        for entry in deletion_order(tree):
            if _unlinks(entry):
                step = aiofiles.os.unlink(entry.path)
            else:
                step = aiofiles.os.rmdir(entry.path)
            try:
                await seq.run_next(step)
            except OSError as e:
                raise TraversalIOError(entry.path, e) from e
            removed += 1

    if sequencer is None:
        seq.complete()
    logger.debug("Deleted %d entries", removed)
    return removed


def remove_tree(dirname: str) -> int:
    """Walk ``dirname`` and delete everything in it, itself included.

    Args:
        dirname: Root directory to remove.

    Returns:
        Number of entries removed.

    Raises:
        TraversalError: Whatever the walk or the deletion raised. No
            cleanup is attempted beyond the entries already removed.
    """
    return delete_tree(walk(dirname))


async def remove_tree_async(
    dirname: str,
    sequencer: CancellableSequencer | None = None,
) -> int:
    """Asynchronous form of :func:`remove_tree`.

    The walk and the deletion share one sequencer, so a single
    ``cancel()`` stops whichever phase is running.
    """
    seq = sequencer if sequencer is not None else CancellableSequencer()
    tree = await walk_async(dirname, seq)
    removed = await delete_tree_async(tree, seq)
    if sequencer is None:
        seq.complete()
    return removed
