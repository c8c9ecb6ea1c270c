"""Breadth-first snapshot of a directory tree.

A walk lists the root, then every directory discovered beneath it in
queue order, and records each listed child at its parent's depth + 1.
Symlinked directories are recorded but never entered, so link cycles
cannot make a walk loop.
"""

import logging
import os
from collections import deque

import aiofiles.os

from treefs.core.paths import path_depth
from treefs.filesystem.errors import RootNotDirectoryError, RootNotFoundError
from treefs.filesystem.lister import list_directory, list_directory_async
from treefs.filesystem.models import DepthIndexedTree, Entry
from treefs.filesystem.resolver import resolve, resolve_async
from treefs.filesystem.sequencer import CancellableSequencer

logger = logging.getLogger(__name__)


def _normalize_root(dirname: str) -> str:
    return os.path.abspath(os.path.normpath(dirname))


def descends(entry: Entry) -> bool:
    """Whether a traversal enters this entry: real directories only."""
    return entry.is_dir and not entry.is_link


def validate_root(dirname: str) -> Entry:
    """Check that a traversal root exists and is a directory.

    Args:
        dirname: Root path.

    Returns:
        The resolved root entry, with an absolute normalized path.

    Raises:
        RootNotFoundError: If the root does not exist.
        RootNotDirectoryError: If the root is not a directory.
    """
    root_path = _normalize_root(dirname)
    if not os.path.exists(root_path):
        raise RootNotFoundError(root_path)
    root = resolve(root_path)
    if not root.is_dir:
        raise RootNotDirectoryError(root_path)
    return root


async def validate_root_async(
    dirname: str,
    sequencer: CancellableSequencer | None = None,
) -> Entry:
    """Asynchronous form of :func:`validate_root`."""
    seq = sequencer if sequencer is not None else CancellableSequencer()
    root_path = _normalize_root(dirname)
    if not await seq.run_next(aiofiles.os.path.exists(root_path)):
        raise RootNotFoundError(root_path)
    root = await seq.run_next(resolve_async(root_path))
    if not root.is_dir:
        raise RootNotDirectoryError(root_path)
    return root


def walk(dirname: str) -> DepthIndexedTree:
    """Build a depth-indexed snapshot of a directory tree.

    Args:
        dirname: Root directory.

    Returns:
        The complete snapshot. The root sits alone at ``path_depth(root)``.

    Raises:
        RootNotFoundError: If the root does not exist.
        RootNotDirectoryError: If the root is not a directory.
        TraversalIOError: If any directory cannot be listed.
        RecursiveSymlinkError: If a link points at another link.
    """
    root = validate_root(dirname)
    tree = DepthIndexedTree()
    tree.add(path_depth(root.path), [root])

    queue: deque[Entry] = deque([root])
    while queue:
        current = queue.popleft()
        children = list_directory(current.path)
        tree.add(path_depth(current.path) + 1, children)
        queue.extend(child for child in children if descends(child))

    logger.debug("Walked %s: %d entries over %d depths", root.path, tree.entry_count, len(tree))
    return tree


async def walk_async(
    dirname: str,
    sequencer: CancellableSequencer | None = None,
) -> DepthIndexedTree:
    """Asynchronous form of :func:`walk`.

    Every filesystem call runs through ``sequencer``, one at a time.

    Args:
        dirname: Root directory.
        sequencer: Cancellation context for this walk. A private one is
            created when omitted.

    Returns:
        The complete snapshot.

    Raises:
        RootNotFoundError: If the root does not exist.
        RootNotDirectoryError: If the root is not a directory.
        TraversalIOError: If any directory cannot be listed.
        RecursiveSymlinkError: If a link points at another link.
        TraversalCancelledError: If the sequencer was cancelled.
    """
    seq = sequencer if sequencer is not None else CancellableSequencer()
    tree = DepthIndexedTree()
    with seq.guard():
        root = await validate_root_async(dirname, seq)
        tree.add(path_depth(root.path), [root])

        queue: deque[Entry] = deque([root])
        while queue:
            current = queue.popleft()
            children = await list_directory_async(current.path, seq)
            tree.add(path_depth(current.path) + 1, children)
            queue.extend(child for child in children if descends(child))

    if sequencer is None:
        seq.complete()
    logger.debug("Walked %s: %d entries over %d depths", root.path, tree.entry_count, len(tree))
    return tree
