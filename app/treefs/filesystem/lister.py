"""Immediate-children listing of a directory.

Children come back in the order the directory read returned them; no
sorting is applied. The asynchronous form resolves children one at a
time through a CancellableSequencer, never concurrently.
"""

import os

import aiofiles.os

from treefs.filesystem.errors import TraversalIOError
from treefs.filesystem.models import Entry
from treefs.filesystem.resolver import resolve, resolve_async
from treefs.filesystem.sequencer import CancellableSequencer


def list_directory(dirname: str) -> list[Entry]:
    """List and resolve the immediate children of a directory.

    Args:
        dirname: Directory to read.

    Returns:
        Resolved entries in directory-read order.

    Raises:
        TraversalIOError: If the directory cannot be read or a child
            cannot be stat'ed.
        RecursiveSymlinkError: If a child is a link to a link.
    """
    try:
        names = os.listdir(dirname)
    except OSError as e:
        raise TraversalIOError(dirname, e) from e
    return [resolve(os.path.join(dirname, name), name) for name in names]


async def read_names_async(dirname: str, sequencer: CancellableSequencer) -> list[str]:
    """Read a directory's child names as a single sequenced step."""
    try:
        return await sequencer.run_next(aiofiles.os.listdir(dirname))
    except OSError as e:
        raise TraversalIOError(dirname, e) from e


async def list_directory_async(
    dirname: str,
    sequencer: CancellableSequencer | None = None,
) -> list[Entry]:
    """Asynchronous form of :func:`list_directory`.

    Args:
        dirname: Directory to read.
        sequencer: Sequencer of the enclosing traversal. A private one is
            created when omitted.

    Returns:
        Resolved entries in directory-read order.

    Raises:
        TraversalIOError: If the directory cannot be read or a child
            cannot be stat'ed.
        RecursiveSymlinkError: If a child is a link to a link.
        TraversalCancelledError: If the sequencer was cancelled.
    """
    seq = sequencer if sequencer is not None else CancellableSequencer()
    names = await read_names_async(dirname, seq)
    entries: list[Entry] = []
    for name in names:
        entries.append(await seq.run_next(resolve_async(os.path.join(dirname, name), name)))
    return entries
