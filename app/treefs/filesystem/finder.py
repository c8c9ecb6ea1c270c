"""Lazy, depth-first discovery of descendant entries.

Both the synchronous generators and the asynchronous streams visit a
directory's children in listing order, then explore each child
directory completely, in order, before moving to the next. Symlinked
directories are reported but not entered.

Asynchronous results are delivered through an EntryStream, which the
consumer can cancel at any point. A cancelled stream emits nothing
more and never reports completion.
"""

import os
from collections.abc import AsyncGenerator, Callable, Iterator
from types import TracebackType

from treefs.filesystem.errors import TraversalCancelledError, TraversalError
from treefs.filesystem.lister import list_directory, read_names_async
from treefs.filesystem.models import Entry
from treefs.filesystem.resolver import resolve_async
from treefs.filesystem.sequencer import CancellableSequencer, TraversalState
from treefs.filesystem.walker import descends, validate_root, validate_root_async

Predicate = Callable[[Entry], bool]


def _emits(entry: Entry, file_only: bool) -> bool:
    return not (file_only and entry.is_dir)


# =============================================================================
# Synchronous forms
# =============================================================================


def find(dirname: str, predicate: Predicate) -> bool:
    """Call ``predicate`` on each immediate child until it returns True.

    Does not descend into subdirectories.

    Args:
        dirname: Directory to scan.
        predicate: Callback receiving each child entry.

    Returns:
        True if some child matched.
    """
    return any(predicate(entry) for entry in list_directory(dirname))


def _walk_down(dirname: str, file_only: bool) -> Iterator[Entry]:
    children = list_directory(dirname)
    for entry in children:
        if _emits(entry, file_only):
            yield entry
    for entry in children:
        if descends(entry):
            yield from _walk_down(entry.path, file_only)


def iter_recurse(dirname: str, file_only: bool = True) -> Iterator[Entry]:
    """Lazily yield every descendant of ``dirname``.

    Each call starts a fresh traversal. The root is validated on the
    first ``next()``.

    Args:
        dirname: Root directory.
        file_only: If True, directory entries are used for descent only
            and not yielded.

    Yields:
        Resolved entries, depth-first.

    Raises:
        RootNotFoundError: If the root does not exist.
        RootNotDirectoryError: If the root is not a directory.
        TraversalIOError: If a directory cannot be listed.
    """
    root = validate_root(dirname)
    yield from _walk_down(root.path, file_only)


def find_recurse(dirname: str, predicate: Predicate) -> bool:
    """Call ``predicate`` on every descendant until it returns True.

    Directories are passed to ``predicate`` as well as files.

    Args:
        dirname: Root directory.
        predicate: Callback receiving each descendant entry.

    Returns:
        True if some descendant matched.
    """
    return any(predicate(entry) for entry in iter_recurse(dirname, file_only=False))


# =============================================================================
# Asynchronous forms
# =============================================================================


async def _children_async(
    dirname: str,
    seq: CancellableSequencer,
) -> AsyncGenerator[Entry, None]:
    names = await read_names_async(dirname, seq)
    for name in names:
        yield await seq.run_next(resolve_async(os.path.join(dirname, name), name))


async def _walk_down_async(
    dirname: str,
    seq: CancellableSequencer,
    file_only: bool,
) -> AsyncGenerator[Entry, None]:
    subdirs: list[Entry] = []
    async for entry in _children_async(dirname, seq):
        if _emits(entry, file_only):
            yield entry
        if descends(entry):
            subdirs.append(entry)
    for subdir in subdirs:
        async for entry in _walk_down_async(subdir.path, seq, file_only):
            yield entry


async def _recurse_async(
    dirname: str,
    seq: CancellableSequencer,
    file_only: bool,
) -> AsyncGenerator[Entry, None]:
    root = await validate_root_async(dirname, seq)
    async for entry in _walk_down_async(root.path, seq, file_only):
        yield entry


class EntryStream:
    """Cancellable asynchronous stream of entries.

    The stream owns a private CancellableSequencer; every filesystem
    call it makes runs through it, one at a time. The stream pulls the
    next entry only when the consumer asks for it.

    Use it as an async iterator, optionally inside ``async with`` so
    that leaving the block early cancels the traversal::

        async with find_recurse_async(root) as stream:
            async for entry in stream:
                if entry.basename == "target.txt":
                    stream.cancel()

    Attributes:
        error: The error that ended the stream, if any.
    """

    def __init__(
        self,
        producer: Callable[[CancellableSequencer], AsyncGenerator[Entry, None]],
    ) -> None:
        self._sequencer = CancellableSequencer()
        self._sequencer.attach(self._receive_error)
        self._iterator = producer(self._sequencer)
        self.error: BaseException | None = None

    @property
    def state(self) -> TraversalState:
        return self._sequencer.state

    @property
    def cancelled(self) -> bool:
        return self._sequencer.state is TraversalState.CANCELLED

    @property
    def completed(self) -> bool:
        return self._sequencer.state is TraversalState.COMPLETED

    def cancel(self) -> None:
        """Stop the traversal; the in-flight filesystem call is disarmed.

        Idempotent. Has no effect on a stream that already completed.
        """
        self._sequencer.cancel()
        self._sequencer.detach()

    async def aclose(self) -> None:
        """Cancel the stream and release its underlying generator."""
        self.cancel()
        if not self._iterator.ag_running:
            await self._iterator.aclose()

    async def collect(self) -> list[Entry]:
        """Drain the stream into a list."""
        return [entry async for entry in self]

    def _receive_error(self, error: BaseException) -> None:
        self.error = error

    def __aiter__(self) -> "EntryStream":
        return self

    async def __anext__(self) -> Entry:
        if self._sequencer.state is not TraversalState.RUNNING:
            raise StopAsyncIteration
        try:
            entry = await self._iterator.__anext__()
        except StopAsyncIteration:
            self._sequencer.complete()
            self._sequencer.detach()
            raise
        except TraversalCancelledError:
            raise StopAsyncIteration from None
        except TraversalError as e:
            self._sequencer.fail(e)
            raise
        # A cancel() that landed after the step finished still wins.
        if self._sequencer.state is not TraversalState.RUNNING:
            raise StopAsyncIteration
        return entry

    async def __aenter__(self) -> "EntryStream":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def find_async(dirname: str) -> EntryStream:
    """Stream the immediate children of ``dirname``.

    Args:
        dirname: Directory to scan.

    Returns:
        A stream of resolved children, in listing order.
    """
    return EntryStream(lambda seq: _children_async(os.path.abspath(dirname), seq))


def find_recurse_async(dirname: str, file_only: bool = True) -> EntryStream:
    """Stream every descendant of ``dirname``, depth-first.

    Each call starts a fresh traversal. The root is validated before the
    first entry is produced.

    Args:
        dirname: Root directory.
        file_only: If True, directory entries are used for descent only
            and not emitted.

    Returns:
        A cancellable stream of resolved entries.
    """
    return EntryStream(lambda seq: _recurse_async(dirname, seq, file_only))
