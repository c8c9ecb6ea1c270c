"""Single-path resolution into a kind-tagged Entry.

Resolution uses a link-aware stat and follows at most one symlink hop:
the link's target is stat'ed once, and a target that is itself a
symlink is rejected.
"""

import os
import stat as stat_module

import aiofiles.os

from treefs.filesystem.errors import RecursiveSymlinkError, TraversalIOError
from treefs.filesystem.models import Entry, EntryKind

# Errors meaning "the link target is not there" rather than "I/O failed"
_MISSING_TARGET_ERRORS = (FileNotFoundError, NotADirectoryError)


def _link_target_path(path: str, link: str) -> str:
    """Path of a link's target; relative values are taken from the link's directory."""
    return os.path.join(os.path.dirname(path), link)


def _entry_from_stat(path: str, basename: str, st: os.stat_result) -> Entry:
    kind = EntryKind.DIRECTORY if stat_module.S_ISDIR(st.st_mode) else EntryKind.FILE
    return Entry(path=path, basename=basename, kind=kind, stat=st)


def _symlink_entry(
    path: str,
    basename: str,
    st: os.stat_result,
    link: str,
    target_st: os.stat_result | None,
) -> Entry:
    if target_st is None:
        return Entry(
            path=path,
            basename=basename,
            kind=EntryKind.SYMLINK,
            link_target=link,
            resolved_is_file=True,
            broken=True,
            stat=st,
        )
    if stat_module.S_ISLNK(target_st.st_mode):
        raise RecursiveSymlinkError(path, link)
    is_dir = stat_module.S_ISDIR(target_st.st_mode)
    return Entry(
        path=path,
        basename=basename,
        kind=EntryKind.SYMLINK,
        link_target=link,
        resolved_is_dir=is_dir,
        resolved_is_file=not is_dir,
        stat=st,
    )


def resolve(path: str, basename: str | None = None) -> Entry:
    """Resolve a path into an Entry.

    Args:
        path: Path to resolve.
        basename: Final segment, if the caller already knows it.

    Returns:
        The resolved Entry. A symlink with a missing target is returned
        as a broken, file-kind entry.

    Raises:
        RecursiveSymlinkError: If the link target is itself a symlink.
        TraversalIOError: If lstat or readlink fails.
    """
    name = basename or os.path.basename(path)
    try:
        st = os.lstat(path)
    except OSError as e:
        raise TraversalIOError(path, e) from e

    if not stat_module.S_ISLNK(st.st_mode):
        return _entry_from_stat(path, name, st)

    try:
        link = os.readlink(path)
    except OSError as e:
        raise TraversalIOError(path, e) from e

    target = _link_target_path(path, link)
    try:
        target_st: os.stat_result | None = os.lstat(target)
    except _MISSING_TARGET_ERRORS:
        target_st = None
    except OSError as e:
        raise TraversalIOError(target, e) from e

    return _symlink_entry(path, name, st, link, target_st)


async def resolve_async(path: str, basename: str | None = None) -> Entry:
    """Asynchronous form of :func:`resolve`, offloading each syscall."""
    name = basename or os.path.basename(path)
    try:
        st = await aiofiles.os.stat(path, follow_symlinks=False)
    except OSError as e:
        raise TraversalIOError(path, e) from e

    if not stat_module.S_ISLNK(st.st_mode):
        return _entry_from_stat(path, name, st)

    try:
        link = await aiofiles.os.readlink(path)
    except OSError as e:
        raise TraversalIOError(path, e) from e

    target = _link_target_path(path, link)
    try:
        target_st: os.stat_result | None = await aiofiles.os.stat(target, follow_symlinks=False)
    except _MISSING_TARGET_ERRORS:
        target_st = None
    except OSError as e:
        raise TraversalIOError(target, e) from e

    return _symlink_entry(path, name, st, link, target_st)
