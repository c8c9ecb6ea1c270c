"""Filesystem domain models for traversal snapshots.

This module defines the resolved entry produced for every filesystem
node, the depth-indexed snapshot assembled by a walk, and the
hierarchical view rebuilt from that snapshot.
"""

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Kind of a filesystem entry, as seen by a link-aware stat.

    Attributes:
        FILE: Anything that is neither a directory nor a symlink.
        DIRECTORY: Regular directory.
        SYMLINK: Symbolic link, resolved one hop.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single resolved filesystem node.

    Symlink entries carry the kind of their target, computed once at
    resolution time. A link whose target is missing is still an entry:
    it resolves as a file and is flagged ``broken``.

    Attributes:
        path: Absolute, normalized path.
        basename: Final path segment.
        kind: Kind reported by lstat.
        link_target: Raw readlink value (symlinks only).
        resolved_is_dir: Whether the symlink target is a directory.
        resolved_is_file: Whether the symlink target is a file (or missing).
        broken: Whether the symlink target does not exist.
        stat: The lstat result for the entry itself.
    """

    path: str
    basename: str
    kind: EntryKind
    link_target: str | None = None
    resolved_is_dir: bool = False
    resolved_is_file: bool = False
    broken: bool = False
    stat: os.stat_result | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.kind != EntryKind.SYMLINK:
            if self.link_target is not None:
                msg = f"Only symlinks carry a link target: {self.path}"
                raise ValueError(msg)
            if self.broken:
                msg = f"Only symlinks can be broken: {self.path}"
                raise ValueError(msg)

    @property
    def is_link(self) -> bool:
        return self.kind == EntryKind.SYMLINK

    @property
    def is_dir(self) -> bool:
        """True for directories and for symlinks that resolve to one."""
        if self.kind == EntryKind.SYMLINK:
            return self.resolved_is_dir
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        """True for files and for symlinks that resolve to one (or to nothing)."""
        if self.kind == EntryKind.SYMLINK:
            return self.resolved_is_file
        return self.kind == EntryKind.FILE

    @property
    def dirname(self) -> str:
        return os.path.dirname(self.path)


@dataclass
class DepthIndexedTree:
    """Snapshot of a subtree keyed by depth.

    Buckets are kept in an explicit mapping from depth to an ordered
    list of entries. A depth only has a key once at least one entry was
    added at it.

    Attributes:
        buckets: Mapping of depth to entries, in insertion order.
    """

    buckets: dict[int, list[Entry]] = field(default_factory=dict)

    def add(self, depth: int, entries: Iterable[Entry]) -> None:
        """Append entries to the bucket at ``depth``."""
        items = list(entries)
        if not items:
            return
        self.buckets.setdefault(depth, []).extend(items)

    def bucket(self, depth: int) -> list[Entry]:
        """Entries at ``depth`` (empty list if the depth has no key)."""
        return self.buckets.get(depth, [])

    @property
    def depths(self) -> list[int]:
        return sorted(self.buckets)

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.buckets.values())

    @property
    def root(self) -> Entry:
        """The single entry at the lowest populated depth.

        Raises:
            ValueError: If the tree is empty or the lowest bucket does not
                hold exactly one entry.
        """
        if not self.buckets:
            msg = "Tree is empty"
            raise ValueError(msg)
        lowest = self.buckets[self.depths[0]]
        if len(lowest) != 1:
            msg = f"Expected a single root entry, found {len(lowest)}"
            raise ValueError(msg)
        return lowest[0]

    def flatten(self) -> list[Entry]:
        """All entries, shallowest depth first, insertion order within a depth."""
        return [entry for depth in self.depths for entry in self.buckets[depth]]

    def __contains__(self, depth: object) -> bool:
        return depth in self.buckets

    def __len__(self) -> int:
        return len(self.buckets)

    def __iter__(self) -> Iterator[int]:
        return iter(self.depths)


@dataclass(eq=False)
class TreeNode:
    """Hierarchical view of one entry in a DepthIndexedTree.

    Nodes reference the same Entry objects the snapshot owns. The
    ``parent`` link is for upward navigation only.

    Attributes:
        depth: Depth of the entry.
        entry: The resolved entry.
        files: Child nodes that are not directories.
        dirs: Child nodes that are directories.
        parent: Enclosing node, None for the root.
    """

    depth: int
    entry: Entry
    files: list["TreeNode"] = field(default_factory=list)
    dirs: list["TreeNode"] = field(default_factory=list)
    parent: "TreeNode | None" = field(default=None, repr=False)

    def iter_files(self) -> Iterator["TreeNode"]:
        """Yield every file node below this one, depth-first."""
        yield from self.files
        for child in self.dirs:
            yield from child.iter_files()
