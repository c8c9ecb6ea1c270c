"""Filesystem traversal, snapshot and deletion module.

This module resolves single paths into entries, lists directories,
walks trees into depth-indexed snapshots, streams descendants with
cancellation, rebuilds hierarchies and deletes trees bottom-up.
"""

from treefs.filesystem.deleter import (
    delete_tree,
    delete_tree_async,
    deletion_order,
    remove_tree,
    remove_tree_async,
)
from treefs.filesystem.errors import (
    RecursiveSymlinkError,
    RootNotDirectoryError,
    RootNotFoundError,
    TraversalCancelledError,
    TraversalError,
    TraversalIOError,
)
from treefs.filesystem.finder import (
    EntryStream,
    find,
    find_async,
    find_recurse,
    find_recurse_async,
    iter_recurse,
)
from treefs.filesystem.hierarchy import build_hierarchy
from treefs.filesystem.lister import list_directory, list_directory_async
from treefs.filesystem.models import DepthIndexedTree, Entry, EntryKind, TreeNode
from treefs.filesystem.resolver import resolve, resolve_async
from treefs.filesystem.sequencer import CancellableSequencer, TraversalState
from treefs.filesystem.walker import validate_root, validate_root_async, walk, walk_async

__all__ = [
    "CancellableSequencer",
    "DepthIndexedTree",
    "Entry",
    "EntryKind",
    "EntryStream",
    "RecursiveSymlinkError",
    "RootNotDirectoryError",
    "RootNotFoundError",
    "TraversalCancelledError",
    "TraversalError",
    "TraversalIOError",
    "TraversalState",
    "TreeNode",
    "build_hierarchy",
    "delete_tree",
    "delete_tree_async",
    "deletion_order",
    "find",
    "find_async",
    "find_recurse",
    "find_recurse_async",
    "iter_recurse",
    "list_directory",
    "list_directory_async",
    "remove_tree",
    "remove_tree_async",
    "resolve",
    "resolve_async",
    "validate_root",
    "validate_root_async",
    "walk",
    "walk_async",
]
