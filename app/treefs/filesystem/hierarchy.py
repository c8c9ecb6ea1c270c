"""Parent/child hierarchy rebuilt from a depth-indexed snapshot."""

from treefs.filesystem.models import DepthIndexedTree, TreeNode


def build_hierarchy(tree: DepthIndexedTree) -> TreeNode:
    """Build the TreeNode hierarchy of a walked tree.

    The single entry at the lowest depth becomes the root. Each node
    collects, from the next depth's bucket, the entries whose directory
    is the node's own path. Children keep snapshot order; nothing is
    sorted here.

    Args:
        tree: Snapshot produced by a walk.

    Returns:
        The root node.

    Raises:
        ValueError: If the tree has no single root entry.
    """
    root_entry = tree.root
    root = TreeNode(depth=tree.depths[0], entry=root_entry)
    _attach_children(tree, root)
    return root


def _attach_children(tree: DepthIndexedTree, parent: TreeNode) -> None:
    depth = parent.depth + 1
    for entry in tree.bucket(depth):
        if entry.dirname != parent.entry.path:
            continue
        node = TreeNode(depth=depth, entry=entry, parent=parent)
        if entry.is_dir:
            parent.dirs.append(node)
            _attach_children(tree, node)
        else:
            parent.files.append(node)
