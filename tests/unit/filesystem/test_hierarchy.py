"""Unit tests for hierarchy reconstruction."""

from pathlib import Path

import pytest
from treefs.filesystem.finder import find_recurse_async
from treefs.filesystem.hierarchy import build_hierarchy
from treefs.filesystem.models import DepthIndexedTree, TreeNode
from treefs.filesystem.walker import walk


def _all_nodes(node: TreeNode) -> list[TreeNode]:
    nodes = [node]
    for child in node.files + node.dirs:
        nodes.extend(_all_nodes(child))
    return nodes


class TestBuildHierarchy:
    """Tests for build_hierarchy."""

    def test_root(self, fixture_tree: Path) -> None:
        tree = walk(str(fixture_tree))

        root = build_hierarchy(tree)

        assert root.entry.path == str(fixture_tree)
        assert root.depth == tree.depths[0]
        assert root.parent is None

    def test_every_entry_attached_once(self, fixture_tree: Path) -> None:
        tree = walk(str(fixture_tree))

        nodes = _all_nodes(build_hierarchy(tree))

        assert len(nodes) == tree.entry_count
        assert {n.entry.path for n in nodes} == {e.path for e in tree.flatten()}

    def test_children_point_at_parent(self, fixture_tree: Path) -> None:
        root = build_hierarchy(walk(str(fixture_tree)))

        for node in _all_nodes(root)[1:]:
            assert node.parent is not None
            assert node.entry.dirname == node.parent.entry.path
            assert node.depth == node.parent.depth + 1

    def test_root_split(self, fixture_tree: Path) -> None:
        root = build_hierarchy(walk(str(fixture_tree)))

        assert sorted(n.entry.basename for n in root.dirs) == ["A", "B", "C", "link-A-c-1"]
        assert len(root.files) == 5

    def test_symlinked_directory_is_a_leaf(self, fixture_tree: Path) -> None:
        root = build_hierarchy(walk(str(fixture_tree)))

        (link,) = [n for n in root.dirs if n.entry.is_link]
        assert link.files == []
        assert link.dirs == []

    def test_shares_snapshot_entries(self, fixture_tree: Path) -> None:
        tree = walk(str(fixture_tree))

        root = build_hierarchy(tree)

        assert root.entry is tree.root

    def test_empty_tree(self) -> None:
        with pytest.raises(ValueError):
            build_hierarchy(DepthIndexedTree())

    @pytest.mark.asyncio
    async def test_files_match_recursive_find(self, fixture_tree: Path) -> None:
        root = build_hierarchy(walk(str(fixture_tree)))
        built = {n.entry.path for n in root.iter_files()}

        found = {e.path for e in await find_recurse_async(str(fixture_tree)).collect()}

        assert built == found
