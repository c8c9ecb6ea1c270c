"""Rendering of TreeNode hierarchies.

Text output is built on ``rich.tree.Tree`` and styled with the treefs
theme; HTML output is a nested ordered list of links. Both order
children here, since the hierarchy itself is unsorted.
"""

import html
import io

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from treefs.core.theme import get_theme
from treefs.filesystem.models import TreeNode

LINK_ARROW = " ➔ "


def _sorted(nodes: list[TreeNode]) -> list[TreeNode]:
    return sorted(nodes, key=lambda node: node.entry.basename.casefold())


def _label(node: TreeNode) -> Text:
    entry = node.entry
    if entry.is_dir:
        style = "tree.symlink" if entry.is_link else "tree.directory"
    else:
        style = "tree.file"
    label = Text(entry.basename, style=style)
    if entry.is_link and entry.link_target is not None:
        label.append(LINK_ARROW)
        label.append(entry.link_target, style="tree.link_target")
    return label


def _add_children(branch: Tree, node: TreeNode) -> None:
    # Directories first, then files, each alphabetically.
    for child in _sorted(node.dirs):
        _add_children(branch.add(_label(child)), child)
    for child in _sorted(node.files):
        branch.add(_label(child))


def render_tree(root: TreeNode) -> Tree:
    """Build a rich Tree for ``root`` and everything below it.

    Args:
        root: Root of a hierarchy built by ``build_hierarchy``.

    Returns:
        Renderable tree using the ``tree.*`` theme styles.
    """
    tree = Tree(_label(root), guide_style="dim")
    _add_children(tree, root)
    return tree


def tree_to_text(root: TreeNode, width: int | None = None) -> str:
    """Render the hierarchy as plain, uncolored text.

    Args:
        root: Root node.
        width: Console width; long lines are wrapped beyond it.

    Returns:
        The rendered tree, one entry per line.
    """
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        theme=get_theme(),
        color_system=None,
        width=width or 240,
        legacy_windows=False,
    )
    console.print(render_tree(root))
    return buffer.getvalue()


def tree_to_html(root: TreeNode) -> str:
    """Render the hierarchy as nested ``<ol>`` lists of links.

    Within a node, files are listed before subdirectories.

    Args:
        root: Root node.

    Returns:
        HTML fragment.
    """
    lines = ["<ol>"]
    _html_node(root, 1, lines)
    lines.append("</ol>")
    return "\n".join(lines)


def _link(node: TreeNode) -> str:
    href = html.escape(node.entry.path, quote=True)
    return f'<a href="{href}">{html.escape(node.entry.basename)}</a>'


def _html_node(node: TreeNode, level: int, lines: list[str]) -> None:
    indent = "\t" * level
    lines.append(f"{indent}<li>")
    lines.append(f"{indent}\t{_link(node)}")
    if node.files or node.dirs:
        lines.append(f"{indent}\t<ol>")
        for child in _sorted(node.files):
            lines.append(f"{indent}\t\t<li>")
            lines.append(f"{indent}\t\t\t{_link(child)}")
            lines.append(f"{indent}\t\t</li>")
        for child in _sorted(node.dirs):
            _html_node(child, level + 2, lines)
        lines.append(f"{indent}\t</ol>")
    lines.append(f"{indent}</li>")
