"""Tree display command.

Walks a directory into a depth-indexed snapshot, rebuilds its
hierarchy and prints it, optionally exporting an HTML rendering.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from treefs.filesystem.errors import TraversalError
from treefs.filesystem.hierarchy import build_hierarchy
from treefs.filesystem.walker import walk_async
from treefs.output.render import render_tree, tree_to_html
from treefs.utils.formatting import console, print_error, print_success


def show_tree(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to display."),
    ] = Path("."),
    html_path: Annotated[
        Path | None,
        typer.Option(
            "--html",
            help="Also write the tree as an HTML list to this file.",
        ),
    ] = None,
) -> None:
    """Print a directory as a tree.

    Examples:
        treefs tree src
        treefs tree . --html tree.html
    """
    try:
        snapshot = asyncio.run(walk_async(str(path)))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    root = build_hierarchy(snapshot)
    console.print(render_tree(root))

    if html_path is not None:
        try:
            html_path.write_text(tree_to_html(root) + "\n", encoding="utf-8")
        except OSError as e:
            print_error(f"Failed to write {html_path}: {e}")
            raise typer.Exit(code=1) from e
        print_success(f"HTML tree written to {html_path}")

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet:
        console.print(
            f"\n[dim]{snapshot.entry_count} entries over {len(snapshot)} depths[/dim]"
        )
