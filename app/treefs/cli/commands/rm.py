"""Remove command.

Deletes a directory tree bottom-up: the tree is walked first, then
every entry is removed deepest-first with unlink or rmdir.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from treefs.filesystem.deleter import delete_tree_async
from treefs.filesystem.errors import TraversalError
from treefs.filesystem.walker import walk_async
from treefs.utils.formatting import console, print_error, print_info, print_success


def remove(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to remove, including itself."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove a directory tree, deepest entries first.

    Examples:
        treefs rm build --dry-run
        treefs rm build -y
    """
    try:
        snapshot = asyncio.run(walk_async(str(path)))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    root = snapshot.root
    count = snapshot.entry_count

    if dry_run:
        console.print(f"[dim]Would remove {count} entries under {root.path}[/dim]")
        return

    if not yes:
        confirmed = typer.confirm(
            f"Remove {root.path} and its {count - 1} descendant(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        removed = asyncio.run(delete_tree_async(snapshot))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Removed {removed} entries.")
