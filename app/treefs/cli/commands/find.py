"""Find command.

Streams the descendants of a directory depth-first and prints the
ones matching a basename pattern. With ``--first`` the stream is
cancelled as soon as one entry matches.
"""

import asyncio
import fnmatch
from pathlib import Path
from typing import Annotated

import typer

from treefs.filesystem.errors import TraversalError
from treefs.filesystem.finder import find_recurse_async
from treefs.filesystem.models import Entry
from treefs.utils.formatting import console, print_error, print_info


async def _stream_matches(
    root: str,
    pattern: str | None,
    file_only: bool,
    first: bool,
) -> list[Entry]:
    matches: list[Entry] = []
    async with find_recurse_async(root, file_only=file_only) as stream:
        async for entry in stream:
            if pattern is not None and not fnmatch.fnmatch(entry.basename, pattern):
                continue
            matches.append(entry)
            console.print(entry.path, markup=False, highlight=False, soft_wrap=True)
            if first:
                stream.cancel()
    return matches


def find_entries(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to search."),
    ] = Path("."),
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Glob pattern matched against basenames.",
        ),
    ] = None,
    dirs: Annotated[
        bool,
        typer.Option("--dirs", help="Report directories as well as files."),
    ] = False,
    first: Annotated[
        bool,
        typer.Option("--first", help="Stop at the first match."),
    ] = False,
) -> None:
    """Find entries below a directory, depth-first.

    Examples:
        treefs find src --name "*.py"
        treefs find . --name config.toml --first
    """
    try:
        matches = asyncio.run(_stream_matches(str(path), name, not dirs, first))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not matches:
        print_info("No matching entries found.")
        raise typer.Exit(code=1)
