"""Index generation commands.

Writes or removes the index files that re-export every module of a
package directory.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from treefs.core.config import ConfigError, IndexConfig, load_config
from treefs.filesystem.errors import TraversalError
from treefs.index.barrel import delete_index, generate_index
from treefs.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Generate or remove package index files.",
    no_args_is_help=True,
)

PathArgument = Annotated[Path, typer.Argument(help="Root directory.")]


def _index_config() -> IndexConfig:
    try:
        return load_config().index
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def generate(path: PathArgument = Path(".")) -> None:
    """Write an index file in every directory that has modules."""
    cfg = _index_config()
    try:
        written = asyncio.run(generate_index(str(path), cfg))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not written:
        print_info("No modules found; nothing generated.")
        return
    for item in written:
        console.print(f"  [dim]wrote[/dim] {item}", highlight=False)
    print_success(f"Generated {len(written)} {cfg.filename} file(s).")


@app.command()
def clean(path: PathArgument = Path(".")) -> None:
    """Delete every index file below a directory."""
    cfg = _index_config()
    try:
        removed = asyncio.run(delete_index(str(path), cfg))
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not removed:
        print_info(f"No {cfg.filename} files found.")
        return
    print_success(f"Deleted {len(removed)} {cfg.filename} file(s).")
