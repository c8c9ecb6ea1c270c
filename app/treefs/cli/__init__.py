"""CLI package for treefs.

This package contains the Typer application and all subcommands.
"""

from treefs.cli.main import app

__all__ = ["app"]
