"""CLI commands for treefs.

This package contains all subcommand implementations.
"""

from treefs.cli.commands import config, find, index, rm, tree

__all__ = ["config", "find", "index", "rm", "tree"]
