"""Configuration commands.

Shows, locates and initializes the treefs configuration file.
"""

from typing import Annotated

import tomli_w
import typer

from treefs.core.config import ConfigError, TreefsConfig, load_config, save_config
from treefs.core.paths import get_config_path
from treefs.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Inspect and initialize treefs configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Print the effective configuration as TOML."""
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    console.print(
        tomli_w.dumps(config.model_dump()), markup=False, highlight=False, soft_wrap=True
    )


@app.command()
def path() -> None:
    """Print the configuration file location."""
    console.print(str(get_config_path()), markup=False, highlight=False, soft_wrap=True)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(TreefsConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")
