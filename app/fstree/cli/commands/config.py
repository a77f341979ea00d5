"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import tomli_w
import typer

from fstree.cli.types import get_config_path, load_cli_config
from fstree.core.config import ConfigError, TreeConfig, config_to_dict, save_config
from fstree.core.paths import get_config_path as get_default_config_path
from fstree.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as TOML."""
    config = load_cli_config(ctx)
    console.print(
        tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False, soft_wrap=True
    )


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path(ctx) or get_default_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        saved = save_config(TreeConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")
