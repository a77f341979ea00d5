"""Helpers shared by the CLI commands.

Output format choices, and loading the tree configuration named by the
global --config option.
"""

from enum import Enum
from pathlib import Path

import typer

from fstree.core.config import ConfigError, TreeConfig, load_config
from fstree.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config_path(ctx: typer.Context) -> Path | None:
    """Config file given with the global --config option, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path")


def load_cli_config(ctx: typer.Context) -> TreeConfig:
    """Load the tree configuration for a command.

    Exits with code 1 when the config file is invalid.
    """
    try:
        return load_config(get_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
