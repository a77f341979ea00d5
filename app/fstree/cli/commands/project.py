"""Project command implementation.

Prints the project root that the browser's "project" jump would use.
"""

from pathlib import Path
from typing import Annotated

import typer

from fstree.cli.types import load_cli_config
from fstree.tree.errors import TreeError
from fstree.tree.locations import dir_project
from fstree.utils.formatting import print_error, print_path


def project(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to start from (default: current directory)."),
    ] = Path("."),
) -> None:
    """Print the nearest ancestor directory holding a project marker."""
    config = load_cli_config(ctx)

    try:
        root = dir_project(str(path), config.project_regex)
    except TreeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_path(root)
