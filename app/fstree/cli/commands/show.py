"""Show command implementation.

Renders a directory the way a tree pane displays it.
"""

from pathlib import Path
from typing import Annotated

import typer

from fstree.cli.display import format_tree
from fstree.cli.types import load_cli_config
from fstree.tree.errors import TreeError
from fstree.tree.nodes import Directory
from fstree.utils.formatting import console, print_error


def show(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to show (default: current directory)."),
    ] = Path("."),
    open_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Open every directory recursively."),
    ] = False,
    numbered: Annotated[
        bool,
        typer.Option("--numbers", "-n", help="Prefix lines with their cursor position."),
    ] = False,
) -> None:
    """Render a directory tree."""
    config = load_cli_config(ctx)

    try:
        root = Directory.from_path(path)
        if open_all:
            root.open_rec()
        else:
            root.open()
    except TreeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(format_tree(root, config, numbered=numbered))
