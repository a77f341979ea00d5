"""Remove command implementation.

Moves paths into the trash, or deletes them for good with --permanent.
"""

from pathlib import Path
from typing import Annotated

import typer

from fstree.cli.types import load_cli_config
from fstree.tree import operations
from fstree.tree.errors import TreeError
from fstree.tree.nodes import Node, node_from_path
from fstree.utils.formatting import print_error, print_info, print_success, print_warning


def rm(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to remove."),
    ],
    permanent: Annotated[
        bool,
        typer.Option("--permanent", "-P", help="Delete permanently instead of trashing."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Move files or directories to the trash."""
    config = load_cli_config(ctx)

    nodes: list[Node] = []
    for path in paths:
        try:
            nodes.append(node_from_path(path))
        except TreeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    if not yes:
        verb = "Permanently delete" if permanent else "Trash"
        confirmed = typer.confirm(f"{verb} {len(nodes)} path(s)?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    failed = 0
    for node in nodes:
        try:
            if permanent:
                operations.remove_permanently(node)
                print_success(f"Deleted {node.path}")
                continue
            if operations.remove(node, config.trash_dir) is None:
                print_warning(f"Already in trash: {node.path}")
            else:
                print_success(f"Trashed {node.path}")
        except TreeError as e:
            print_error(str(e))
            failed += 1

    if failed:
        raise typer.Exit(code=1)
