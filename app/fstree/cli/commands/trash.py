"""Trash listing, restore and cleanup commands."""

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.text import Text

from fstree.cli.display import create_trash_table
from fstree.cli.types import OutputFormat, load_cli_config
from fstree.core.config import TreeConfig
from fstree.core.paths import ensure_trash_dir
from fstree.tree import operations
from fstree.tree.errors import TrashDecodeError, TreeError
from fstree.tree.nodes import Directory, Node
from fstree.tree.trash import TrashRecord, decode
from fstree.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and restore soft-deleted entries.",
    no_args_is_help=True,
)


def _trash_entries(config: TreeConfig) -> list[Node]:
    """Read the trash directory, creating it if needed. Exits with code 1 on failure."""
    try:
        trash = Directory.from_path(ensure_trash_dir(config.trash_dir))
        trash.open()
    except (RuntimeError, TreeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return list(trash.children)


def _decode_or_none(node: Node) -> TrashRecord | None:
    try:
        return decode(node.name)
    except TrashDecodeError:
        return None


@app.command("list")
def list_entries(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List trashed entries with their original paths."""
    config = load_cli_config(ctx)
    entries = [(node, _decode_or_none(node)) for node in _trash_entries(config)]
    entries.sort(key=lambda item: item[1].deleted_at.timestamp() if item[1] else 0.0)

    if output_format == OutputFormat.JSON:
        data = [
            {
                "token": node.name,
                "type": node.kind,
                "original_path": record.original_path if record else None,
                "deleted_at": record.deleted_at.isoformat() if record else None,
            }
            for node, record in entries
        ]
        console.print_json(json.dumps(data))
        return

    if not entries:
        print_success("Trash is empty.")
        return

    table = create_trash_table()
    for node, record in entries:
        if record is None:
            table.add_row("[warning]<undecodable>[/]", node.kind, "-", node.name)
            continue
        table.add_row(
            Text(record.original_path),
            node.kind,
            record.deleted_at.strftime("%Y-%m-%d %H:%M:%S"),
            node.name,
        )
    console.print(table)
    console.print(f"\n[dim]{len(entries)} entries in {escape(str(config.trash_dir))}[/dim]")


@app.command()
def restore(
    ctx: typer.Context,
    tokens: Annotated[
        list[str],
        typer.Argument(help="Trash tokens (entry names) or original paths to restore."),
    ],
) -> None:
    """Move trashed entries back to their original paths."""
    config = load_cli_config(ctx)
    entries = _trash_entries(config)

    failed = 0
    for token in tokens:
        node = _find_entry(entries, token)
        if node is None:
            print_error(f"No trash entry matches {token}")
            failed += 1
            continue
        try:
            restored = operations.restore(node, config.trash_dir)
        except TreeError as e:
            print_error(str(e))
            failed += 1
            continue
        print_success(f"Restored {restored}")

    if failed:
        raise typer.Exit(code=1)


def _find_entry(entries: list[Node], token: str) -> Node | None:
    """Match a trash entry by token, or by the original path it records."""
    for node in entries:
        if node.name == token:
            return node
    for node in entries:
        record = _decode_or_none(node)
        if record is not None and record.original_path == token:
            return node
    return None


@app.command()
def empty(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently delete everything in the trash."""
    config = load_cli_config(ctx)
    entries = _trash_entries(config)

    if not entries:
        print_info("Trash is already empty.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"Permanently delete {len(entries)} trashed entries?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    failed = 0
    for node in entries:
        try:
            operations.remove_permanently(node)
        except TreeError as e:
            print_error(str(e))
            failed += 1

    if failed:
        raise typer.Exit(code=1)
    print_success(f"Deleted {len(entries)} trashed entries.")
