"""Interactive tree browser.

Reads one command per line. A command may be followed by a line number,
which moves the cursor there first; a bare number only moves the cursor.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from fstree.cli.host import ConsoleHost
from fstree.cli.types import load_cli_config
from fstree.tree import Outcome, Tree, TreeError
from fstree.utils.formatting import console, print_error, print_info

QUIT_COMMANDS = frozenset({"q", "quit", "exit"})

COMMANDS: dict[str, tuple[Callable[[Tree], object], str]] = {
    "o": (Tree.toggle, "Open or close the directory"),
    "O": (Tree.toggle_rec, "Open or close the directory recursively"),
    "l": (Tree.down, "Enter the directory or show the file"),
    "h": (Tree.up, "Close the directory or go to the parent"),
    "s": (Tree.select, "Toggle selection"),
    "S": (Tree.toggle_select_all, "Select all or clear the selection"),
    "R": (Tree.reverse_selected, "Invert the selection"),
    "mkdir": (Tree.create_dirs, "Create directories"),
    "touch": (Tree.create_files, "Create files"),
    "rn": (Tree.rename, "Rename"),
    "mv": (Tree.move, "Move into a directory"),
    "rm": (Tree.remove, "Move to the trash"),
    "RM": (Tree.remove_permanently, "Delete permanently"),
    "restore": (Tree.restore, "Restore from the trash"),
    "c": (Tree.copy, "Copy"),
    "p": (Tree.paste, "Paste copied entries"),
    "copied": (Tree.copied_list, "List copied entries"),
    "Y": (Tree.yank, "Copy the path to the clipboard"),
    "x": (Tree.open_externally, "Open with the default application"),
    "X": (Tree.open_dir_externally, "Open the containing directory"),
    "cd": (Tree.cd, "Change the root directory"),
    "root": (Tree.go_root, "Go to the filesystem root"),
    "home": (Tree.go_home, "Go to the home directory"),
    "trash": (Tree.go_trash, "Go to the trash"),
    "project": (Tree.go_project, "Go to the project root"),
    "r": (Tree.scan_and_render, "Rescan and redraw"),
}


def _print_help() -> None:
    table = Table(show_header=True, header_style="bold_header", border_style="border")
    table.add_column("Command", style="info", no_wrap=True)
    table.add_column("Action")
    for name, (_, description) in COMMANDS.items():
        table.add_row(name, description)
    table.add_row("q", "Quit")
    console.print(table)
    console.print("[dim]Prefix or follow a command with a line number to move the cursor.[/dim]")


def execute_line(tree: Tree, host: ConsoleHost, line: str) -> bool:
    """Execute one input line against a tree.

    Args:
        tree: Tree being browsed.
        host: Host whose cursor the line may move.
        line: Raw input such as "o", "3" or "rm 5".

    Returns:
        False when the line asks to quit, True otherwise.
    """
    words = line.split()
    if not words:
        return True
    if words[0].isdigit():
        host.set_cursor(int(words[0]))
        words = words[1:]
        if not words:
            tree.render()
            return True

    name, args = words[0], words[1:]
    if name in QUIT_COMMANDS:
        return False
    if name == "?":
        _print_help()
        return True
    if name not in COMMANDS:
        print_error(f"Unknown command: {name} (? for help)")
        return True
    if args:
        if not args[0].isdigit():
            print_error(f"Expected a line number, got: {args[0]}")
            return True
        host.set_cursor(int(args[0]))

    action, _ = COMMANDS[name]
    try:
        outcome = action(tree)
    except TreeError as e:
        print_error(str(e))
        return True
    if outcome is Outcome.CANCELLED:
        print_info("Cancelled.")
    return True


def browse(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to start browsing from."),
    ] = Path("."),
) -> None:
    """Browse and edit a directory tree interactively."""
    config = load_cli_config(ctx)
    host = ConsoleHost()
    try:
        tree = Tree(path, host, config)
    except TreeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    tree.render()
    while True:
        try:
            line = typer.prompt(
                f"[{host.cursor()}]", default="", show_default=False, prompt_suffix="> "
            )
        except typer.Abort:
            break
        if not execute_line(tree, host, line):
            break
