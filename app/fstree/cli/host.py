"""Terminal host for an interactive tree session.

Implements the tree's host protocol on top of Typer prompts and the
shared Rich console. The cursor is a plain integer kept by the host and
set by the browse loop before each command.
"""

import logging
import shlex
from collections.abc import Sequence

import pyperclip
import typer
from rich.console import Console
from rich.syntax import Syntax

from fstree.cli.display import format_lines
from fstree.tree.nodes import File, Node
from fstree.utils.formatting import console as default_console
from fstree.utils.formatting import print_error, print_info, print_path, print_warning
from fstree.utils.shell import open_with_default_app

logger = logging.getLogger(__name__)


def _describe(nodes: Sequence[Node]) -> str:
    if len(nodes) == 1:
        return nodes[0].name
    return f"{len(nodes)} entries"


class ConsoleHost:
    """Host backed by the terminal.

    Args:
        console: Rich console used for output. Defaults to the shared console.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or default_console
        self._cursor = 0
        self.clipboard: str | None = None

    def cursor(self) -> int:
        return self._cursor

    def set_cursor(self, position: int) -> None:
        self._cursor = max(position, 0)

    def _prompt(self, label: str) -> str | None:
        try:
            value = typer.prompt(label, default="", show_default=False)
        except typer.Abort:
            return None
        value = value.strip()
        return value or None

    def prompt_text(self, nodes: Sequence[Node]) -> str | None:
        return self._prompt(f"Name for {_describe(nodes)}")

    def prompt_texts(self, nodes: Sequence[Node]) -> list[str] | None:
        """Ask for shell-quoted names separated by spaces."""
        raw = self._prompt(f"Names for {_describe(nodes)}")
        if raw is None:
            return None
        try:
            names = shlex.split(raw)
        except ValueError as e:
            print_error(f"Cannot parse names: {e}")
            return None
        return names or None

    def prompt_path(self) -> str | None:
        return self._prompt("Change directory to")

    def confirm(self, nodes: Sequence[Node]) -> bool:
        for node in nodes:
            print_path(f"  {node.path}", self._console)
        try:
            return typer.confirm(f"Proceed with {_describe(nodes)}?", default=False)
        except typer.Abort:
            return False

    def render(self, lines: list[str]) -> None:
        self._console.print(format_lines(lines))

    def open_file(self, file: File) -> None:
        """Print the file's contents with syntax highlighting."""
        try:
            syntax = Syntax.from_path(file.path, line_numbers=True)
        except (OSError, UnicodeDecodeError) as e:
            print_warning(f"Cannot display {file.path}: {e}")
            return
        self._console.print(syntax)

    def open_externally(self, path: str) -> None:
        try:
            result = open_with_default_app(path)
        except FileNotFoundError as e:
            print_error(f"No opener available: {e}")
            return
        if not result.success:
            print_error(f"Opening {path} failed: {result.stderr.strip()}")
            return
        logger.debug("Opened %s externally", path)

    def set_clipboard(self, text: str) -> None:
        """Copy text to the system clipboard, printing it when there is none."""
        self.clipboard = text
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            print_warning(f"Clipboard unavailable: {e}")
            print_path(text, self._console)
            return
        print_info(f"Yanked {text}")

    def show_nodes(self, nodes: Sequence[Node]) -> None:
        if not nodes:
            print_info("Nothing copied.")
            return
        for node in nodes:
            print_path(node.path, self._console)
