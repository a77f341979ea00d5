"""Shared Rich consoles and message helpers.

Messages are escaped before printing because they routinely carry file
names, and a name like ``[red]x`` must not be read as markup.
"""

import sys

from rich.console import Console
from rich.markup import escape

from fstree.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Use truecolor on an interactive terminal; let Rich decide otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/]")


def print_path(path: str, target: Console | None = None) -> None:
    """Print a path verbatim on one line, e.g. for use in shell substitution."""
    (target or console).print(path, markup=False, highlight=False, soft_wrap=True)
