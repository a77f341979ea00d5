"""Capabilities a tree needs from the UI that hosts it.

The tree never talks to a terminal or editor directly. It asks its host
for the cursor position and for text, and hands rendered lines back.
Prompts return None when the user cancels; the tree then performs no
mutation and reports Outcome.CANCELLED.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from fstree.tree.nodes import File, Node


class Outcome(str, Enum):
    """Result of an interactive tree operation.

    Attributes:
        DONE: The operation ran.
        CANCELLED: The host's prompt was cancelled; nothing was changed.
    """

    DONE = "done"
    CANCELLED = "cancelled"


class TreeHost(Protocol):
    """UI collaborator injected into a Tree."""

    def cursor(self) -> int:
        """Current flattened cursor position. May raise if there is none."""
        ...

    def set_cursor(self, position: int) -> None:
        """Move the cursor to a flattened position."""
        ...

    def prompt_text(self, nodes: Sequence[Node]) -> str | None:
        """Ask for one string about the given nodes (e.g. a new name or directory)."""
        ...

    def prompt_texts(self, nodes: Sequence[Node]) -> list[str] | None:
        """Ask for several strings, e.g. names for a batch create or rename."""
        ...

    def prompt_path(self) -> str | None:
        """Ask for a directory path to change into."""
        ...

    def confirm(self, nodes: Sequence[Node]) -> bool:
        """Ask whether to go ahead with an operation on nodes."""
        ...

    def render(self, lines: list[str]) -> None:
        """Display the rendered tree, one line per visible node."""
        ...

    def open_file(self, file: File) -> None:
        """Open a file in the host (e.g. an editor buffer)."""
        ...

    def open_externally(self, path: str) -> None:
        """Open a path with the operating system's default handler."""
        ...

    def set_clipboard(self, text: str) -> None:
        """Put text on the host clipboard."""
        ...

    def show_nodes(self, nodes: Sequence[Node]) -> None:
        """Display a list of nodes (e.g. the copy registry)."""
        ...
