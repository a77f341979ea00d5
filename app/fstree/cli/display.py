"""Rich display of tree lines and trash listings."""

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from fstree.core.config import TreeConfig
from fstree.tree.index import iter_visible
from fstree.tree.nodes import Directory, Node
from fstree.tree.render import render_line


def _line_style(node: Node) -> str:
    if node.selected:
        return "selected"
    if isinstance(node, Directory):
        return "dir_opened" if node.opened else "dir_closed"
    return "file"


def format_tree(root: Directory, config: TreeConfig, numbered: bool = False) -> Text:
    """Render the visible tree as styled text, one node per line.

    Filenames are never interpreted as Rich markup.

    Args:
        root: Root of the visible tree.
        config: Markers and trash settings used for each line.
        numbered: Prefix each line with its flattened position.

    Returns:
        Rich Text ready to print.
    """
    text = Text()
    for position, depth, node in iter_visible(root):
        if position:
            text.append("\n")
        if numbered:
            text.append(f"{position:>4} ", style="position")
        text.append(render_line(node, depth, config), style=_line_style(node))
    return text


def format_lines(lines: Sequence[str], numbered: bool = True) -> Text:
    """Style lines already rendered by a Tree."""
    text = Text()
    for position, line in enumerate(lines):
        if position:
            text.append("\n")
        if numbered:
            text.append(f"{position:>4} ", style="position")
        text.append(line)
    return text


def create_trash_table(title: str = "Trash") -> Table:
    """Create a pre-configured table for trash entries."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Original Path", no_wrap=True)
    table.add_column("Type", width=10)
    table.add_column("Deleted", style="muted")
    table.add_column("Token", style="muted", overflow="ellipsis", max_width=24)
    return table
