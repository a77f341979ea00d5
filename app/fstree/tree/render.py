"""Line rendering of the visible tree.

Each visible node becomes one line::

    <indent * depth><marker> <name>[postfix for directories]

where depth counts ancestors from the current root.
"""

import os

from fstree.core.config import TreeConfig
from fstree.tree.index import iter_visible
from fstree.tree.nodes import Directory, Node
from fstree.tree.trash import original_path_of


def marker_for(node: Node, config: TreeConfig) -> str:
    """Marker shown in front of a node's name."""
    if node.selected:
        return config.prefix_selected
    if isinstance(node, Directory):
        return config.prefix_dir_opened if node.opened else config.prefix_dir_closed
    return config.prefix_file


def display_name(node: Node, config: TreeConfig) -> str:
    """Name shown for a node; trashed entries show their original path."""
    name = original_path_of(node, config.trash_dir)
    if node.is_dir and not name.endswith(os.sep):
        name += config.postfix_dir
    return name


def render_line(node: Node, depth: int, config: TreeConfig) -> str:
    return f"{config.indent * depth}{marker_for(node, config)} {display_name(node, config)}"


def render_lines(root: Directory, config: TreeConfig) -> list[str]:
    """One line per visible node, in flattened order."""
    return [render_line(node, depth, config) for _, depth, node in iter_visible(root)]
