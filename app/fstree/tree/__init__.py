"""In-memory tree of directory and file nodes.

This package provides the node model, directory reconciliation,
flattened cursor addressing, trash tokens and the Tree facade that a
cursor-driven host talks to.
"""

from fstree.tree.browser import Tree
from fstree.tree.errors import (
    CountMismatchError,
    InvalidOperatorError,
    NodeNotFoundError,
    NotDirectoryError,
    NotFileError,
    TrashDecodeError,
    TreeError,
    TreeIOError,
)
from fstree.tree.host import Outcome, TreeHost
from fstree.tree.index import count_visible, index_of, iter_visible, position_of, range_of
from fstree.tree.nodes import Directory, File, Node, node_from_path
from fstree.tree.ordering import natural_key, sort_nodes
from fstree.tree.render import render_lines
from fstree.tree.scanner import scan_directory
from fstree.tree.trash import TrashRecord, decode, encode, is_in_trash, original_path_of

__all__ = [
    "CountMismatchError",
    "Directory",
    "File",
    "InvalidOperatorError",
    "Node",
    "NodeNotFoundError",
    "NotDirectoryError",
    "NotFileError",
    "Outcome",
    "TrashDecodeError",
    "TrashRecord",
    "Tree",
    "TreeError",
    "TreeHost",
    "TreeIOError",
    "count_visible",
    "decode",
    "encode",
    "index_of",
    "is_in_trash",
    "iter_visible",
    "natural_key",
    "node_from_path",
    "original_path_of",
    "position_of",
    "range_of",
    "render_lines",
    "scan_directory",
    "sort_nodes",
]
