"""Directory reconciliation.

Rebuilds the children of an opened directory from the filesystem while
keeping the nodes that still exist, so their opened and selected flags
survive. Nested opened directories are rescanned recursively, which keeps
expanded subtrees live across refreshes.
"""

import logging
import os

from fstree.tree.errors import TreeIOError
from fstree.tree.nodes import Directory, File, Node
from fstree.tree.ordering import sort_nodes

logger = logging.getLogger(__name__)


def read_entries(dirname: str) -> list[Node]:
    """Read the entries of a directory as fresh, closed, unselected nodes.

    Symlinks are classified by their target, as the OS reports them.

    Args:
        dirname: Directory to list.

    Returns:
        One node per entry, in listing order.

    Raises:
        TreeIOError: If the directory doesn't exist or cannot be read.
    """
    nodes: list[Node] = []
    try:
        with os.scandir(dirname) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                if is_dir:
                    nodes.append(Directory(entry.name, dirname))
                else:
                    nodes.append(File(entry.name, dirname))
    except OSError as e:
        msg = f"Cannot read directory {dirname}: {e}"
        raise TreeIOError(msg) from e
    return nodes


def reconcile(previous: list[Node] | tuple[Node, ...], fresh: list[Node]) -> list[Node]:
    """Merge a fresh listing with the previous children.

    Entries matched by (kind, path) keep their previous node. Everything
    else comes from the fresh listing. Previous nodes missing from the
    listing are dropped.

    Args:
        previous: Children before the scan.
        fresh: Nodes built from the current listing.

    Returns:
        Reconciled children, sorted.
    """
    known = {node.key: node for node in previous}
    return sort_nodes([known.get(candidate.key, candidate) for candidate in fresh])


def _plan(directory: Directory, pending: list[tuple[Directory, list[Node]]]) -> None:
    """Reconcile a directory and its opened descendants without committing.

    Fresh nodes are always closed, so every opened child is a kept one.
    """
    children = reconcile(directory.children, read_entries(directory.path))
    for child in children:
        if isinstance(child, Directory) and child.opened:
            _plan(child, pending)
    pending.append((directory, children))


def scan_directory(directory: Directory) -> None:
    """Replace the children of an opened directory with a reconciled listing.

    The whole opened subtree is read first; nothing is committed, at any
    level, unless every listing succeeds.

    Args:
        directory: Opened directory to rescan. Closed directories are left as is.

    Raises:
        TreeIOError: If the directory or a nested opened directory cannot be read.
    """
    if not directory.opened:
        return
    pending: list[tuple[Directory, list[Node]]] = []
    _plan(directory, pending)
    for scanned, children in pending:
        scanned.replace_children(children)
    logger.debug("Scanned %s (%d directories)", directory.path, len(pending))
