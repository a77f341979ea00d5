"""Operations dispatched on a single node.

Each function handles the Directory and File variants explicitly and
raises InvalidOperatorError for anything else, so an unsupported
combination is always reported rather than ignored.
"""

import logging
import os
import shutil

from fstree.tree.errors import InvalidOperatorError, NodeNotFoundError, TreeIOError
from fstree.tree.nodes import Directory, File, Node
from fstree.tree.trash import decode, is_in_trash, new_token

logger = logging.getLogger(__name__)


def _unsupported(operation: str, node: object) -> InvalidOperatorError:
    return InvalidOperatorError(f"Cannot {operation} {node!r}")


def equals(a: Node, b: Node) -> bool:
    """Same kind and same path."""
    return a.is_dir == b.is_dir and a.path == b.path


def rel(base: Node, target: Node) -> str:
    """Path of target relative to base."""
    return os.path.relpath(target.path, base.path)


def under_or_equals(base: Node, target: Node) -> bool:
    """Check whether target is base itself or lies inside it.

    Names that merely start with ".." (like "..bar") are inside.
    """
    relative = rel(base, target)
    return relative != os.pardir and not relative.startswith(os.pardir + os.sep)


def nearest_dir(node: Node) -> Directory:
    """The directory itself, or the directory containing a file.

    Raises:
        NodeNotFoundError: If a file has no parent in the tree.
        InvalidOperatorError: For unknown node kinds.
    """
    if isinstance(node, Directory):
        return node
    if isinstance(node, File):
        parent = node.parent
        if parent is None:
            msg = f"No parent directory for {node.path}"
            raise NodeNotFoundError(msg)
        return parent
    raise _unsupported("resolve the directory of", node)


def nearest_opened_dir(node: Node) -> Directory:
    """The nearest opened directory at or above a node.

    An opened directory is its own answer. A closed directory or a file
    resolves to its parent; a closed root directory resolves to itself.

    Raises:
        NodeNotFoundError: If a file has no parent in the tree.
        InvalidOperatorError: For unknown node kinds.
    """
    if isinstance(node, Directory):
        if node.opened:
            return node
        return node.parent or node
    if isinstance(node, File):
        return nearest_dir(node)
    raise _unsupported("resolve the opened directory of", node)


def toggle(node: Node) -> None:
    """Open or close a directory."""
    if isinstance(node, Directory):
        node.toggle()
        return
    raise _unsupported("toggle", node)


def toggle_rec(node: Node) -> None:
    """Close an opened directory, or open a closed one recursively."""
    if isinstance(node, Directory):
        node.toggle_rec()
        return
    raise _unsupported("toggle", node)


def create_dirs(node: Node, names: list[str]) -> None:
    """Create directories next to a file or inside a directory."""
    nearest_dir(node).create_dirs(*names)


def create_files(node: Node, names: list[str]) -> None:
    """Create files next to a file or inside a directory."""
    nearest_dir(node).create_files(*names)


def rename(node: Node, new_name: str) -> None:
    if isinstance(node, (Directory, File)):
        node.rename(new_name)
        return
    raise _unsupported("rename", node)


def move(node: Node, new_dirname: str) -> None:
    if isinstance(node, (Directory, File)):
        node.move(new_dirname)
        return
    raise _unsupported("move", node)


def remove(node: Node, trash_dir: str | os.PathLike[str]) -> str | None:
    """Soft-delete a node by moving it into the trash under a fresh token.

    Args:
        node: Node to delete.
        trash_dir: Trash directory (created if missing).

    Returns:
        Path of the trashed entry, or None if the node already was in trash.

    Raises:
        TreeIOError: If the move fails.
    """
    if not isinstance(node, (Directory, File)):
        raise _unsupported("remove", node)
    if is_in_trash(node, trash_dir):
        logger.debug("%s is already in trash", node.path)
        return None

    trash = os.fspath(trash_dir)
    target = os.path.join(trash, new_token(node.path))
    try:
        os.makedirs(trash, exist_ok=True)
        shutil.move(node.path, target)
    except OSError as e:
        msg = f"Cannot move {node.path} to trash: {e}"
        raise TreeIOError(msg) from e
    logger.info("Trashed %s -> %s", node.path, target)
    return target


def remove_permanently(node: Node) -> None:
    """Delete a node from the filesystem, recursively for directories."""
    if isinstance(node, (Directory, File)):
        node.remove()
        return
    raise _unsupported("remove", node)


def restore(node: Node, trash_dir: str | os.PathLike[str]) -> str:
    """Move a trashed node back to the path recorded in its token.

    The original parent directory is recreated if it no longer exists.

    Returns:
        The restored path.

    Raises:
        InvalidOperatorError: If the node isn't in the trash.
        TrashDecodeError: If the node's name isn't a valid token.
        TreeIOError: If the original path is taken or the move fails.
    """
    if not isinstance(node, (Directory, File)) or not is_in_trash(node, trash_dir):
        raise _unsupported("restore", node)

    original = decode(node.name).original_path
    if os.path.lexists(original):
        msg = f"Cannot restore {node.path}: {original} already exists"
        raise TreeIOError(msg)
    try:
        os.makedirs(os.path.dirname(original), exist_ok=True)
        shutil.move(node.path, original)
    except OSError as e:
        msg = f"Cannot restore {node.path} to {original}: {e}"
        raise TreeIOError(msg) from e
    logger.info("Restored %s -> %s", node.path, original)
    return original


def copy_into(node: Node, dst_dir: str) -> str:
    """Copy a node's contents into a directory under the same name.

    Directories are copied recursively and merged into an existing target;
    files overwrite an existing target.

    Returns:
        Path of the copy.

    Raises:
        TreeIOError: If the copy fails.
    """
    target = os.path.join(dst_dir, node.name)
    try:
        if isinstance(node, Directory):
            shutil.copytree(node.path, target, symlinks=True, dirs_exist_ok=True)
        elif isinstance(node, File):
            shutil.copy2(node.path, target)
        else:
            raise _unsupported("copy", node)
    except OSError as e:
        msg = f"Cannot copy {node.path} to {target}: {e}"
        raise TreeIOError(msg) from e
    logger.info("Copied %s -> %s", node.path, target)
    return target
