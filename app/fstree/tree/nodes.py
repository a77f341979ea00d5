"""Directory and file nodes of the in-memory tree.

A node knows its name and the directory it lives in; its path is derived
from the two on every access. Directories own their children, which
exist only while the directory is opened. Children point back at their
parent through a weak reference so dropping a subtree (closing, rescanning
or re-rooting) frees it.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import ClassVar

from fstree.tree.errors import NodeNotFoundError, NotDirectoryError, NotFileError, TreeIOError

logger = logging.getLogger(__name__)

DIR_MODE = 0o775
FILE_MODE = 0o664


def _split_path(path: str | os.PathLike[str]) -> tuple[str, str]:
    """Split an absolute path into (dirname, name).

    The filesystem root is its own name so that joining the two gives
    the root back.
    """
    full = os.path.abspath(os.fspath(path))
    return os.path.dirname(full), os.path.basename(full) or full


class Node(ABC):
    """A directory or file entry in the tree.

    Two nodes are equal when they are the same kind and have the same path.
    Rescans rebuild node objects, so identity is never used for matching.

    Attributes:
        kind: "directory" or "file".
        is_dir: Discriminant between the two variants.
    """

    kind: ClassVar[str]
    is_dir: ClassVar[bool]

    def __init__(self, name: str, dirname: str) -> None:
        self._name = name
        self._dirname = dirname
        self._parent: weakref.ref[Directory] | None = None
        self._selected = False

    @property
    def name(self) -> str:
        """Base name of the entry."""
        return self._name

    @property
    def dirname(self) -> str:
        """Path of the directory containing the entry."""
        return self._dirname

    @property
    def path(self) -> str:
        """Full path, recomputed from dirname and name."""
        return os.path.join(self._dirname, self._name)

    @property
    def key(self) -> tuple[bool, str]:
        """Identity used to match nodes across rescans."""
        return (self.is_dir, self.path)

    @property
    def parent(self) -> Directory | None:
        """Owning directory, or None for a root (or a dropped parent)."""
        if self._parent is None:
            return None
        return self._parent()

    def set_parent(self, parent: Directory | None) -> None:
        """Attach the node to a new owning directory."""
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def selected(self) -> bool:
        return self._selected

    def select(self) -> None:
        self._selected = True

    def unselect(self) -> None:
        self._selected = False

    def toggle_selected(self) -> None:
        self._selected = not self._selected

    def rename(self, new_name: str) -> None:
        """Rename the entry within its directory.

        Raises:
            TreeIOError: If the filesystem rename fails.
        """
        target = os.path.join(self._dirname, new_name)
        try:
            os.rename(self.path, target)
        except OSError as e:
            msg = f"Cannot rename {self.path} to {target}: {e}"
            raise TreeIOError(msg) from e
        logger.info("Renamed %s -> %s", self.path, target)

    def move(self, new_dirname: str) -> None:
        """Move the entry into another directory, keeping its name.

        An existing entry of the same name in the new directory is never
        replaced or moved into.

        Raises:
            TreeIOError: If the target exists or the filesystem move fails.
        """
        target = os.path.join(new_dirname, self._name)
        if os.path.lexists(target):
            msg = f"Cannot move {self.path}: {target} already exists"
            raise TreeIOError(msg)
        try:
            shutil.move(self.path, target)
        except OSError as e:
            msg = f"Cannot move {self.path} to {target}: {e}"
            raise TreeIOError(msg) from e
        logger.info("Moved %s -> %s", self.path, target)

    @abstractmethod
    def remove(self) -> None:
        """Delete the entry from the filesystem, permanently."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class File(Node):
    """Leaf node for anything that isn't a directory."""

    kind = "file"
    is_dir = False

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> File:
        """Build a file node from an existing path.

        Raises:
            TreeIOError: If the path cannot be stat'ed.
            NotFileError: If the path is a directory.
        """
        dirname, name = _split_path(path)
        full = os.path.join(dirname, name)
        try:
            st = os.stat(full)
        except OSError as e:
            raise TreeIOError(f"Cannot stat {full}: {e}") from e
        if stat.S_ISDIR(st.st_mode):
            msg = f"The path '{full}' isn't a file"
            raise NotFileError(msg)
        return cls(name, dirname)

    def remove(self) -> None:
        try:
            os.remove(self.path)
        except OSError as e:
            raise TreeIOError(f"Cannot remove {self.path}: {e}") from e
        logger.info("Removed file %s", self.path)


class Directory(Node):
    """Directory node.

    Children are populated iff the directory is opened; closing drops them
    from memory without touching the filesystem. A new directory is always
    closed.
    """

    kind = "directory"
    is_dir = True

    def __init__(self, name: str, dirname: str) -> None:
        super().__init__(name, dirname)
        self._opened = False
        self._children: list[Node] = []

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Directory:
        """Build a closed directory node from an existing path.

        Raises:
            TreeIOError: If the path cannot be stat'ed.
            NotDirectoryError: If the path isn't a directory.
        """
        dirname, name = _split_path(path)
        full = os.path.join(dirname, name)
        try:
            st = os.stat(full)
        except OSError as e:
            raise TreeIOError(f"Cannot stat {full}: {e}") from e
        if not stat.S_ISDIR(st.st_mode):
            msg = f"The path '{full}' isn't a directory"
            raise NotDirectoryError(msg)
        return cls(name, dirname)

    @property
    def opened(self) -> bool:
        return self._opened

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def num_children(self) -> int:
        return len(self._children)

    def append_child(self, node: Node) -> None:
        """Append a child and make this directory its parent."""
        self._children.append(node)
        node.set_parent(self)

    def replace_children(self, nodes: list[Node]) -> None:
        """Replace all children at once, re-parenting each of them."""
        self._children = []
        for node in nodes:
            self.append_child(node)

    def open(self) -> None:
        """Open the directory and read its children.

        Raises:
            TreeIOError: If the directory cannot be read. The directory keeps
                its previous opened state.
        """
        was_opened = self._opened
        self._opened = True
        try:
            self.scan()
        except TreeIOError:
            self._opened = was_opened
            raise

    def close(self) -> None:
        """Close the directory, dropping its children from memory."""
        self._opened = False
        self._children = []

    def toggle(self) -> None:
        if self._opened:
            self.close()
            return
        self.open()

    def open_rec(self) -> None:
        """Open this directory and every directory below it."""
        self.open()
        for child in self._children:
            if isinstance(child, Directory):
                child.open_rec()

    def toggle_rec(self) -> None:
        """Close when opened; otherwise open recursively."""
        if self._opened:
            self.close()
            return
        self.open_rec()

    def scan(self) -> None:
        """Reconcile children with the filesystem. No-op while closed."""
        if not self._opened:
            return
        from fstree.tree.scanner import scan_directory

        scan_directory(self)

    def read_parent(self) -> Directory:
        """Return the parent directory, building it from disk if needed.

        Raises:
            NodeNotFoundError: If this is the filesystem root.
            TreeIOError: If the parent cannot be stat'ed.
        """
        parent = self.parent
        if parent is not None:
            return parent
        if os.path.dirname(self.path) == self.path:
            msg = f"Can't read parent of {self.path}"
            raise NodeNotFoundError(msg)
        return Directory.from_path(self._dirname)

    def walk(self) -> Iterator[Node]:
        """Yield this directory and its visible descendants in preorder."""
        yield self
        for child in self._children:
            if isinstance(child, Directory):
                yield from child.walk()
            else:
                yield child

    def has_selected(self) -> bool:
        return any(node.selected for node in self.walk())

    def selected_nodes(self) -> list[Node]:
        return [node for node in self.walk() if node.selected]

    def create_dirs(self, *names: str) -> None:
        """Create directories (with missing parents) under this directory.

        Raises:
            TreeIOError: On the first directory that cannot be created.
        """
        for name in names:
            target = os.path.join(self.path, name)
            try:
                os.makedirs(target, mode=DIR_MODE, exist_ok=True)
            except OSError as e:
                raise TreeIOError(f"Cannot create directory {target}: {e}") from e
            logger.info("Created directory %s", target)
        self.scan()

    def create_files(self, *names: str) -> None:
        """Create empty files under this directory; existing files are kept.

        Raises:
            TreeIOError: On the first file that cannot be created.
        """
        for name in names:
            target = os.path.join(self.path, name)
            try:
                fd = os.open(target, os.O_CREAT | os.O_WRONLY, FILE_MODE)
                os.close(fd)
            except OSError as e:
                raise TreeIOError(f"Cannot create file {target}: {e}") from e
            logger.info("Created file %s", target)
        self.scan()

    def remove(self) -> None:
        try:
            if os.path.islink(self.path):
                os.unlink(self.path)
            else:
                shutil.rmtree(self.path)
        except OSError as e:
            raise TreeIOError(f"Cannot remove {self.path}: {e}") from e
        logger.info("Removed directory %s", self.path)


def node_from_path(path: str | os.PathLike[str]) -> Node:
    """Build a Directory or File node for an existing path.

    Raises:
        TreeIOError: If the path cannot be stat'ed.
    """
    try:
        return Directory.from_path(path)
    except NotDirectoryError:
        return File.from_path(path)
