"""The tree facade driven by a cursor-based host.

A Tree owns the current root directory and a copy registry. It reads the
cursor and user input from its host, dispatches to node operations, and
hands the re-rendered lines back to the host after every change.

Mutations target the selected nodes when any are selected, and the node
under the cursor otherwise. After a mutation the selection is cleared and
the whole root is rescanned and re-rendered, even when the mutation fails
half way. A rescan failing at that point is logged, not raised.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

from fstree.core.config import TreeConfig
from fstree.tree import operations
from fstree.tree.errors import (
    CountMismatchError,
    InvalidOperatorError,
    NodeNotFoundError,
    TreeIOError,
)
from fstree.tree.host import Outcome, TreeHost
from fstree.tree.index import index_of, iter_visible, range_of
from fstree.tree.locations import dir_home, dir_project, dir_root
from fstree.tree.nodes import Directory, File, Node
from fstree.tree.render import render_lines

logger = logging.getLogger(__name__)


class Tree:
    """Navigable, renderable model of a filesystem subtree.

    Args:
        path: Directory to use as the initial root.
        host: UI collaborator supplying the cursor, prompts and render sink.
        config: Rendering and policy settings. Defaults to TreeConfig().

    Raises:
        TreeIOError: If the trash directory cannot be created or the root
            cannot be read.
        NotDirectoryError: If path isn't a directory.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        host: TreeHost,
        config: TreeConfig | None = None,
    ) -> None:
        self._host = host
        self._config = config or TreeConfig()
        self._registry: tuple[Node, ...] = ()
        try:
            os.makedirs(self._config.trash_dir, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create trash directory {self._config.trash_dir}: {e}"
            raise TreeIOError(msg) from e
        self._root = self._open_root(Directory.from_path(path))

    @property
    def root(self) -> Directory:
        return self._root

    @property
    def config(self) -> TreeConfig:
        return self._config

    @property
    def registry(self) -> tuple[Node, ...]:
        """Nodes captured by the last copy."""
        return self._registry

    # -- Root management -------------------------------------------------

    @staticmethod
    def _open_root(root: Directory) -> Directory:
        root.open()
        return root

    def set_root(self, root: Directory) -> None:
        """Re-root the tree on a directory and open it.

        The previous root is only replaced once the new one has been read.
        """
        self._root = self._open_root(root)
        logger.debug("Root is now %s", root.path)

    def set_root_path(self, path: str | os.PathLike[str]) -> None:
        self.set_root(Directory.from_path(path))

    # -- Addressing and rendering ----------------------------------------

    def node_at(self, position: int) -> Node:
        """Node at a flattened position.

        Raises:
            NodeNotFoundError: If no visible node has that position.
        """
        node = index_of(self._root, position)
        if node is None:
            msg = f"No node at position {position}"
            raise NodeNotFoundError(msg)
        return node

    def nodes_in_range(self, start: int, end: int) -> list[Node]:
        return range_of(self._root, start, end)

    def cursor_node(self) -> Node:
        return self.node_at(self._host.cursor())

    def lines(self) -> list[str]:
        return render_lines(self._root, self._config)

    def render(self) -> None:
        self._host.render(self.lines())

    def scan_and_render(self) -> None:
        try:
            self._root.scan()
        finally:
            self.render()

    def _refresh(self) -> None:
        """Rescan and render after a mutation.

        The mutation has already happened at this point, so a failed rescan
        (the root itself was renamed or trashed, say) is logged rather than
        raised in place of the mutation's own outcome.
        """
        try:
            self._root.scan()
        except TreeIOError as e:
            logger.warning("Rescan of %s failed: %s", self._root.path, e)
        self.render()

    @contextmanager
    def _rendering(self) -> Iterator[None]:
        try:
            yield
        finally:
            self.render()

    @contextmanager
    def _mutation(self) -> Iterator[list[Node]]:
        """Resolve the target nodes, then unselect, rescan and render afterwards."""
        nodes: list[Node] = []
        try:
            nodes = self._targets()
            yield nodes
        finally:
            for node in nodes:
                node.unselect()
            self._refresh()

    def _targets(self) -> list[Node]:
        if self._root.has_selected():
            return self._root.selected_nodes()
        return [self.cursor_node()]

    # -- Navigation ------------------------------------------------------

    def open(self) -> None:
        """Reopen (and rescan) the root."""
        with self._rendering():
            self._root.open()

    def cd(self) -> Outcome:
        """Re-root on a path asked from the host, relative to the current root."""
        with self._rendering():
            path = self._host.prompt_path()
            if not path:
                return Outcome.CANCELLED
            self.set_root_path(os.path.join(self._root.path, os.path.expanduser(path)))
            return Outcome.DONE

    def go_root(self) -> None:
        with self._rendering():
            self.set_root_path(dir_root())

    def go_home(self) -> None:
        with self._rendering():
            self.set_root_path(dir_home())

    def go_trash(self) -> None:
        with self._rendering():
            self.set_root_path(self._config.trash_dir)

    def go_project(self) -> None:
        """Re-root on the nearest ancestor holding a project marker."""
        with self._rendering():
            self.set_root_path(dir_project(self._root.path, self._config.project_regex))

    def up(self) -> None:
        """Ascend from the cursor.

        When the parent of the nearest opened directory is still inside the
        current root, that directory is just closed. Otherwise the tree is
        re-rooted on the parent.
        """
        with self._rendering():
            current = operations.nearest_opened_dir(self.cursor_node())
            parent = current.read_parent()
            if operations.under_or_equals(self._root, parent):
                current.close()
                return
            self.set_root(parent)

    def down(self) -> None:
        """Re-root on the directory under the cursor, or open the file there."""
        with self._rendering():
            node = self.cursor_node()
            if isinstance(node, Directory):
                self.set_root(node)
            elif isinstance(node, File):
                self._host.open_file(node)
            else:
                raise InvalidOperatorError(f"Cannot descend into {node!r}")

    def toggle(self) -> None:
        with self._rendering():
            operations.toggle(self.cursor_node())

    def toggle_rec(self) -> None:
        with self._rendering():
            operations.toggle_rec(self.cursor_node())

    # -- Selection -------------------------------------------------------

    def has_selected(self) -> bool:
        return self._root.has_selected()

    def selected_nodes(self) -> list[Node]:
        return self._root.selected_nodes()

    def _descendants(self) -> list[Node]:
        return [node for position, _, node in iter_visible(self._root) if position > 0]

    def select(self) -> None:
        """Toggle selection under the cursor; advance the cursor when selecting."""
        with self._rendering():
            position = self._host.cursor()
            node = self.node_at(position)
            node.toggle_selected()
            if node.selected:
                self._host.set_cursor(position + 1)

    def toggle_select_all(self) -> None:
        """Clear the selection if there is one; otherwise select every visible node."""
        with self._rendering():
            if self._root.has_selected():
                for node in self._root.walk():
                    node.unselect()
                return
            for node in self._descendants():
                node.select()

    def reverse_selected(self) -> None:
        """Flip the selection of every visible node below the root."""
        with self._rendering():
            for node in self._descendants():
                node.toggle_selected()

    # -- Mutations -------------------------------------------------------

    def create_dirs(self) -> Outcome:
        """Create directories named by the host next to each target."""
        with self._mutation() as nodes:
            names = self._host.prompt_texts(nodes)
            if not names:
                return Outcome.CANCELLED
            for node in nodes:
                operations.create_dirs(node, names)
            return Outcome.DONE

    def create_files(self) -> Outcome:
        """Create files named by the host next to each target."""
        with self._mutation() as nodes:
            names = self._host.prompt_texts(nodes)
            if not names:
                return Outcome.CANCELLED
            for node in nodes:
                operations.create_files(node, names)
            return Outcome.DONE

    def rename(self) -> Outcome:
        """Rename the targets in place.

        A single target gets one name; several targets need exactly one
        name each, checked before anything is renamed.

        Raises:
            CountMismatchError: If the number of names differs from the targets.
        """
        with self._mutation() as nodes:
            if len(nodes) == 1:
                name = self._host.prompt_text(nodes)
                if not name:
                    return Outcome.CANCELLED
                operations.rename(nodes[0], name)
                return Outcome.DONE

            names = self._host.prompt_texts(nodes)
            if names is None:
                return Outcome.CANCELLED
            if len(names) != len(nodes):
                raise CountMismatchError(len(nodes), len(names))
            for node, name in zip(nodes, names, strict=True):
                operations.rename(node, name)
            return Outcome.DONE

    def move(self) -> Outcome:
        """Move the targets into a directory given relative to the root."""
        with self._mutation() as nodes:
            path = self._host.prompt_text(nodes)
            if not path:
                return Outcome.CANCELLED
            destination = os.path.join(self._root.path, os.path.expanduser(path))
            for node in nodes:
                operations.move(node, destination)
            return Outcome.DONE

    def remove(self) -> Outcome:
        """Move the targets into the trash after confirmation."""
        with self._mutation() as nodes:
            if not self._host.confirm(nodes):
                return Outcome.CANCELLED
            for node in nodes:
                operations.remove(node, self._config.trash_dir)
            return Outcome.DONE

    def remove_permanently(self) -> Outcome:
        """Delete the targets for good after confirmation."""
        with self._mutation() as nodes:
            if not self._host.confirm(nodes):
                return Outcome.CANCELLED
            for node in nodes:
                operations.remove_permanently(node)
            return Outcome.DONE

    def restore(self) -> Outcome:
        """Move trashed targets back to where they came from after confirmation."""
        with self._mutation() as nodes:
            if not self._host.confirm(nodes):
                return Outcome.CANCELLED
            for node in nodes:
                operations.restore(node, self._config.trash_dir)
            return Outcome.DONE

    def open_externally(self) -> None:
        with self._mutation() as nodes:
            for node in nodes:
                self._host.open_externally(node.path)

    def open_dir_externally(self) -> None:
        with self._mutation() as nodes:
            for node in nodes:
                self._host.open_externally(operations.nearest_dir(node).path)

    # -- Copy and paste --------------------------------------------------

    def copy(self) -> None:
        """Capture the targets in the registry, replacing what was there."""
        with self._rendering():
            nodes = self._targets()
            for node in nodes:
                node.unselect()
            self._registry = tuple(nodes)
            logger.debug("Copied %d node(s)", len(nodes))

    def copied_list(self) -> None:
        self._host.show_nodes(list(self._registry))

    def paste(self) -> None:
        """Copy every registered node into the opened directory nearest the cursor."""
        try:
            if not self._registry:
                return
            destination = operations.nearest_opened_dir(self.cursor_node()).path
            for node in self._registry:
                operations.copy_into(node, destination)
        finally:
            self._refresh()

    def yank(self) -> None:
        """Put the path under the cursor on the host clipboard."""
        self._host.set_clipboard(self.cursor_node().path)
