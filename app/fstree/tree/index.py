"""Flattened cursor addressing.

Maps between an integer cursor position and a node by walking the visible
tree in preorder: position 0 is the root, each visible node takes one
slot, and a closed directory takes exactly one slot for itself. Nothing is
cached; every call walks the current tree shape.
"""

from collections.abc import Iterator

from fstree.tree.nodes import Directory, Node


def iter_visible(root: Directory) -> Iterator[tuple[int, int, Node]]:
    """Yield (position, depth, node) for every visible node in preorder.

    The walk is lazy, so callers that stop early never touch the rest of
    the tree.

    Args:
        root: Root of the visible tree (position 0, depth 0).

    Yields:
        Tuples of flattened position, ancestor count from root, and node.
    """
    position = 0
    stack: list[tuple[int, Node]] = [(0, root)]
    while stack:
        depth, node = stack.pop()
        yield position, depth, node
        position += 1
        if isinstance(node, Directory):
            stack.extend((depth + 1, child) for child in reversed(node.children))


def index_of(root: Directory, i: int) -> Node | None:
    """Return the node at flattened position i, or None if out of range."""
    if i < 0:
        return None
    for position, _, node in iter_visible(root):
        if position == i:
            return node
    return None


def range_of(root: Directory, start: int, end: int) -> list[Node]:
    """Return the nodes whose positions fall within [start, end].

    Stops walking as soon as the walk passes end.
    """
    nodes: list[Node] = []
    for position, _, node in iter_visible(root):
        if position > end:
            break
        if position >= start:
            nodes.append(node)
    return nodes


def position_of(root: Directory, target: Node) -> int | None:
    """Return the flattened position of a node equal to target, if visible."""
    for position, _, node in iter_visible(root):
        if node == target:
            return position
    return None


def count_visible(root: Directory) -> int:
    """Number of visible nodes, root included."""
    return sum(1 for _ in iter_visible(root))
