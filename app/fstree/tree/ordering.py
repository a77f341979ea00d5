"""Sort order for the children of a directory.

Directories come before files. Within the same kind, names compare in
natural order: digit runs compare as integers so ``file2`` precedes
``file10``. Text runs compare case-insensitively; names that differ only
by case put the lowercase spelling first (``b`` before ``B``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fstree.tree.nodes import Node

_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple[tuple[int | str, ...], str]:
    """Build a natural-order sort key for a name.

    ``re.split`` with a capturing group alternates text and digit runs, so
    parts at the same index always have the same type across names.

    Args:
        name: Entry name.

    Returns:
        Tuple of (case-folded parts, case tie-breaker).
    """
    parts = tuple(
        int(part) if i % 2 else part.casefold() for i, part in enumerate(_DIGITS.split(name))
    )
    return parts, name.swapcase()


def sort_key(node: Node) -> tuple[int, tuple[tuple[int | str, ...], str]]:
    """Sort key placing directories first, then natural name order."""
    return (0 if node.is_dir else 1, natural_key(node.name))


def sort_nodes(nodes: Iterable[Node]) -> list[Node]:
    """Return nodes sorted by kind and natural name order."""
    return sorted(nodes, key=sort_key)
