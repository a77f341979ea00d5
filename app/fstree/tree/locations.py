"""Well-known directories a tree can be re-rooted to."""

import logging
import os
import re
from pathlib import Path

from fstree.tree.errors import TreeIOError

logger = logging.getLogger(__name__)


def dir_root() -> str:
    """Filesystem root."""
    return os.path.abspath(os.sep)


def dir_home() -> str:
    """Home directory of the current user.

    Raises:
        TreeIOError: If the home directory cannot be determined.
    """
    try:
        return str(Path.home())
    except RuntimeError as e:
        raise TreeIOError(f"Cannot determine home directory: {e}") from e


def dir_project(start: str, pattern: re.Pattern[str]) -> str:
    """Find the project root at or above a directory.

    Walks upward from start and returns the first directory that has an
    immediate child whose name matches pattern (e.g. ".git"). Returns the
    filesystem root when no directory matches.

    Args:
        start: Directory to start from.
        pattern: Compiled marker-name pattern.

    Returns:
        Path of the project root.

    Raises:
        TreeIOError: If a directory on the way cannot be read.
    """
    dirname = os.path.abspath(start)
    while True:
        try:
            names = os.listdir(dirname)
        except OSError as e:
            raise TreeIOError(f"Cannot read directory {dirname}: {e}") from e
        if any(pattern.search(name) for name in names):
            logger.debug("Project root for %s is %s", start, dirname)
            return dirname
        parent = os.path.dirname(dirname)
        if parent == dirname:
            return dirname
        dirname = parent
