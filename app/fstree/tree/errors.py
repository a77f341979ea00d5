"""Exceptions raised by the tree model.

Every failure of a tree operation surfaces as a subclass of TreeError so
hosts can report it with a single handler.
"""


class TreeError(Exception):
    """Base exception for tree errors."""


class NotDirectoryError(TreeError):
    """Raised when a directory node is built from a path that isn't a directory."""


class NotFileError(TreeError):
    """Raised when a file node is built from a path that is a directory."""


class TreeIOError(TreeError):
    """Raised when an underlying filesystem call fails.

    The original OSError is always chained as ``__cause__``.
    """


class NodeNotFoundError(TreeError):
    """Raised when a cursor position or parent directory cannot be resolved."""


class CountMismatchError(TreeError):
    """Raised when a batch rename gets a different number of names than targets.

    Attributes:
        expected: Number of nodes to rename.
        actual: Number of names supplied.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The number of names differs before ({expected}) and after ({actual})"
        )


class TrashDecodeError(TreeError):
    """Raised when a trash token cannot be decoded."""


class InvalidOperatorError(TreeError):
    """Raised when an operation is dispatched to a node kind that doesn't support it."""
