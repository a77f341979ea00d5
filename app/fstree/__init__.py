"""fstree - navigable in-memory model of a filesystem subtree.

Backs cursor-driven, line-oriented directory browsers: lazy expansion,
flattened cursor addressing, multi-selection and trash-based soft delete.
"""

__version__ = "0.1.0"
