"""CLI commands for fstree.

This package contains all subcommand implementations.
"""

from fstree.cli.commands import browse, config, project, rm, show, trash

__all__ = ["browse", "config", "project", "rm", "show", "trash"]
