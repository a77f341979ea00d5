"""Utility modules for fstree.

This module exports commonly used utility functions.
"""

from fstree.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_path,
    print_success,
    print_warning,
)
from fstree.utils.shell import CommandResult, command_exists, open_with_default_app, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "open_with_default_app",
    "print_error",
    "print_info",
    "print_path",
    "print_success",
    "print_warning",
    "run_command",
]
