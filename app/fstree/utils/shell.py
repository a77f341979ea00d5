"""Subprocess helpers for handing paths to desktop applications."""

import shutil
import subprocess
import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command.

    Attributes:
        stdout: Standard output, decoded.
        stderr: Standard error, decoded.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit status is reported through the result, never raised.

    Raises:
        subprocess.TimeoutExpired: If the command outlives timeout.
        FileNotFoundError: If the executable doesn't exist.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None


def default_opener() -> str:
    """Name of the command that opens a path with the desktop's default handler."""
    if sys.platform == "darwin":
        return "open"
    return "xdg-open"


def open_with_default_app(path: str) -> CommandResult:
    """Open a path with the operating system's default application.

    Args:
        path: File or directory to open.

    Returns:
        CommandResult of the opener command.

    Raises:
        FileNotFoundError: If the opener command is not installed.
    """
    opener = default_opener()
    if not command_exists(opener):
        msg = f"{opener} not found in PATH"
        raise FileNotFoundError(msg)
    return run_command([opener, path], timeout=10.0)
