"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

import pytest
from fstree.utils.shell import (
    CommandResult,
    command_exists,
    default_opener,
    open_with_default_app,
    run_command,
)


class TestCommandResult:
    def test_success(self) -> None:
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="", returncode=1).success


class TestRunCommand:
    """Tests for run_command function."""

    @patch("fstree.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["tool", "arg"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True
        assert mock_run.call_args.kwargs["check"] is False

    @patch("fstree.utils.shell.subprocess.run")
    def test_passes_cwd_and_timeout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["ls"], cwd="/tmp", timeout=5.0)

        assert mock_run.call_args.kwargs["cwd"] == "/tmp"
        assert mock_run.call_args.kwargs["timeout"] == 5.0


class TestCommandExists:
    @patch("fstree.utils.shell.shutil.which", return_value="/usr/bin/xdg-open")
    def test_found(self, mock_which: MagicMock) -> None:
        assert command_exists("xdg-open")

    @patch("fstree.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        assert not command_exists("xdg-open")


class TestDefaultOpener:
    """Tests for picking the desktop opener."""

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [("darwin", "open"), ("linux", "xdg-open"), ("freebsd13", "xdg-open")],
    )
    def test_by_platform(self, platform: str, expected: str) -> None:
        with patch("fstree.utils.shell.sys.platform", platform):
            assert default_opener() == expected

    @patch("fstree.utils.shell.run_command")
    @patch("fstree.utils.shell.command_exists", return_value=True)
    @patch("fstree.utils.shell.default_opener", return_value="xdg-open")
    def test_open_with_default_app(
        self, mock_opener: MagicMock, mock_exists: MagicMock, mock_run: MagicMock
    ) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        result = open_with_default_app("/x/a.txt")

        assert result.success
        mock_run.assert_called_once_with(["xdg-open", "/x/a.txt"], timeout=10.0)

    @patch("fstree.utils.shell.run_command")
    @patch("fstree.utils.shell.command_exists", return_value=False)
    def test_missing_opener(self, mock_exists: MagicMock, mock_run: MagicMock) -> None:
        with pytest.raises(FileNotFoundError, match="not found in PATH"):
            open_with_default_app("/x/a.txt")

        mock_run.assert_not_called()
