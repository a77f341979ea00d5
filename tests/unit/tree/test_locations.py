"""Unit tests for well-known directories."""

import os
import re
from pathlib import Path
from unittest.mock import patch

import pytest
from fstree.core.config import DEFAULT_PROJECT_PATTERN
from fstree.tree.errors import TreeIOError
from fstree.tree.locations import dir_home, dir_project, dir_root

PROJECT = re.compile(DEFAULT_PROJECT_PATTERN)


class TestDirRoot:
    def test_is_filesystem_root(self) -> None:
        root = dir_root()

        assert os.path.dirname(root) == root


class TestDirHome:
    def test_is_home(self) -> None:
        assert dir_home() == str(Path.home())

    def test_undeterminable_home(self) -> None:
        with (
            patch("fstree.tree.locations.Path.home", side_effect=RuntimeError("no home")),
            pytest.raises(TreeIOError, match="no home"),
        ):
            dir_home()


class TestDirProject:
    """Tests for dir_project."""

    def test_marker_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()

        assert dir_project(str(tmp_path), PROJECT) == str(tmp_path)

    def test_marker_in_ancestor(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        deep = tmp_path / "src" / "pkg"
        deep.mkdir(parents=True)

        assert dir_project(str(deep), PROJECT) == str(tmp_path)

    def test_marker_can_be_a_file(self, tmp_path: Path) -> None:
        """Worktrees and submodules have a .git file instead of a directory."""
        (tmp_path / ".git").write_text("gitdir: elsewhere")
        (tmp_path / "src").mkdir()

        assert dir_project(str(tmp_path / "src"), PROJECT) == str(tmp_path)

    def test_pattern_is_anchored(self, tmp_path: Path) -> None:
        """A .gitignore alone doesn't mark a project root."""
        (tmp_path / "outer" / "inner").mkdir(parents=True)
        (tmp_path / "outer" / ".git").mkdir()
        (tmp_path / "outer" / "inner" / ".gitignore").write_text("")

        result = dir_project(str(tmp_path / "outer" / "inner"), PROJECT)

        assert result == str(tmp_path / "outer")

    def test_custom_pattern(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("")
        (tmp_path / "pkg").mkdir()

        result = dir_project(str(tmp_path / "pkg"), re.compile(r"^pyproject\.toml$"))

        assert result == str(tmp_path)

    def test_no_marker_returns_filesystem_root(self, tmp_path: Path) -> None:
        result = dir_project(str(tmp_path), re.compile(r"^no-such-marker-\d{12}$"))

        assert result == os.path.abspath(os.sep)

    def test_unreadable_start(self, tmp_path: Path) -> None:
        with pytest.raises(TreeIOError):
            dir_project(str(tmp_path / "missing"), PROJECT)
