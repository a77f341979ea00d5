"""Unit tests for cli/display.py.

Tests for the Rich rendering of tree lines and trash listings.
"""

import io
from pathlib import Path

from fstree.cli.display import create_trash_table, format_lines, format_tree
from fstree.core.config import TreeConfig
from fstree.core.theme import get_theme
from fstree.tree.nodes import Directory
from rich.console import Console


def _plain(renderable: object) -> str:
    buffer = io.StringIO()
    Console(file=buffer, theme=get_theme(), width=200, color_system=None).print(renderable)
    return buffer.getvalue()


class TestFormatTree:
    """Tests for format_tree."""

    def test_plain_lines(self, sample_dir: Path, tree_config: TreeConfig) -> None:
        root = Directory.from_path(sample_dir / "bar")
        root.open()

        text = format_tree(root, tree_config)

        assert text.plain == "- bar/\n + qux/\n | x.txt"

    def test_numbered(self, sample_dir: Path, tree_config: TreeConfig) -> None:
        root = Directory.from_path(sample_dir / "bar")
        root.open()

        text = format_tree(root, tree_config, numbered=True)

        assert text.plain.splitlines() == ["   0 - bar/", "   1  + qux/", "   2  | x.txt"]

    def test_styles_follow_node_state(self, sample_dir: Path, tree_config: TreeConfig) -> None:
        root = Directory.from_path(sample_dir / "bar")
        root.open()
        root.children[1].select()

        text = format_tree(root, tree_config)

        assert [span.style for span in text.spans] == ["dir_opened", "dir_closed", "selected"]

    def test_names_are_not_markup(self, tmp_path: Path, tree_config: TreeConfig) -> None:
        (tmp_path / "[red]x").write_text("")
        root = Directory.from_path(tmp_path)
        root.open()

        assert "[red]x" in _plain(format_tree(root, tree_config))


class TestFormatLines:
    """Tests for format_lines."""

    def test_numbered_by_default(self) -> None:
        assert format_lines(["- a/", " | b"]).plain == "   0 - a/\n   1  | b"

    def test_unnumbered(self) -> None:
        assert format_lines(["- a/"], numbered=False).plain == "- a/"


class TestCreateTrashTable:
    """Tests for create_trash_table."""

    def test_columns(self) -> None:
        table = create_trash_table()

        assert [column.header for column in table.columns] == [
            "Original Path",
            "Type",
            "Deleted",
            "Token",
        ]
        assert table.title == "Trash"
