"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Sequence
from pathlib import Path

import pytest
from fstree.core.config import TreeConfig
from fstree.tree.nodes import File, Node


class FakeHost:
    """Scripted tree host that records everything the tree hands it.

    Prompt answers are consumed in order; an exhausted queue answers None
    (cancel) for prompts and False for confirmations.
    """

    def __init__(self, cursor: int = 0) -> None:
        self.position = cursor
        self.texts: list[str | None] = []
        self.text_lists: list[list[str] | None] = []
        self.paths: list[str | None] = []
        self.confirmations: list[bool] = []
        self.renders: list[list[str]] = []
        self.prompted: list[list[Node]] = []
        self.opened_files: list[File] = []
        self.opened_externally: list[str] = []
        self.clipboard: str | None = None
        self.shown: list[list[Node]] = []

    def cursor(self) -> int:
        return self.position

    def set_cursor(self, position: int) -> None:
        self.position = position

    def prompt_text(self, nodes: Sequence[Node]) -> str | None:
        self.prompted.append(list(nodes))
        return self.texts.pop(0) if self.texts else None

    def prompt_texts(self, nodes: Sequence[Node]) -> list[str] | None:
        self.prompted.append(list(nodes))
        return self.text_lists.pop(0) if self.text_lists else None

    def prompt_path(self) -> str | None:
        return self.paths.pop(0) if self.paths else None

    def confirm(self, nodes: Sequence[Node]) -> bool:
        self.prompted.append(list(nodes))
        return self.confirmations.pop(0) if self.confirmations else False

    def render(self, lines: list[str]) -> None:
        self.renders.append(lines)

    def open_file(self, file: File) -> None:
        self.opened_files.append(file)

    def open_externally(self, path: str) -> None:
        self.opened_externally.append(path)

    def set_clipboard(self, text: str) -> None:
        self.clipboard = text

    def show_nodes(self, nodes: Sequence[Node]) -> None:
        self.shown.append(list(nodes))

    @property
    def last_render(self) -> list[str]:
        return self.renders[-1]


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config, theme and trash lookups away from the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))


@pytest.fixture
def trash_dir(tmp_path: Path) -> Path:
    """Trash directory path (not created)."""
    return tmp_path / "trash"


@pytest.fixture
def tree_config(trash_dir: Path) -> TreeConfig:
    """Default settings with the trash inside tmp_path."""
    return TreeConfig(trash_dir=trash_dir)


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """A small directory tree::

        foo/
          bar/
            qux/
            x.txt
          baz/
          a.txt
          b.txt
    """
    root = tmp_path / "foo"
    (root / "bar" / "qux").mkdir(parents=True)
    (root / "baz").mkdir()
    (root / "bar" / "x.txt").write_text("x\n")
    (root / "a.txt").write_text("a\n")
    (root / "b.txt").write_text("b\n")
    return root


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
