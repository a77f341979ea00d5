"""Unit tests for node operations."""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fstree.tree import operations
from fstree.tree.errors import InvalidOperatorError, NodeNotFoundError, TreeIOError
from fstree.tree.nodes import Directory, File, Node
from fstree.tree.trash import decode, encode


def _opened(path: Path) -> Directory:
    directory = Directory.from_path(path)
    directory.open()
    return directory


class TestUnderOrEquals:
    """Tests for under_or_equals."""

    @pytest.mark.parametrize(
        ("base", "target", "expected"),
        [
            ("/foo", "/foo", True),
            ("/foo", "/foo/bar", True),
            ("/foo", "/foo/bar/baz", True),
            ("/foo", "/foo/..bar", True),
            ("/foo", "/", False),
            ("/foo", "/bar", False),
            ("/foo", "/foobar", False),
            ("/foo/bar", "/foo", False),
        ],
    )
    def test_cases(self, base: str, target: str, expected: bool) -> None:
        base_node = Directory(os.path.basename(base), os.path.dirname(base))
        target_node = Directory(os.path.basename(target) or target, os.path.dirname(target))

        assert operations.under_or_equals(base_node, target_node) is expected

    def test_equals(self) -> None:
        assert operations.equals(File("a", "/x"), File("a", "/x"))
        assert not operations.equals(File("a", "/x"), Directory("a", "/x"))

    def test_rel(self) -> None:
        assert operations.rel(Directory("x", "/"), File("a", "/x/y")) == os.path.join("y", "a")


class TestNearestDir:
    """Tests for nearest_dir and nearest_opened_dir."""

    def test_directory_is_its_own_nearest(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        assert operations.nearest_dir(root) is root

    def test_file_resolves_to_parent(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        assert operations.nearest_dir(root.children[2]) is root

    def test_orphan_file(self) -> None:
        with pytest.raises(NodeNotFoundError):
            operations.nearest_dir(File("a", "/x"))

    def test_opened_dir(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        assert operations.nearest_opened_dir(root) is root

    def test_closed_dir_resolves_to_parent(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        assert operations.nearest_opened_dir(root.children[0]) is root

    def test_closed_root_is_itself(self, sample_dir: Path) -> None:
        root = Directory.from_path(sample_dir)

        assert operations.nearest_opened_dir(root) is root


class TestToggle:
    """Tests for toggle dispatch."""

    def test_toggle_directory(self, sample_dir: Path) -> None:
        node = Directory.from_path(sample_dir)

        operations.toggle(node)

        assert node.opened

    def test_toggle_file_is_rejected(self) -> None:
        with pytest.raises(InvalidOperatorError):
            operations.toggle(File("a", "/x"))

    def test_toggle_rec_file_is_rejected(self) -> None:
        with pytest.raises(InvalidOperatorError):
            operations.toggle_rec(File("a", "/x"))


class TestCreate:
    """Tests for create_dirs and create_files."""

    def test_create_next_to_file(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        operations.create_files(root.children[2], ["sibling.txt"])

        assert (sample_dir / "sibling.txt").exists()

    def test_create_inside_directory(self, sample_dir: Path) -> None:
        root = _opened(sample_dir)

        operations.create_dirs(root.children[1], ["inner"])

        assert (sample_dir / "baz" / "inner").is_dir()


class TestMove:
    """Tests for move."""

    def test_move_keeps_name(self, sample_dir: Path) -> None:
        operations.move(File.from_path(sample_dir / "a.txt"), str(sample_dir / "bar"))

        assert (sample_dir / "bar" / "a.txt").is_file()
        assert not (sample_dir / "a.txt").exists()

    def test_existing_directory_target_is_not_nested_into(self, sample_dir: Path) -> None:
        """A same-named directory in the destination makes the move fail."""
        (sample_dir / "bar" / "baz").mkdir()

        with pytest.raises(TreeIOError, match="already exists"):
            operations.move(Directory.from_path(sample_dir / "baz"), str(sample_dir / "bar"))

        assert (sample_dir / "baz").is_dir()
        assert not (sample_dir / "bar" / "baz" / "baz").exists()

    def test_file_onto_existing_directory_fails(self, sample_dir: Path) -> None:
        (sample_dir / "bar" / "a.txt").mkdir()

        with pytest.raises(TreeIOError):
            operations.move(File.from_path(sample_dir / "a.txt"), str(sample_dir / "bar"))

        assert (sample_dir / "a.txt").is_file()
        assert not (sample_dir / "bar" / "a.txt" / "a.txt").exists()

    def test_existing_file_target_is_kept(self, sample_dir: Path) -> None:
        (sample_dir / "bar" / "a.txt").write_text("keep")

        with pytest.raises(TreeIOError):
            operations.move(File.from_path(sample_dir / "a.txt"), str(sample_dir / "bar"))

        assert (sample_dir / "bar" / "a.txt").read_text() == "keep"


class TestRemove:
    """Tests for soft and permanent removal."""

    def test_soft_remove_moves_to_token(self, sample_dir: Path, trash_dir: Path) -> None:
        node = File.from_path(sample_dir / "a.txt")

        target = operations.remove(node, trash_dir)

        assert target is not None
        assert not (sample_dir / "a.txt").exists()
        assert Path(target).parent == trash_dir
        assert decode(Path(target).name).original_path == str(sample_dir / "a.txt")

    def test_soft_remove_creates_trash(self, sample_dir: Path, tmp_path: Path) -> None:
        trash = tmp_path / "deep" / "trash"

        operations.remove(Directory.from_path(sample_dir / "bar"), trash)

        assert len(list(trash.iterdir())) == 1

    def test_remove_inside_trash_is_noop(self, trash_dir: Path) -> None:
        trash_dir.mkdir()
        (trash_dir / "entry").write_text("")

        result = operations.remove(File.from_path(trash_dir / "entry"), trash_dir)

        assert result is None
        assert (trash_dir / "entry").exists()

    def test_remove_permanently(self, sample_dir: Path) -> None:
        operations.remove_permanently(Directory.from_path(sample_dir / "bar"))

        assert not (sample_dir / "bar").exists()


class TestRestore:
    """Tests for restore."""

    def test_restore_recreates_parent(self, tmp_path: Path, trash_dir: Path) -> None:
        """A file trashed from a directory that no longer exists comes back with it."""
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "file.txt").write_text("content")
        trashed = operations.remove(File.from_path(sub / "file.txt"), trash_dir)
        assert trashed is not None
        sub.rmdir()

        restored = operations.restore(File.from_path(trashed), trash_dir)

        assert restored == str(sub / "file.txt")
        assert (sub / "file.txt").read_text() == "content"
        assert list(trash_dir.iterdir()) == []

    def test_restore_refuses_existing_target(self, sample_dir: Path, trash_dir: Path) -> None:
        trashed = operations.remove(File.from_path(sample_dir / "a.txt"), trash_dir)
        assert trashed is not None
        (sample_dir / "a.txt").write_text("new")

        with pytest.raises(TreeIOError, match="already exists"):
            operations.restore(File.from_path(trashed), trash_dir)

        assert (sample_dir / "a.txt").read_text() == "new"
        assert Path(trashed).exists()

    def test_restore_outside_trash(self, sample_dir: Path, trash_dir: Path) -> None:
        with pytest.raises(InvalidOperatorError):
            operations.restore(File.from_path(sample_dir / "a.txt"), trash_dir)

    def test_restore_directory(self, sample_dir: Path, trash_dir: Path) -> None:
        trash_dir.mkdir()
        token = encode(str(sample_dir / "restored"), datetime(2024, 1, 15, tzinfo=UTC))
        (trash_dir / token).mkdir()
        (trash_dir / token / "inner.txt").write_text("")

        operations.restore(Directory.from_path(trash_dir / token), trash_dir)

        assert (sample_dir / "restored" / "inner.txt").exists()


class TestCopyInto:
    """Tests for copy_into."""

    def test_copy_file(self, sample_dir: Path) -> None:
        node = File.from_path(sample_dir / "a.txt")

        target = operations.copy_into(node, str(sample_dir / "baz"))

        assert target == str(sample_dir / "baz" / "a.txt")
        assert (sample_dir / "baz" / "a.txt").read_text() == "a\n"
        assert (sample_dir / "a.txt").exists()

    def test_copy_directory_recursively(self, sample_dir: Path) -> None:
        operations.copy_into(Directory.from_path(sample_dir / "bar"), str(sample_dir / "baz"))

        assert (sample_dir / "baz" / "bar" / "x.txt").read_text() == "x\n"
        assert (sample_dir / "baz" / "bar" / "qux").is_dir()

    def test_copy_directory_merges(self, sample_dir: Path) -> None:
        (sample_dir / "baz" / "bar").mkdir()
        (sample_dir / "baz" / "bar" / "keep.txt").write_text("")

        operations.copy_into(Directory.from_path(sample_dir / "bar"), str(sample_dir / "baz"))

        assert (sample_dir / "baz" / "bar" / "keep.txt").exists()
        assert (sample_dir / "baz" / "bar" / "x.txt").exists()

    def test_copy_missing_source(self, sample_dir: Path) -> None:
        node: Node = File("missing.txt", str(sample_dir))

        with pytest.raises(TreeIOError):
            operations.copy_into(node, str(sample_dir / "baz"))
