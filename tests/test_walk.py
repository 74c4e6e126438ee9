"""Tests for the directory walk producer."""

from __future__ import annotations

from pathlib import Path

from treefs.walk import Dive


class TestDive:
    """Tests for Dive."""

    def test_yields_files_depth_first(self, make_tree, sample_tree: dict) -> None:
        """Test files are yielded depth-first with sorted siblings."""
        root = make_tree("root", sample_tree)

        paths = [p.relative_to(root).as_posix() for p in Dive(root)]

        assert paths == ["README.md", "src/main.py", "src/util/helpers.py"]

    def test_include_dirs(self, make_tree, sample_tree: dict) -> None:
        """Test directories are listed before their contents when requested."""
        root = make_tree("root", sample_tree)

        paths = [p.relative_to(root).as_posix() for p in Dive(root, include_dirs=True)]

        assert paths == [
            "README.md",
            "empty",
            "src",
            "src/main.py",
            "src/util",
            "src/util/helpers.py",
        ]

    def test_restartable(self, make_tree) -> None:
        """Test each iteration walks the tree again."""
        root = make_tree("root", {"a.txt": "a"})
        walk = Dive(root)

        first = list(walk)
        (root / "b.txt").write_text("b")
        second = list(walk)

        assert [p.name for p in first] == ["a.txt"]
        assert [p.name for p in second] == ["a.txt", "b.txt"]

    def test_lazy(self, make_tree) -> None:
        """Test the walk produces paths on demand."""
        root = make_tree("root", {"a.txt": "a", "b.txt": "b"})

        iterator = iter(Dive(root))

        assert next(iterator).name == "a.txt"

    def test_missing_root_is_empty(self, tmp_path: Path) -> None:
        """Test walking a missing root yields nothing."""
        assert list(Dive(tmp_path / "missing")) == []

    def test_file_root_yields_itself(self, tmp_path: Path) -> None:
        """Test a file root yields just that file."""
        target = tmp_path / "file.txt"
        target.touch()

        assert list(Dive(target)) == [target]
