"""Tests for recursive directory creation."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from treefs.directories import DirectoryCreator
from treefs.errors import TypeMismatchError
from treefs.filesystem import RealFileSystem

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")


@pytest.fixture
def creator() -> DirectoryCreator:
    """Create a DirectoryCreator using the factory method."""
    return DirectoryCreator.create()


class TestEnsureDir:
    """Tests for DirectoryCreator.ensure_dir."""

    def test_creates_nested_directories(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test all missing ancestors are created."""
        target = tmp_path / "x" / "y" / "z"

        creator.ensure_dir(target)

        assert target.is_dir()

    @posix_only
    def test_applies_mode_to_every_created_segment(
        self, creator: DirectoryCreator, tmp_path: Path
    ) -> None:
        """Test x/y/z all receive the requested mode."""
        creator.ensure_dir(tmp_path / "x" / "y" / "z", 0o755)

        for path in (tmp_path / "x", tmp_path / "x" / "y", tmp_path / "x" / "y" / "z"):
            assert path.stat().st_mode & 0o777 == 0o755

    @posix_only
    def test_mode_ignores_umask(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test an explicit mode is applied exactly."""
        old_umask = os.umask(0o077)
        try:
            creator.ensure_dir(tmp_path / "shared", 0o775)
        finally:
            os.umask(old_umask)

        assert (tmp_path / "shared").stat().st_mode & 0o777 == 0o775

    @posix_only
    def test_existing_ancestors_untouched(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test pre-existing directories keep their permissions."""
        existing = tmp_path / "existing"
        existing.mkdir()
        existing.chmod(0o700)

        creator.ensure_dir(existing / "child", 0o755)

        assert existing.stat().st_mode & 0o777 == 0o700
        assert (existing / "child").stat().st_mode & 0o777 == 0o755

    def test_idempotent(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test calling twice succeeds and leaves a single directory."""
        target = tmp_path / "twice"

        creator.ensure_dir(target, 0o755)
        creator.ensure_dir(target, 0o755)

        assert target.is_dir()
        assert [p.name for p in tmp_path.iterdir()] == ["twice"]

    def test_existing_file_raises(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test a file at the target path is a type mismatch."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        with pytest.raises(TypeMismatchError, match="not a directory"):
            creator.ensure_dir(target)

        assert target.read_text() == "content"

    def test_file_ancestor_raises(self, creator: DirectoryCreator, tmp_path: Path) -> None:
        """Test a file in the middle of the path is a type mismatch."""
        (tmp_path / "file.txt").touch()

        with pytest.raises(TypeMismatchError) as exc_info:
            creator.ensure_dir(tmp_path / "file.txt" / "sub")

        assert exc_info.value.path == tmp_path / "file.txt"

    def test_race_with_concurrent_creator(self, tmp_path: Path) -> None:
        """Test losing the creation race to another process is success."""
        real = RealFileSystem()
        fs = MagicMock(wraps=real)
        target = tmp_path / "raced"

        def create_then_fail(path: Path, mode: int | None = None) -> None:
            real.create_directory(path, mode)
            raise FileExistsError(path)

        fs.create_directory.side_effect = create_then_fail

        DirectoryCreator(fs).ensure_dir(target, 0o755)

        assert target.is_dir()
        fs.chmod.assert_not_called()

    def test_race_lost_to_file_raises(self, tmp_path: Path) -> None:
        """Test a file created during the race is still a type mismatch."""
        fs = MagicMock(wraps=RealFileSystem())
        target = tmp_path / "raced"

        def create_file(path: Path, mode: int | None = None) -> None:
            path.write_text("")
            raise FileExistsError(path)

        fs.create_directory.side_effect = create_file

        with pytest.raises(TypeMismatchError):
            DirectoryCreator(fs).ensure_dir(target)

    def test_only_missing_segments_created(self, spy_fs: MagicMock, tmp_path: Path) -> None:
        """Test creation starts at the first missing ancestor."""
        (tmp_path / "a").mkdir()

        DirectoryCreator(spy_fs).ensure_dir(tmp_path / "a" / "b" / "c")

        created = [call.args[0] for call in spy_fs.create_directory.call_args_list]
        assert created == [tmp_path / "a" / "b", tmp_path / "a" / "b" / "c"]
