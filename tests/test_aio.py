"""Tests for the non-blocking variants."""

from __future__ import annotations

import asyncio
import inspect
import errno
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from conftest import snapshot
from treefs import aio, api
from treefs.context import create_context
from treefs.errors import NotFoundError, ParseError
from treefs.filesystem import RealFileSystem


class TestAsyncVariants:
    """Tests for treefs.aio."""

    def test_wrappers_keep_metadata(self) -> None:
        """Test derived coroutines keep the blocking function's name and docs."""
        assert aio.copy.__name__ == "copy"
        assert aio.copy.__doc__ == api.copy.__doc__
        assert inspect.iscoroutinefunction(aio.copy)

    def test_same_tree_as_blocking(self, make_tree, sample_tree: dict, tmp_path: Path) -> None:
        """Test async and blocking copies produce identical trees."""
        src = make_tree("src", sample_tree)

        api.copy(src, tmp_path / "sync")
        asyncio.run(aio.copy(src, tmp_path / "async"))

        assert snapshot(tmp_path / "sync") == snapshot(tmp_path / "async")

    def test_mkdirp_outcome_matches(self, tmp_path: Path) -> None:
        """Test async ensure_dir creates the same directories."""
        asyncio.run(aio.mkdirp(tmp_path / "x" / "y" / "z", 0o755))

        assert (tmp_path / "x" / "y" / "z").is_dir()

    def test_errors_propagate(self, tmp_path: Path) -> None:
        """Test failures surface from the awaited coroutine."""
        with pytest.raises(NotFoundError):
            asyncio.run(aio.move(tmp_path / "missing", tmp_path / "dest"))

    def test_json_round_trip(self, tmp_path: Path) -> None:
        """Test async write then read."""
        target = tmp_path / "nested" / "config.json"

        async def round_trip() -> object:
            await aio.output_json(target, {"hello": "world", "n": -1})
            return await aio.read_json(target)

        assert asyncio.run(round_trip()) == {"hello": "world", "n": -1}

    def test_read_json_parse_error(self, tmp_path: Path) -> None:
        """Test ParseError surfaces from the async reader."""
        target = tmp_path / "bad.json"
        target.write_text("%asdfasdff444")

        with pytest.raises(ParseError):
            asyncio.run(aio.read_json(target))


class TestAsyncEmptyDir:
    """Tests for aio.empty_dir."""

    def test_removes_children(self, make_tree, sample_tree: dict) -> None:
        """Test every child is removed and the directory kept."""
        root = make_tree("root", sample_tree)

        asyncio.run(aio.empty_dir(root))

        assert root.is_dir()
        assert list(root.iterdir()) == []

    def test_missing_is_created(self, tmp_path: Path) -> None:
        """Test a missing directory is created."""
        asyncio.run(aio.empty_dir(tmp_path / "P"))

        assert (tmp_path / "P").is_dir()

    def test_failure_raised_after_siblings_finish(self, make_tree) -> None:
        """Test a failing child is raised while independent siblings are removed."""
        root = make_tree("root", {"a.txt": "a", "b.txt": "b", "c.txt": "c"})
        real = RealFileSystem()
        fs = MagicMock(wraps=real)
        denied = PermissionError(errno.EACCES, "Permission denied")

        def delete_file(path: Path) -> None:
            if path.name == "b.txt":
                raise denied
            real.delete_file(path)

        fs.delete_file.side_effect = delete_file

        with pytest.raises(PermissionError):
            asyncio.run(aio.empty_dir(root, context=create_context(filesystem=fs)))

        assert sorted(p.name for p in root.iterdir()) == ["b.txt"]


class TestAsyncDive:
    """Tests for aio.dive."""

    def test_matches_blocking_walk(self, make_tree, sample_tree: dict) -> None:
        """Test the async walk yields the same paths in the same order."""
        root = make_tree("root", sample_tree)

        async def collect() -> list[Path]:
            return [path async for path in aio.dive(root, include_dirs=True)]

        assert asyncio.run(collect()) == list(api.dive(root, include_dirs=True))

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        """Test a missing root is an empty walk."""

        async def collect() -> list[Path]:
            return [path async for path in aio.dive(tmp_path / "missing")]

        assert asyncio.run(collect()) == []
