"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from treefs.context import TreeContext, create_context
from treefs.filesystem import RealFileSystem

Tree = dict[str, Any]


def build_tree(root: Path, tree: Tree) -> Path:
    """Create files (str values) and directories (dict values) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in tree.items():
        path = root / name
        if isinstance(content, dict):
            build_tree(path, content)
        else:
            path.write_text(content)
    return root


def snapshot(root: Path) -> Tree:
    """Read a directory back into the shape accepted by build_tree."""
    result: Tree = {}
    for path in sorted(root.iterdir()):
        if path.is_dir() and not path.is_symlink():
            result[path.name] = snapshot(path)
        else:
            result[path.name] = path.read_text()
    return result


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, Tree], Path]:
    """Build a named tree inside tmp_path."""

    def _make(name: str, tree: Tree) -> Path:
        return build_tree(tmp_path / name, tree)

    return _make


# ============================================================================
# FileSystem Fixtures
# ============================================================================


@pytest.fixture
def real_fs() -> RealFileSystem:
    """Create the production filesystem."""
    return RealFileSystem()


@pytest.fixture
def spy_fs(real_fs: RealFileSystem) -> MagicMock:
    """Create a FileSystem spy.

    Every call reaches the real filesystem and is recorded.
    """
    return MagicMock(wraps=real_fs)


@pytest.fixture
def context() -> TreeContext:
    """Create a fresh production context."""
    return create_context()


@pytest.fixture
def spy_context(spy_fs: MagicMock) -> TreeContext:
    """Create a context whose primitives are recorded by spy_fs."""
    return create_context(filesystem=spy_fs)


@pytest.fixture
def sample_tree() -> Tree:
    """A small nested tree."""
    return {
        "README.md": "# sample\n",
        "src": {
            "main.py": "print('hi')\n",
            "util": {"helpers.py": "def help():\n    pass\n"},
        },
        "empty": {},
    }
