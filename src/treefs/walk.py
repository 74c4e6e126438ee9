"""Directory walk producer used for listing and reporting."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from treefs.filesystem import RealFileSystem
from treefs.protocols import FileSystem


class Dive:
    """Lazy, restartable iterable over the paths below a root.

    Each call to ``iter()`` walks the tree again, depth-first with siblings
    in sorted order. Files and symlinks are always yielded; directories only
    when ``include_dirs`` is set, before their contents. Symlinks to
    directories are not followed.
    """

    def __init__(
        self,
        root: Path,
        include_dirs: bool = False,
        filesystem: FileSystem | None = None,
    ) -> None:
        self.root = Path(root)
        self.include_dirs = include_dirs
        self.fs = filesystem or RealFileSystem()

    def __iter__(self) -> Iterator[Path]:
        stat = self.fs.probe(self.root)
        if stat is None:
            return
        if not stat.is_dir:
            yield self.root
            return
        yield from self._walk(self.root)

    def _walk(self, directory: Path) -> Iterator[Path]:
        for name in self.fs.read_dir(directory):
            child = directory / name
            stat = self.fs.probe(child)
            if stat is None:
                continue
            if stat.is_dir:
                if self.include_dirs:
                    yield child
                yield from self._walk(child)
            else:
                yield child
