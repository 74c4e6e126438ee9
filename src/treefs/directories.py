"""Recursive directory creation (mkdirp)."""

from __future__ import annotations

import logging
from pathlib import Path

from treefs.errors import TypeMismatchError
from treefs.filesystem import RealFileSystem
from treefs.protocols import FileSystem

logger = logging.getLogger(__name__)


class DirectoryCreator:
    """Creates a directory together with every missing ancestor."""

    def __init__(self, filesystem: FileSystem) -> None:
        """Initialize with the filesystem to operate on.

        Args:
            filesystem: Primitive filesystem operations.
        """
        self.fs = filesystem

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> DirectoryCreator:
        """Factory method with a default RealFileSystem."""
        return cls(filesystem or RealFileSystem())

    def ensure_dir(self, path: Path, mode: int | None = None) -> None:
        """Ensure ``path`` exists as a directory.

        Only directories created by this call receive ``mode``; an existing
        directory is left alone whatever its permissions. When ``mode`` is
        given it is applied with an explicit chmod so the process umask does
        not alter it.

        Args:
            path: Absolute directory path.
            mode: Permission bits for created directories, or None for the
                platform default.

        Raises:
            TypeMismatchError: If path or one of its ancestors exists and is
                not a directory.
        """
        missing = self._missing_segments(path)
        for segment in missing:
            self._create_segment(segment, mode)

    def _missing_segments(self, path: Path) -> list[Path]:
        """Return the directories to create, outermost first."""
        missing: list[Path] = []
        current = path
        while True:
            stat = self.fs.probe(current, follow_symlinks=True)
            if stat is not None:
                if not stat.is_dir:
                    raise TypeMismatchError("mkdir", current, reason="not a directory")
                break
            missing.append(current)
            if current.parent == current:
                break
            current = current.parent
        missing.reverse()
        return missing

    def _create_segment(self, segment: Path, mode: int | None) -> None:
        try:
            self.fs.create_directory(segment, mode)
        except FileExistsError:
            # Lost a race with a concurrent creator; fine if it made a directory.
            stat = self.fs.probe(segment, follow_symlinks=True)
            if stat is None or not stat.is_dir:
                raise TypeMismatchError("mkdir", segment, reason="not a directory") from None
            return
        logger.debug("Created directory %s", segment)
        if mode is not None:
            self.fs.chmod(segment, mode)
