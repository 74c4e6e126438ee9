"""Recursive, idempotent removal."""

from __future__ import annotations

import logging
from pathlib import Path

from treefs.filesystem import RealFileSystem
from treefs.protocols import FileSystem

logger = logging.getLogger(__name__)


class TreeRemover:
    """Deletes a path and everything beneath it.

    Removal is post-order: a directory is removed only after all of its
    children. A missing path is not an error. The first failure stops the
    walk and propagates; whatever was already deleted stays deleted.
    """

    def __init__(self, filesystem: FileSystem) -> None:
        self.fs = filesystem

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> TreeRemover:
        """Factory method with a default RealFileSystem."""
        return cls(filesystem or RealFileSystem())

    def remove(self, path: Path) -> None:
        """Remove ``path``; do nothing if it does not exist.

        Symlinks are unlinked, never followed.

        Args:
            path: Absolute path to remove.
        """
        stat = self.fs.probe(path)
        if stat is None:
            return

        try:
            if stat.is_dir:
                for name in self.fs.read_dir(path):
                    self.remove(path / name)
                self.fs.delete_empty_directory(path)
            else:
                self.fs.delete_file(path)
        except FileNotFoundError:
            # Deleted concurrently; the end state is the one we wanted.
            logger.debug("Already removed: %s", path)
            return
        logger.debug("Removed %s", path)
