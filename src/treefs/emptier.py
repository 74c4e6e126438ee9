"""Directory emptying."""

from __future__ import annotations

from pathlib import Path

from treefs.directories import DirectoryCreator
from treefs.errors import TypeMismatchError
from treefs.protocols import FileSystem
from treefs.remover import TreeRemover


class DirectoryEmptier:
    """Leaves a directory existing and empty."""

    def __init__(
        self, filesystem: FileSystem, mkdirs: DirectoryCreator, remover: TreeRemover
    ) -> None:
        self.fs = filesystem
        self.mkdirs = mkdirs
        self.remover = remover

    def children(self, directory: Path) -> list[Path] | None:
        """Return the direct children to remove.

        Creates the directory and returns None when it does not exist yet.

        Raises:
            TypeMismatchError: If directory exists but is not a directory.
        """
        stat = self.fs.probe(directory, follow_symlinks=True)
        if stat is None:
            self.mkdirs.ensure_dir(directory)
            return None
        if not stat.is_dir:
            raise TypeMismatchError("empty_dir", directory, reason="not a directory")
        return [directory / name for name in self.fs.read_dir(directory)]

    def empty_dir(self, directory: Path) -> None:
        """Remove every child of ``directory``, creating it if absent.

        Args:
            directory: Absolute directory path.
        """
        for child in self.children(directory) or ():
            self.remover.remove(child)
