"""Moving files and trees: atomic rename with copy fallback."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from treefs.copier import TreeCopier
from treefs.directories import DirectoryCreator
from treefs.errors import (
    AlreadyExistsError,
    CrossDeviceError,
    NotFoundError,
    SelfReferenceError,
)
from treefs.filesystem import RealFileSystem
from treefs.options import CopyOptions, MoveOptions
from treefs.protocols import FileSystem
from treefs.remover import TreeRemover

logger = logging.getLogger(__name__)

# Rename refused because something is already at the destination.
_OCCUPIED_ERRNOS = {errno.ENOTEMPTY, errno.EEXIST, errno.EISDIR, errno.ENOTDIR}


class TreeMover:
    """Relocates a path, preferring a single atomic rename.

    Across devices the move degrades to copy followed by remove, which is not
    atomic: an interruption can leave both the source and a partial
    destination on disk.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        mkdirs: DirectoryCreator,
        copier: TreeCopier,
        remover: TreeRemover,
    ) -> None:
        """Initialize with required collaborators.

        Args:
            filesystem: Primitive filesystem operations.
            mkdirs: Creator used for the destination parent.
            copier: Copier for the cross-device fallback.
            remover: Remover for the fallback and for overwrite.
        """
        self.fs = filesystem
        self.mkdirs = mkdirs
        self.copier = copier
        self.remover = remover

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> TreeMover:
        """Factory method for production instantiation."""
        fs = filesystem or RealFileSystem()
        mkdirs = DirectoryCreator(fs)
        return cls(fs, mkdirs, TreeCopier(fs, mkdirs), TreeRemover(fs))

    def move(self, src: Path, dest: Path, options: MoveOptions | None = None) -> None:
        """Move ``src`` to ``dest``.

        Args:
            src: Absolute source path.
            dest: Absolute destination path.
            options: Move options.

        Raises:
            NotFoundError: If src does not exist.
            AlreadyExistsError: If dest exists and overwrite is off.
            SelfReferenceError: If src and dest are the same, or dest lies
                inside the src directory.
        """
        options = options or MoveOptions()
        src_stat = self.fs.probe(src)
        if src_stat is None:
            raise NotFoundError("move", src, dest)

        real_src = Path(os.path.realpath(src))
        real_dest = Path(os.path.realpath(dest))
        if src == dest or (real_src == real_dest and not src_stat.is_symlink):
            raise SelfReferenceError("move", src, dest)
        if src_stat.is_dir and real_dest.is_relative_to(real_src):
            raise SelfReferenceError(
                "move", src, dest, reason="cannot move a directory into itself"
            )

        if self.fs.probe(dest) is not None and not options.overwrite:
            raise AlreadyExistsError("move", src, dest)

        self.mkdirs.ensure_dir(dest.parent)
        try:
            self._rename(src, dest, options)
        except CrossDeviceError:
            logger.debug("Cross-device move, copying %s -> %s", src, dest)
            self._move_across_devices(src, dest, options)

    def _rename(self, src: Path, dest: Path, options: MoveOptions) -> None:
        try:
            self.fs.rename(src, dest)
        except OSError as e:
            if not options.overwrite or e.errno not in _OCCUPIED_ERRNOS:
                raise
            logger.debug("Replacing %s before rename", dest)
            self.remover.remove(dest)
            self.fs.rename(src, dest)
        logger.debug("Renamed %s -> %s", src, dest)

    def _move_across_devices(self, src: Path, dest: Path, options: MoveOptions) -> None:
        if options.overwrite:
            self.remover.remove(dest)
        copy_options = CopyOptions(overwrite=options.overwrite, preserve_timestamps=True)
        self.copier.copy_entry(src, dest, copy_options)
        self.remover.remove(src)
