"""Recursive copy of files and directory trees."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from treefs.directories import DirectoryCreator
from treefs.errors import (
    AlreadyExistsError,
    NotFoundError,
    SelfReferenceError,
    TypeMismatchError,
)
from treefs.filesystem import RealFileSystem
from treefs.options import CopyOptions
from treefs.protocols import FileSystem
from treefs.types import PathStat

logger = logging.getLogger(__name__)


def _real(path: Path) -> Path:
    return Path(os.path.realpath(path))


class TreeCopier:
    """Copies a file or directory tree, merging into existing directories.

    Copying a directory onto an existing directory adds or replaces the
    source's entries only; unrelated entries already in the destination are
    kept.
    """

    def __init__(self, filesystem: FileSystem, mkdirs: DirectoryCreator) -> None:
        """Initialize with required collaborators.

        Args:
            filesystem: Primitive filesystem operations.
            mkdirs: Creator used for missing destination parents.
        """
        self.fs = filesystem
        self.mkdirs = mkdirs

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> TreeCopier:
        """Factory method for production instantiation."""
        fs = filesystem or RealFileSystem()
        return cls(fs, DirectoryCreator(fs))

    def copy(self, src: Path, dest: Path, options: CopyOptions | None = None) -> None:
        """Copy ``src`` to ``dest`` like ``cp -r``.

        A non-directory source copied onto an existing directory lands inside
        it under its own name. A directory source copied onto an existing
        directory is merged into it.

        Args:
            src: Absolute source path.
            dest: Absolute destination path.
            options: Copy options.

        Raises:
            NotFoundError: If src does not exist.
            AlreadyExistsError: If a destination file exists and overwrite
                is off. Nothing has been written in that case.
            TypeMismatchError: If a directory would replace a file or the
                reverse.
            SelfReferenceError: If src and dest overlap.
        """
        src_stat = self.fs.probe(src)
        if src_stat is None:
            raise NotFoundError("copy", src, dest)

        target = dest
        if not src_stat.is_dir:
            dest_stat = self.fs.probe(dest, follow_symlinks=True)
            if dest_stat is not None and dest_stat.is_dir:
                target = dest / src.name

        self.copy_entry(src, target, options, src_stat=src_stat)

    def copy_entry(
        self,
        src: Path,
        dest: Path,
        options: CopyOptions | None = None,
        src_stat: PathStat | None = None,
    ) -> None:
        """Copy ``src`` to exactly ``dest``, without the directory retarget."""
        options = options or CopyOptions()
        if src_stat is None:
            src_stat = self.fs.probe(src)
            if src_stat is None:
                raise NotFoundError("copy", src, dest)

        self._check_overlap(src, src_stat, dest)
        self._check_conflicts(src, src_stat, dest, options)
        self.mkdirs.ensure_dir(dest.parent)
        logger.debug("Copying %s -> %s", src, dest)
        self._copy(src, src_stat, dest, options)

    def _check_overlap(self, src: Path, src_stat: PathStat, dest: Path) -> None:
        real_src, real_dest = _real(src), _real(dest)
        if real_src == real_dest or src_stat.same_entry(self.fs.probe(dest)):
            raise SelfReferenceError("copy", src, dest)
        if src_stat.is_dir and real_dest.is_relative_to(real_src):
            raise SelfReferenceError(
                "copy", src, dest, reason="cannot copy a directory into itself"
            )

    def _check_conflicts(
        self, src: Path, src_stat: PathStat, dest: Path, options: CopyOptions
    ) -> None:
        """Walk the source against the destination before writing anything."""
        # A symlink replaces the entry at dest itself, never what it points to.
        dest_stat = self.fs.probe(dest, follow_symlinks=not src_stat.is_symlink)
        if dest_stat is None:
            return
        if src_stat.is_dir:
            if not dest_stat.is_dir:
                raise TypeMismatchError(
                    "copy", src, dest, reason="cannot overwrite non-directory with directory"
                )
            for name in self.fs.read_dir(src):
                child_stat = self.fs.probe(src / name)
                if child_stat is not None:
                    self._check_conflicts(src / name, child_stat, dest / name, options)
            return
        if dest_stat.is_dir:
            raise TypeMismatchError(
                "copy", src, dest, reason="cannot overwrite directory with non-directory"
            )
        if not options.overwrite:
            raise AlreadyExistsError("copy", src, dest)

    def _copy(self, src: Path, src_stat: PathStat, dest: Path, options: CopyOptions) -> None:
        if src_stat.is_dir:
            self._copy_dir(src, src_stat, dest, options)
        elif src_stat.is_file:
            self._copy_file(src, src_stat, dest, options)
        elif src_stat.is_symlink:
            self._copy_symlink(src, dest, options)
        else:
            raise TypeMismatchError("copy", src, dest, reason="unsupported file type")

    def _copy_dir(self, src: Path, src_stat: PathStat, dest: Path, options: CopyOptions) -> None:
        dest_stat = self.fs.probe(dest, follow_symlinks=True)
        created = dest_stat is None
        if created:
            self.fs.create_directory(dest)
        elif not dest_stat.is_dir:
            raise TypeMismatchError(
                "copy", src, dest, reason="cannot overwrite non-directory with directory"
            )

        for name in self.fs.read_dir(src):
            child_stat = self.fs.probe(src / name)
            if child_stat is None:
                # Removed while we were copying.
                continue
            self._copy(src / name, child_stat, dest / name, options)

        # Applied last so a read-only source directory can still be filled.
        if created:
            self.fs.chmod(dest, src_stat.mode)

    def _copy_file(self, src: Path, src_stat: PathStat, dest: Path, options: CopyOptions) -> None:
        dest_stat = self.fs.probe(dest, follow_symlinks=True)
        if dest_stat is not None:
            if dest_stat.is_dir:
                raise TypeMismatchError(
                    "copy", src, dest, reason="cannot overwrite directory with non-directory"
                )
            if not options.overwrite:
                raise AlreadyExistsError("copy", src, dest)

        self.fs.copy_file(src, dest)
        if options.preserve_timestamps:
            self._preserve_timestamps(src_stat, dest)

    def _copy_symlink(self, src: Path, dest: Path, options: CopyOptions) -> None:
        link_target = self.fs.read_link(src)
        dest_stat = self.fs.probe(dest)
        if dest_stat is not None:
            if dest_stat.is_dir:
                raise TypeMismatchError(
                    "copy", src, dest, reason="cannot overwrite directory with symlink"
                )
            if not options.overwrite:
                raise AlreadyExistsError("copy", src, dest)
            self.fs.delete_file(dest)

        resolved = self.fs.probe(src, follow_symlinks=True)
        self.fs.create_symlink(
            link_target, dest, target_is_directory=bool(resolved and resolved.is_dir)
        )

    def _preserve_timestamps(self, src_stat: PathStat, dest: Path) -> None:
        try:
            self.fs.set_times(dest, src_stat.atime_ns, src_stat.mtime_ns)
        except (OSError, NotImplementedError) as e:
            logger.warning("Could not preserve timestamps on %s: %s", dest, e)
