"""Primitive filesystem operations.

RealFileSystem wraps ``os``, ``shutil`` and ``pathlib`` and is the only
place where platform error codes are classified. It satisfies the
FileSystem protocol structurally.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

from treefs.errors import CrossDeviceError
from treefs.types import PathStat

# errno values that mean "nothing lives at this path"
_ABSENT_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


class RealFileSystem:
    """Production filesystem implementation."""

    def probe(self, path: Path, follow_symlinks: bool = False) -> PathStat | None:
        """Stat a path, returning None when it does not exist."""
        try:
            result = os.stat(path, follow_symlinks=follow_symlinks)
        except OSError as e:
            if e.errno in _ABSENT_ERRNOS:
                return None
            raise
        return PathStat.from_stat_result(result)

    def read_dir(self, path: Path) -> list[str]:
        """List directory entry names in sorted order."""
        return sorted(os.listdir(path))

    def create_directory(self, path: Path, mode: int | None = None) -> None:
        """Create one directory."""
        if mode is None:
            os.mkdir(path)
        else:
            os.mkdir(path, mode)

    def chmod(self, path: Path, mode: int) -> None:
        """Set permission bits. Windows only honours the read-only bit."""
        os.chmod(path, mode)

    def copy_file(self, src: Path, dest: Path) -> None:
        """Copy bytes and permission bits."""
        shutil.copyfile(src, dest, follow_symlinks=False)
        shutil.copymode(src, dest, follow_symlinks=False)

    def set_times(self, path: Path, atime_ns: int, mtime_ns: int) -> None:
        """Set access and modification times."""
        os.utime(path, ns=(atime_ns, mtime_ns))

    def rename(self, src: Path, dest: Path) -> None:
        """Atomically rename, classifying cross-device failures."""
        try:
            os.rename(src, dest)
        except OSError as e:
            if e.errno == errno.EXDEV:
                raise CrossDeviceError("rename", src, dest) from e
            raise

    def delete_file(self, path: Path) -> None:
        """Remove a file or symlink."""
        os.unlink(path)

    def delete_empty_directory(self, path: Path) -> None:
        """Remove an empty directory."""
        os.rmdir(path)

    def read_link(self, path: Path) -> str:
        """Return a symlink's target."""
        return os.readlink(path)

    def create_symlink(self, target: str, path: Path, target_is_directory: bool = False) -> None:
        """Create a symlink."""
        os.symlink(target, path, target_is_directory=target_is_directory)

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    def write_text(
        self, path: Path, content: str, encoding: str = "utf-8", mode: int | None = None
    ) -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)
        if mode is not None:
            os.chmod(path, mode)
