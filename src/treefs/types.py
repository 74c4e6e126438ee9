"""Shared data types for treefs."""

from __future__ import annotations

import stat as stat_module
from dataclasses import dataclass
from enum import Enum

__all__ = ["PathKind", "PathStat"]


class PathKind(str, Enum):
    """Kind of filesystem entry observed by a probe."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> PathKind:
        """Classify a raw ``st_mode`` value."""
        if stat_module.S_ISLNK(mode):
            return cls.SYMLINK
        if stat_module.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat_module.S_ISREG(mode):
            return cls.FILE
        return cls.OTHER


@dataclass(frozen=True)
class PathStat:
    """Point-in-time observation of a path.

    A PathStat is never cached between operations; anything that depends on
    existence probes again.

    Attributes:
        kind: Entry kind.
        size: Size in bytes.
        mode: Permission bits only (``st_mode & 0o7777``).
        atime_ns: Access time in nanoseconds.
        mtime_ns: Modification time in nanoseconds.
        device: Device identifier.
        inode: Inode number (0 where the platform has none).
    """

    kind: PathKind
    size: int
    mode: int
    atime_ns: int
    mtime_ns: int
    device: int = 0
    inode: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.size < 0:
            raise ValueError("size cannot be negative")
        if self.mode & ~0o7777:
            raise ValueError("mode must hold permission bits only")

    @classmethod
    def from_stat_result(cls, result) -> PathStat:
        """Build a PathStat from an ``os.stat_result``."""
        return cls(
            kind=PathKind.from_mode(result.st_mode),
            size=result.st_size,
            mode=stat_module.S_IMODE(result.st_mode),
            atime_ns=result.st_atime_ns,
            mtime_ns=result.st_mtime_ns,
            device=result.st_dev,
            inode=result.st_ino,
        )

    @property
    def is_file(self) -> bool:
        return self.kind is PathKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is PathKind.SYMLINK

    def same_entry(self, other: PathStat | None) -> bool:
        """Return True if both observations refer to the same inode."""
        if other is None or not self.inode:
            return False
        return self.inode == other.inode and self.device == other.device
