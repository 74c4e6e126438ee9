"""Exception hierarchy for tree operations.

Any primitive ``OSError`` that is not classified below (permission denied,
disk full, too many open files) passes through unchanged.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "AlreadyExistsError",
    "CrossDeviceError",
    "NotFoundError",
    "ParseError",
    "SelfReferenceError",
    "TreeFSError",
    "TypeMismatchError",
]


class TreeFSError(Exception):
    """Error raised by a tree operation.

    Attributes:
        operation: Name of the failing operation (``copy``, ``move``, ...).
        path: Path the failure is about.
        dest: Second path involved, for two-path operations.
        reason: Short human readable cause.
    """

    reason = "operation failed"

    def __init__(
        self,
        operation: str,
        path: Path | str,
        dest: Path | str | None = None,
        reason: str | None = None,
    ) -> None:
        self.operation = operation
        self.path = Path(path)
        self.dest = Path(dest) if dest is not None else None
        if reason is not None:
            self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        if self.dest is not None:
            return f"{self.operation} '{self.path}' -> '{self.dest}': {self.reason}"
        return f"{self.operation} '{self.path}': {self.reason}"


class NotFoundError(TreeFSError):
    """Source path is absent where existence was required."""

    reason = "source not found"


class AlreadyExistsError(TreeFSError):
    """Destination is present and overwrite was not requested."""

    reason = "destination exists"


class TypeMismatchError(TreeFSError):
    """A file was found where a directory was expected, or vice versa."""

    reason = "type mismatch"


class SelfReferenceError(TreeFSError):
    """Source and destination overlap."""

    reason = "source and destination must not overlap"


class CrossDeviceError(TreeFSError):
    """Atomic rename is impossible across devices."""

    reason = "cross-device rename"


class ParseError(TreeFSError):
    """Structured file content could not be deserialized."""

    reason = "parse error"
