"""Protocol definitions for the primitives consumed by the tree engine.

The tree operations never touch ``os`` directly; they talk to a FileSystem.
Designing to this interface enables:
- Substitution of test doubles that record or fail primitive calls
- A single place where platform error codes are classified

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from treefs.options import JsonWriteOptions
    from treefs.types import PathStat


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for primitive filesystem operations.

    Implementations report absence through ``probe`` returning None and
    raise ``OSError`` (or a subclass) for every other failure.
    """

    def probe(self, path: Path, follow_symlinks: bool = False) -> PathStat | None:
        """Observe a path.

        Args:
            path: Path to observe.
            follow_symlinks: Report the link target instead of the link.

        Returns:
            PathStat, or None if the path does not exist.

        Raises:
            OSError: For failures other than absence (e.g. permission denied).
        """
        ...

    def read_dir(self, path: Path) -> list[str]:
        """List the entry names of a directory.

        Args:
            path: Directory to list.

        Returns:
            Sorted entry names, without ``.`` and ``..``.

        Raises:
            NotADirectoryError: If path is not a directory.
        """
        ...

    def create_directory(self, path: Path, mode: int | None = None) -> None:
        """Create a single directory whose parent already exists.

        Args:
            path: Directory to create.
            mode: Permission bits, or None for the platform default.

        Raises:
            FileExistsError: If path already exists.
            FileNotFoundError: If the parent is missing.
        """
        ...

    def chmod(self, path: Path, mode: int) -> None:
        """Set permission bits on a path.

        Args:
            path: Path to update.
            mode: Permission bits.
        """
        ...

    def copy_file(self, src: Path, dest: Path) -> None:
        """Copy file bytes and permission bits, replacing dest content.

        Args:
            src: Source file.
            dest: Destination file.
        """
        ...

    def set_times(self, path: Path, atime_ns: int, mtime_ns: int) -> None:
        """Set access and modification times.

        Args:
            path: Path to update.
            atime_ns: Access time in nanoseconds.
            mtime_ns: Modification time in nanoseconds.
        """
        ...

    def rename(self, src: Path, dest: Path) -> None:
        """Atomically rename src to dest.

        Args:
            src: Existing path.
            dest: New path.

        Raises:
            CrossDeviceError: If src and dest are on different devices.
            OSError: With errno ENOTEMPTY or EEXIST if dest is a non-empty
                directory.
        """
        ...

    def delete_file(self, path: Path) -> None:
        """Remove a file or symlink.

        Args:
            path: Path to remove.
        """
        ...

    def delete_empty_directory(self, path: Path) -> None:
        """Remove an empty directory.

        Args:
            path: Directory to remove.
        """
        ...

    def read_link(self, path: Path) -> str:
        """Return the target of a symlink.

        Args:
            path: Symlink path.

        Returns:
            Link target as stored.
        """
        ...

    def create_symlink(self, target: str, path: Path, target_is_directory: bool = False) -> None:
        """Create a symlink at path pointing at target.

        Args:
            target: Link target.
            path: Path of the new link.
            target_is_directory: Hint required on Windows.
        """
        ...

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read a whole file as text.

        Args:
            path: File to read.
            encoding: Text encoding.

        Returns:
            File content.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        ...

    def write_text(
        self, path: Path, content: str, encoding: str = "utf-8", mode: int | None = None
    ) -> None:
        """Write a whole file as text, replacing previous content.

        Args:
            path: File to write.
            content: Text to write.
            encoding: Text encoding.
            mode: Optional permission bits for the file.
        """
        ...


@runtime_checkable
class Codec(Protocol):
    """Protocol for structured-text encodings.

    Implementations must round-trip strings, numbers, booleans, null,
    string-keyed mappings and sequences without loss.
    """

    def dumps(self, value: Any, options: JsonWriteOptions) -> str:
        """Serialize a value.

        Args:
            value: Value to serialize (replacer already applied).
            options: Formatting options.

        Returns:
            Serialized text.
        """
        ...

    def loads(self, text: str) -> Any:
        """Deserialize text.

        Args:
            text: Serialized text.

        Returns:
            Parsed value.

        Raises:
            ValueError: If the text is not well formed.
        """
        ...
