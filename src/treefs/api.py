"""Blocking public functions.

Every function turns its path arguments into absolute paths exactly once,
here, so the engine never re-resolves a relative path mid-traversal.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Union

from treefs.context import TreeContext, default_context
from treefs.errors import TypeMismatchError
from treefs.options import DEFAULT_ENCODING, CopyOptions, JsonWriteOptions, MoveOptions
from treefs.protocols import Codec
from treefs.walk import Dive

StrPath = Union[str, os.PathLike]


def absolute(path: StrPath) -> Path:
    """Resolve ``path`` against the current directory, keeping symlinks."""
    return Path(os.path.abspath(os.fspath(path)))


def _ctx(context: TreeContext | None) -> TreeContext:
    return context or default_context()


def copy(
    src: StrPath,
    dest: StrPath,
    options: CopyOptions | dict[str, Any] | None = None,
    *,
    overwrite: bool | None = None,
    preserve_timestamps: bool | None = None,
    clobber: bool | None = None,
    context: TreeContext | None = None,
) -> None:
    """Copy a file or directory tree. See TreeCopier.copy."""
    opts = CopyOptions.coerce(
        options, overwrite=overwrite, preserve_timestamps=preserve_timestamps, clobber=clobber
    )
    _ctx(context).copier.copy(absolute(src), absolute(dest), opts)


def move(
    src: StrPath,
    dest: StrPath,
    options: MoveOptions | dict[str, Any] | None = None,
    *,
    overwrite: bool | None = None,
    clobber: bool | None = None,
    context: TreeContext | None = None,
) -> None:
    """Move a file or directory tree. See TreeMover.move."""
    opts = MoveOptions.coerce(options, overwrite=overwrite, clobber=clobber)
    _ctx(context).mover.move(absolute(src), absolute(dest), opts)


def remove(path: StrPath, *, context: TreeContext | None = None) -> None:
    """Remove a path recursively; missing paths are ignored."""
    _ctx(context).remover.remove(absolute(path))


def ensure_dir(
    path: StrPath, mode: int | None = None, *, context: TreeContext | None = None
) -> None:
    """Create a directory and its missing ancestors."""
    _ctx(context).mkdirs.ensure_dir(absolute(path), mode)


mkdirs = ensure_dir
mkdirp = ensure_dir


def empty_dir(path: StrPath, *, context: TreeContext | None = None) -> None:
    """Make sure a directory exists and has no entries."""
    _ctx(context).emptier.empty_dir(absolute(path))


def ensure_file(path: StrPath, *, context: TreeContext | None = None) -> None:
    """Create an empty file, with parents, unless it already exists."""
    ctx = _ctx(context)
    target = absolute(path)
    stat = ctx.filesystem.probe(target, follow_symlinks=True)
    if stat is not None:
        if stat.is_dir:
            raise TypeMismatchError("ensure_file", target, reason="is a directory")
        return
    ctx.mkdirs.ensure_dir(target.parent)
    ctx.filesystem.write_text(target, "")


def output_file(
    path: StrPath,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    *,
    context: TreeContext | None = None,
) -> None:
    """Write text to a file, creating its parent directories."""
    ctx = _ctx(context)
    target = absolute(path)
    ctx.mkdirs.ensure_dir(target.parent)
    ctx.filesystem.write_text(target, content, encoding=encoding)


def path_exists(path: StrPath, *, context: TreeContext | None = None) -> bool:
    """Return True if anything (including a dangling symlink) is at ``path``."""
    return _ctx(context).filesystem.probe(absolute(path)) is not None


def read_json(
    path: StrPath,
    *,
    throws: bool = True,
    encoding: str = DEFAULT_ENCODING,
    codec: Codec | None = None,
    context: TreeContext | None = None,
) -> Any:
    """Read and parse a structured file. See StructuredFileStore.read."""
    return _ctx(context).store.read(absolute(path), throws=throws, encoding=encoding, codec=codec)


def write_json(
    path: StrPath,
    value: Any,
    options: JsonWriteOptions | dict[str, Any] | None = None,
    *,
    indent: int | str | None = None,
    codec: Codec | None = None,
    context: TreeContext | None = None,
) -> None:
    """Serialize and write a value, creating parent directories."""
    opts = JsonWriteOptions.coerce(options, indent=indent)
    _ctx(context).store.write(absolute(path), value, opts, codec=codec)


output_json = write_json


def dive(
    root: StrPath, include_dirs: bool = False, *, context: TreeContext | None = None
) -> Dive:
    """Return a restartable iterable over the paths below ``root``."""
    return Dive(absolute(root), include_dirs=include_dirs, filesystem=_ctx(context).filesystem)
