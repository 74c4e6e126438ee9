"""Recursive file-tree operations: copy, move, mkdirp, empty, JSON files."""

__version__ = "0.1.0"

from treefs.api import (
    copy,
    dive,
    empty_dir,
    ensure_dir,
    ensure_file,
    mkdirp,
    mkdirs,
    move,
    output_file,
    output_json,
    path_exists,
    read_json,
    remove,
    write_json,
)
from treefs.errors import (
    AlreadyExistsError,
    CrossDeviceError,
    NotFoundError,
    ParseError,
    SelfReferenceError,
    TreeFSError,
    TypeMismatchError,
)
from treefs.options import CopyOptions, JsonWriteOptions, MoveOptions
from treefs.protocols import Codec, FileSystem
from treefs.types import PathKind, PathStat

__all__ = [
    "__version__",
    "AlreadyExistsError",
    "Codec",
    "CopyOptions",
    "CrossDeviceError",
    "FileSystem",
    "JsonWriteOptions",
    "MoveOptions",
    "NotFoundError",
    "ParseError",
    "PathKind",
    "PathStat",
    "SelfReferenceError",
    "TreeFSError",
    "TypeMismatchError",
    "copy",
    "dive",
    "empty_dir",
    "ensure_dir",
    "ensure_file",
    "mkdirp",
    "mkdirs",
    "move",
    "output_file",
    "output_json",
    "path_exists",
    "read_json",
    "remove",
    "write_json",
]
