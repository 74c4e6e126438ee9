"""Context wiring for the tree operations.

This module separates object creation from object use: every component
receives its collaborators through its constructor, and create_context is
the one place where the production graph is assembled. Tests construct
TreeContext directly, or call create_context with a FileSystem double.
"""

from __future__ import annotations

from dataclasses import dataclass

from treefs.copier import TreeCopier
from treefs.directories import DirectoryCreator
from treefs.emptier import DirectoryEmptier
from treefs.filesystem import RealFileSystem
from treefs.jsonfile import StructuredFileStore
from treefs.mover import TreeMover
from treefs.protocols import Codec, FileSystem
from treefs.remover import TreeRemover


@dataclass
class TreeContext:
    """Container for the components behind the public functions.

    All components share the same FileSystem instance.
    """

    filesystem: FileSystem
    mkdirs: DirectoryCreator
    copier: TreeCopier
    remover: TreeRemover
    emptier: DirectoryEmptier
    mover: TreeMover
    store: StructuredFileStore


def create_context(
    filesystem: FileSystem | None = None,
    codec: Codec | None = None,
) -> TreeContext:
    """Factory for the component graph.

    Args:
        filesystem: Override the primitive filesystem (for testing).
        codec: Force a structured-text codec; None selects by file suffix.

    Returns:
        Configured TreeContext.
    """
    fs = filesystem or RealFileSystem()
    mkdirs = DirectoryCreator(fs)
    copier = TreeCopier(fs, mkdirs)
    remover = TreeRemover(fs)

    return TreeContext(
        filesystem=fs,
        mkdirs=mkdirs,
        copier=copier,
        remover=remover,
        emptier=DirectoryEmptier(fs, mkdirs, remover),
        mover=TreeMover(fs, mkdirs, copier, remover),
        store=StructuredFileStore(fs, mkdirs, codec),
    )


_default: TreeContext | None = None


def default_context() -> TreeContext:
    """Return the lazily created production context."""
    global _default
    if _default is None:
        _default = create_context()
    return _default
