"""Non-blocking variants of the public functions.

Each coroutine runs the same blocking implementation in a worker thread, so
both variants share one algorithm and produce identical trees. Cancelling
the awaiting task does not stop a worker that has already started.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

from treefs import api
from treefs.api import StrPath, absolute
from treefs.context import TreeContext, default_context

T = TypeVar("T")

__all__ = [
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


def _threaded(func: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Derive a coroutine function that runs ``func`` in a worker thread."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(func, *args, **kwargs)

    return wrapper


copy = _threaded(api.copy)
move = _threaded(api.move)
remove = _threaded(api.remove)
ensure_dir = _threaded(api.ensure_dir)
mkdirs = ensure_dir
mkdirp = ensure_dir
ensure_file = _threaded(api.ensure_file)
output_file = _threaded(api.output_file)
path_exists = _threaded(api.path_exists)
read_json = _threaded(api.read_json)
write_json = _threaded(api.write_json)
output_json = write_json


async def empty_dir(path: StrPath, *, context: TreeContext | None = None) -> None:
    """Make sure a directory exists and is empty, removing children concurrently.

    The first failing removal is raised once every started removal has
    finished.
    """
    ctx = context or default_context()
    children = await asyncio.to_thread(ctx.emptier.children, absolute(path))
    if not children:
        return
    results = await asyncio.gather(
        *(asyncio.to_thread(ctx.remover.remove, child) for child in children),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result


async def dive(
    root: StrPath, include_dirs: bool = False, *, context: TreeContext | None = None
) -> AsyncIterator[Path]:
    """Yield the paths below ``root``, reading the tree in a worker thread.

    Order and filtering match the blocking ``dive``.
    """
    done = object()
    entries = iter(api.dive(root, include_dirs, context=context))
    while True:
        path = await asyncio.to_thread(next, entries, done)
        if path is done:
            return
        yield path
