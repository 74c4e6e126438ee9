"""CLI commands using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax

from treefs import __version__, api
from treefs.errors import TreeFSError
from treefs.jsonfile import JsonCodec, codec_for_path
from treefs.options import DEFAULT_JSON_INDENT, JsonWriteOptions

app = typer.Typer(
    name="treefs",
    help="Recursive file-tree operations: copy, move, mkdirp, empty, JSON files",
    no_args_is_help=True,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def show_success(message: str) -> None:
    """Print a success line."""
    console.print(f"[green]✓[/green] {escape(message)}")


def show_error(message: str) -> None:
    """Print an error line to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"treefs v{__version__}")
        raise typer.Exit()


def parse_mode(value: str | None) -> int | None:
    """Parse an octal permission string such as ``755`` or ``0o755``."""
    if value is None:
        return None
    try:
        return int(value.removeprefix("0o"), 8)
    except ValueError as e:
        raise typer.BadParameter(f"'{value}' is not an octal mode") from e


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every filesystem step")
    ] = False,
) -> None:
    """Recursive file-tree operations."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )


def _run(action, *args, **kwargs) -> None:
    """Run a library call, turning failures into exit code 1."""
    try:
        action(*args, **kwargs)
    except (TreeFSError, OSError) as e:
        show_error(str(e))
        raise typer.Exit(1) from e


@app.command("copy")
def copy_command(
    src: Annotated[Path, typer.Argument(help="File or directory to copy")],
    dest: Annotated[Path, typer.Argument(help="Destination path")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite", "-f", help="Replace existing files")
    ] = False,
    preserve_timestamps: Annotated[
        bool, typer.Option("--preserve-timestamps", "-p", help="Keep access/modification times")
    ] = False,
) -> None:
    """Copy a file or directory tree (merging into existing directories)."""
    _run(api.copy, src, dest, overwrite=overwrite, preserve_timestamps=preserve_timestamps)
    show_success(f"Copied {src} -> {dest}")


@app.command("move")
def move_command(
    src: Annotated[Path, typer.Argument(help="File or directory to move")],
    dest: Annotated[Path, typer.Argument(help="Destination path")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite", "-f", help="Replace an existing destination")
    ] = False,
) -> None:
    """Move a file or directory tree."""
    _run(api.move, src, dest, overwrite=overwrite)
    show_success(f"Moved {src} -> {dest}")


@app.command("remove")
def remove_command(
    paths: Annotated[list[Path], typer.Argument(help="Paths to remove")],
) -> None:
    """Remove files or directory trees; missing paths are ignored."""
    for path in paths:
        _run(api.remove, path)
        show_success(f"Removed {path}")


@app.command("mkdirp")
def mkdirp_command(
    path: Annotated[Path, typer.Argument(help="Directory to create")],
    mode: Annotated[
        str | None, typer.Option("--mode", "-m", help="Octal mode for created directories")
    ] = None,
) -> None:
    """Create a directory and any missing parents."""
    _run(api.ensure_dir, path, parse_mode(mode))
    show_success(f"Ensured {path}")


@app.command("empty")
def empty_command(
    path: Annotated[Path, typer.Argument(help="Directory to empty")],
) -> None:
    """Delete every entry of a directory, creating it if missing."""
    _run(api.empty_dir, path)
    show_success(f"Emptied {path}")


@app.command("read")
def read_command(
    path: Annotated[Path, typer.Argument(help="JSON or YAML file")],
) -> None:
    """Parse a structured file and pretty-print it."""
    try:
        value = api.read_json(path)
    except (TreeFSError, OSError) as e:
        show_error(str(e))
        raise typer.Exit(1) from e
    codec = codec_for_path(path)
    if isinstance(codec, JsonCodec):
        console.print_json(data=value)
    else:
        text = codec.dumps(value, JsonWriteOptions())
        console.print(Syntax(text, "yaml"))


@app.command("write")
def write_command(
    path: Annotated[Path, typer.Argument(help="File to write (.json, .yaml or .yml)")],
    data: Annotated[str, typer.Argument(help="Value as JSON text")],
    indent: Annotated[
        int, typer.Option("--indent", "-i", help="Indentation width")
    ] = DEFAULT_JSON_INDENT,
) -> None:
    """Write a value to a structured file, creating parent directories."""
    try:
        value = json.loads(data)
    except ValueError as e:
        show_error(f"DATA is not valid JSON: {e}")
        raise typer.Exit(1) from e
    _run(api.write_json, path, value, indent=indent)
    show_success(f"Wrote {path}")


@app.command("tree")
def tree_command(
    root: Annotated[Path, typer.Argument(help="Directory to walk")],
    include_dirs: Annotated[
        bool, typer.Option("--dirs", "-d", help="List directories too")
    ] = False,
) -> None:
    """List every path below a directory."""
    base = api.absolute(root)
    try:
        for path in api.dive(base, include_dirs=include_dirs):
            shown = path.relative_to(base) if path != base else path
            console.print(str(shown), markup=False, highlight=False)
    except OSError as e:
        show_error(str(e))
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
