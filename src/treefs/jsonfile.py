"""Whole-file structured data persistence.

JSON is the default encoding; YAML is available through PyYAML. Parse
failures surface as ParseError, read failures as the original OSError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from treefs.directories import DirectoryCreator
from treefs.errors import ParseError
from treefs.filesystem import RealFileSystem
from treefs.options import DEFAULT_ENCODING, JsonWriteOptions
from treefs.protocols import Codec, FileSystem

logger = logging.getLogger(__name__)

_BOM = "\ufeff"
YAML_SUFFIXES = {".yaml", ".yml"}

# Returned by a replacer to drop a mapping member.
OMIT = object()


class JsonCodec:
    """JSON encoding backed by the standard json module."""

    def dumps(self, value: Any, options: JsonWriteOptions) -> str:
        return json.dumps(
            value, indent=options.indent, sort_keys=options.sort_keys, ensure_ascii=False
        )

    def loads(self, text: str) -> Any:
        return json.loads(text)


class YamlCodec:
    """YAML encoding backed by PyYAML's safe loader and dumper."""

    def dumps(self, value: Any, options: JsonWriteOptions) -> str:
        indent = options.indent if isinstance(options.indent, int) else None
        text = yaml.safe_dump(
            value,
            indent=indent,
            sort_keys=options.sort_keys,
            allow_unicode=True,
            default_flow_style=False,
        )
        # safe_dump always terminates with a newline; final_newline decides.
        return text.rstrip("\n")

    def loads(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e


def codec_for_path(path: Path) -> Codec:
    """Pick a codec from the file suffix, defaulting to JSON."""
    if Path(path).suffix.lower() in YAML_SUFFIXES:
        return YamlCodec()
    return JsonCodec()


def apply_replacer(value: Any, replacer: Callable[[str, Any], Any], key: str = "") -> Any:
    """Run ``replacer`` over a value tree, root first.

    Mapping members for which the replacer returns OMIT are dropped; list
    items replaced by OMIT become None so positions are kept.
    """
    value = replacer(key, value)
    if isinstance(value, Mapping):
        result = {}
        for k, v in value.items():
            replaced = apply_replacer(v, replacer, str(k))
            if replaced is not OMIT:
                result[k] = replaced
        return result
    if isinstance(value, (list, tuple)):
        items = [apply_replacer(v, replacer, str(i)) for i, v in enumerate(value)]
        return [None if item is OMIT else item for item in items]
    return value


class StructuredFileStore:
    """Reads and writes whole files of structured data."""

    def __init__(
        self,
        filesystem: FileSystem,
        mkdirs: DirectoryCreator,
        codec: Codec | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            filesystem: Primitive filesystem operations.
            mkdirs: Creator used for parent directories.
            codec: Encoding to use; None picks one from each file's suffix.
        """
        self.fs = filesystem
        self.mkdirs = mkdirs
        self.codec = codec

    @classmethod
    def create(
        cls, filesystem: FileSystem | None = None, codec: Codec | None = None
    ) -> StructuredFileStore:
        """Factory method for production instantiation."""
        fs = filesystem or RealFileSystem()
        return cls(fs, DirectoryCreator(fs), codec)

    def _codec(self, path: Path, codec: Codec | None) -> Codec:
        return codec or self.codec or codec_for_path(path)

    def serialize(
        self, path: Path, value: Any, options: JsonWriteOptions, codec: Codec | None = None
    ) -> str:
        """Render ``value`` as the text that would be written to ``path``."""
        if options.replacer is not None:
            value = apply_replacer(value, options.replacer)
        text = self._codec(path, codec).dumps(value, options)
        if options.final_newline:
            text += "\n"
        return text

    def write(
        self,
        path: Path,
        value: Any,
        options: JsonWriteOptions | None = None,
        codec: Codec | None = None,
    ) -> None:
        """Serialize ``value`` and write it to ``path``, creating parents.

        Args:
            path: Absolute file path.
            value: Value to store.
            options: Formatting and file options.
            codec: Per-call codec override.
        """
        options = options or JsonWriteOptions()
        text = self.serialize(path, value, options, codec)
        self.mkdirs.ensure_dir(path.parent)
        self.fs.write_text(path, text, encoding=options.encoding, mode=options.mode)
        logger.debug("Wrote %s", path)

    def read(
        self,
        path: Path,
        throws: bool = True,
        encoding: str = DEFAULT_ENCODING,
        codec: Codec | None = None,
    ) -> Any:
        """Read and parse ``path``.

        Args:
            path: Absolute file path.
            throws: If False, return None instead of raising ParseError.
            encoding: Text encoding of the file.
            codec: Per-call codec override.

        Returns:
            Parsed value.

        Raises:
            ParseError: If the content is not well formed and throws is set.
            OSError: If the file cannot be read, unchanged.
        """
        try:
            # UnicodeDecodeError is a ValueError; other read failures propagate.
            text = self.fs.read_text(path, encoding=encoding)
            if text.startswith(_BOM):
                text = text[len(_BOM):]
            return self._codec(path, codec).loads(text)
        except ValueError as e:
            if not throws:
                logger.debug("Ignoring malformed content in %s: %s", path, e)
                return None
            raise ParseError("read", path, reason=f"parse error: {e}") from e
