"""Option records for tree operations.

Legacy option names are normalized here, before any engine code sees them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_JSON_INDENT",
    "CopyOptions",
    "JsonWriteOptions",
    "MoveOptions",
]

DEFAULT_JSON_INDENT = 2
DEFAULT_ENCODING = "utf-8"

# Accepted for compatibility, never acted upon.
_DEPRECATED_KEYS = ("errorOnExist", "error_on_exist", "dereference", "filter")


def _fold_clobber(data: Any) -> Any:
    if not isinstance(data, Mapping):
        return data
    data = dict(data)
    for key in _DEPRECATED_KEYS:
        data.pop(key, None)
    if "clobber" in data:
        clobber = data.pop("clobber")
        if data.get("overwrite") is None:
            data["overwrite"] = bool(clobber)
    return data


class _Options(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    @classmethod
    def coerce(cls, options: Any = None, **overrides: Any):
        """Build options from an instance, a mapping or keyword overrides.

        Overrides whose value is None are ignored so callers can forward
        optional keyword arguments unchanged.
        """
        if isinstance(options, cls):
            if not overrides:
                return options
            data: dict[str, Any] = {name: getattr(options, name) for name in cls.model_fields}
        elif options is None:
            data = {}
        elif isinstance(options, Mapping):
            data = dict(options)
        else:
            raise TypeError(f"Unsupported options type: {type(options).__name__}")
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if "clobber" in overrides:
            overrides.setdefault("overwrite", overrides.pop("clobber"))
        data.update(overrides)
        return cls.model_validate(data)


class CopyOptions(_Options):
    """Options recognized by copy."""

    overwrite: bool = False
    preserve_timestamps: bool = Field(default=False, alias="preserveTimestamps")

    @model_validator(mode="before")
    @classmethod
    def _normalize_aliases(cls, data: Any) -> Any:
        return _fold_clobber(data)


class MoveOptions(_Options):
    """Options recognized by move."""

    overwrite: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalize_aliases(cls, data: Any) -> Any:
        return _fold_clobber(data)


class JsonWriteOptions(_Options):
    """Options for writing structured files.

    Attributes:
        indent: Indentation width (or literal indent string); None for compact.
        replacer: Hook called as ``replacer(key, value)`` for every member,
            root first with key ``""``, before serialization.
        sort_keys: Emit mapping keys in sorted order.
        final_newline: Terminate the document with a newline.
        encoding: Text encoding of the file.
        mode: Permission bits applied to the written file.
    """

    model_config = ConfigDict(
        populate_by_name=True, frozen=True, extra="forbid", arbitrary_types_allowed=True
    )

    indent: int | str | None = Field(
        default=DEFAULT_JSON_INDENT, validation_alias=AliasChoices("indent", "space", "spaces")
    )
    replacer: Callable[[str, Any], Any] | None = None
    sort_keys: bool = Field(default=False, alias="sortKeys")
    final_newline: bool = Field(default=True, alias="finalEOL")
    encoding: str = DEFAULT_ENCODING
    mode: int | None = None
