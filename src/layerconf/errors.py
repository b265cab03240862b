"""
Error taxonomy for layerconf.

All errors are fatal to provider construction: a provider is either
built from every source or not built at all.

- SourceReadError: a source could not be opened or read
- ParseError: a source is not a well-formed YAML document
- MergeConflict: a mapping collides with a non-mapping at the same path
- UndefinedVariable: a variable token has no value and no usable default
"""

from __future__ import annotations

import typing as _typing


class ConfigError(Exception):
    """Base class for all configuration construction errors."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        if source is not None:
            message = f"in file: {source!r}: {message}"
        super().__init__(message)


class SourceReadError(ConfigError):
    """A source stream or file could not be read."""


class ParseError(ConfigError):
    """A source document could not be parsed."""


class MergeConflict(ConfigError):
    """A mapping and a non-mapping were merged at the same position."""

    def __init__(self, dst: _typing.Any, src: _typing.Any) -> None:
        self.dst = dst
        self.src = src
        super().__init__(
            f"can't merge {type(dst).__name__} and {type(src).__name__}. "
            f"Source: {src!r}. Destination: {dst!r}"
        )


class UndefinedVariable(ConfigError):
    """A variable token could not be resolved and carries no default."""

    def __init__(self, key: str, *, source: str | None = None) -> None:
        self.key = key
        super().__init__(
            f'default is empty for {key!r} (use "" for empty string)',
            source=source,
        )
