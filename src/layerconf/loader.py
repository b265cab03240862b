"""
Document parsing boundary.

Turns one readable source into one generic value with PyYAML's safe
loader. The stream is handed to the parser as-is, so an ExpandingReader
is consumed incrementally rather than buffered up front.

Errors are wrapped with the source's name when it has one (open files
do, in-memory buffers don't).
"""

from __future__ import annotations

import logging as _logging
import os as _os
import typing as _typing

import yaml as _yaml

import layerconf.errors as errors
import layerconf.values as values

_logger = _logging.getLogger(__name__)


def source_name(stream: _typing.Any) -> str | None:
    """Return the name of a stream if it carries a textual one."""
    name = getattr(stream, "name", None)
    if isinstance(name, _os.PathLike):
        name = _os.fspath(name)
    return name if isinstance(name, str) else None


def load_document(stream: _typing.Any) -> _typing.Any:
    """
    Parse a single YAML document from a stream.

    Args:
        stream: Readable binary or text stream.

    Returns:
        The parsed generic value. An empty document yields None.

    Raises:
        SourceReadError: If the stream cannot be read.
        ParseError: If the document is not valid YAML or cannot be decoded.
        UndefinedVariable: If the stream expands variables and one is missing.
    """
    source = source_name(stream)

    try:
        document = _yaml.safe_load(stream)
    except errors.UndefinedVariable as e:
        if source is None:
            raise
        raise errors.UndefinedVariable(e.key, source=source) from e
    except _yaml.YAMLError as e:
        raise errors.ParseError(str(e), source=source) from e
    except UnicodeDecodeError as e:
        # Same error type PyYAML reports for undecodable bytes it reads itself.
        raise errors.ParseError(f"invalid encoding: {e}", source=source) from e
    except OSError as e:
        raise errors.SourceReadError(
            f"failed to read the yaml config: {e}", source=source
        ) from e

    _logger.debug(
        "loaded %s document from %s",
        values.kind_of(document).value,
        source or "<stream>",
    )
    return document
