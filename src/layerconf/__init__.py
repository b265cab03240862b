"""
layerconf - layered YAML configuration

Merges any number of YAML documents into one tree, expands ${VAR} style
references before parsing, and answers case-insensitive dotted-path
queries with longest-key matching.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("layerconf")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from layerconf.errors import (  # noqa: E402
    ConfigError,
    MergeConflict,
    ParseError,
    SourceReadError,
    UndefinedVariable,
)
from layerconf.expansion import Expander, ExpandingReader, environ_lookup, expand  # noqa: E402
from layerconf.merging import merge, merge_all  # noqa: E402
from layerconf.provider import Value, YAMLProvider  # noqa: E402
from layerconf.settings import ResolverSettings  # noqa: E402
from layerconf.tree import Node, NodeKind  # noqa: E402
from layerconf.values import ValueKind, kind_of  # noqa: E402

__all__ = [
    "ConfigError",
    "Expander",
    "ExpandingReader",
    "MergeConflict",
    "Node",
    "NodeKind",
    "ParseError",
    "ResolverSettings",
    "SourceReadError",
    "UndefinedVariable",
    "Value",
    "ValueKind",
    "YAMLProvider",
    "__version__",
    "__version_info__",
    "environ_lookup",
    "expand",
    "kind_of",
    "merge",
    "merge_all",
]
