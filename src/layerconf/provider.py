"""
YAML configuration provider.

Builds a single merged tree from any number of YAML sources and answers
dotted-path queries against it:

    provider = YAMLProvider.from_files("base.yaml", "production.yaml")
    provider.get("modules.http.port").value

Sources are merged in order: later sources override scalars and
sequences, and mappings merge recursively (see layerconf.merging).
Construction either succeeds for every source or raises; there is no
partially loaded provider.
"""

from __future__ import annotations

import contextlib as _contextlib
import dataclasses as _dataclasses
import io as _io
import logging as _logging
import os as _os
import typing as _typing

import layerconf.constants as constants
import layerconf.errors as errors
import layerconf.expansion as expansion
import layerconf.loader as loader
import layerconf.merging as merging
import layerconf.settings as settings_module
import layerconf.tree as tree

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class Value:
    """Result of a provider lookup."""

    provider: str
    key: str
    value: _typing.Any = None
    found: bool = False
    """Whether the key resolved. An explicit null is found with value None."""

    @property
    def has_value(self) -> bool:
        """Whether the key resolved."""
        return self.found

    def get(self, default: _typing.Any = None) -> _typing.Any:
        """Return the value, or default when the key did not resolve."""
        return self.value if self.found else default


class YAMLProvider:
    """
    Configuration provider over merged YAML documents.

    Prefer the from_* / with_expand constructors; __init__ takes an
    already merged root value.

    Args:
        root: Merged generic value (None for no configuration).
        settings: Separator conventions used by get().
    """

    def __init__(
        self,
        root: _typing.Any = None,
        *,
        settings: settings_module.ResolverSettings | None = None,
    ) -> None:
        if settings is None:
            settings = settings_module.default_settings()
        self._settings = settings
        self._root = tree.Node(root, settings.root_key)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_readers(
        cls,
        *readers: _typing.Any,
        settings: settings_module.ResolverSettings | None = None,
    ) -> YAMLProvider:
        """
        Create a provider from readable streams.

        Each stream holds one YAML document. Documents are merged in the
        order given.

        Raises:
            SourceReadError: If a stream cannot be read.
            ParseError: If a stream is not valid YAML.
            MergeConflict: If a mapping meets a non-mapping across documents.
            UndefinedVariable: If an expanding stream hits a missing variable.
        """
        root: _typing.Any = None
        for reader in readers:
            root = merging.merge(root, loader.load_document(reader))

        _logger.debug("built yaml provider from %d document(s)", len(readers))
        return cls(root, settings=settings)

    @classmethod
    def from_readers_with_expand(
        cls,
        lookup: expansion.Lookup,
        *readers: _typing.Any,
        settings: settings_module.ResolverSettings | None = None,
    ) -> YAMLProvider:
        """
        Create a provider from streams, expanding variables before parsing.

        The same lookup is used for every stream. See layerconf.expansion for
        the token grammar.
        """
        if settings is None:
            settings = settings_module.default_settings()
        expanding = [
            expansion.ExpandingReader(reader, lookup, settings=settings)
            for reader in readers
        ]
        return cls.from_readers(*expanding, settings=settings)

    @classmethod
    def from_bytes(
        cls,
        *blobs: bytes,
        settings: settings_module.ResolverSettings | None = None,
    ) -> YAMLProvider:
        """Create a provider from in-memory YAML blobs."""
        readers = [_io.BytesIO(blob) for blob in blobs]
        return cls.from_readers(*readers, settings=settings)

    @classmethod
    def from_files(
        cls,
        *paths: str | _os.PathLike[str],
        settings: settings_module.ResolverSettings | None = None,
    ) -> YAMLProvider:
        """
        Create a provider from YAML files.

        Every file is opened before any is parsed; all of them are closed
        again whether construction succeeds or fails.
        """
        with _open_all(paths) as readers:
            return cls.from_readers(*readers, settings=settings)

    @classmethod
    def with_expand(
        cls,
        lookup: expansion.Lookup,
        *paths: str | _os.PathLike[str],
        settings: settings_module.ResolverSettings | None = None,
    ) -> YAMLProvider:
        """
        Create a provider from YAML files with ${var} and $var expanded.

        For example, with ``lookup=layerconf.environ_lookup`` a file
        containing ``port: ${HTTP_PORT:8080}`` reads 8080 unless HTTP_PORT
        is set in the environment.
        """
        with _open_all(paths) as readers:
            return cls.from_readers_with_expand(lookup, *readers, settings=settings)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def root(self) -> tree.Node:
        """Root node of the merged tree."""
        return self._root

    @property
    def settings(self) -> settings_module.ResolverSettings:
        """Separator conventions used by this provider."""
        return self._settings

    def name(self) -> str:
        """Return the provider name."""
        return constants.PROVIDER_NAME

    def get_node(self, key: str) -> tree.Node | None:
        """Resolve a key to a tree node, or None."""
        if key == self._settings.root_key:
            return self._root
        return self._root.find(key, separator=self._settings.path_separator)

    def get(self, key: str) -> Value:
        """
        Look up a configuration value by dotted path.

        The root key returns the whole merged configuration. A key that
        does not resolve is not an error: the result has found=False.
        """
        node = self.get_node(key)
        if node is None:
            return Value(self.name(), key)
        return Value(self.name(), key, node.value, True)

    def __repr__(self) -> str:
        return f"YAMLProvider(root={self._root.value!r})"


@_contextlib.contextmanager
def _open_all(
    paths: _typing.Sequence[str | _os.PathLike[str]],
) -> _typing.Iterator[list[_typing.BinaryIO]]:
    """Open every path for binary reading, closing all of them on exit."""
    with _contextlib.ExitStack() as stack:
        readers: list[_typing.BinaryIO] = []
        for path in paths:
            try:
                readers.append(stack.enter_context(open(path, "rb")))
            except OSError as e:
                raise errors.SourceReadError(
                    f"cannot open file: {e}", source=_os.fspath(path)
                ) from e
        yield readers
