"""
Lookup tree over a merged generic value.

Each Node wraps one generic value and a text label: the mapping key it
was found under, or its decimal index inside a sequence. Children are
built on first access and cached for the lifetime of the node.

Path resolution tries the longest key first, so "a.b.c" matches any of:
- a literal key "a.b.c"
- a key "a.b" holding "c"
- a key "a" holding "b.c"
- nested keys "a" -> "b" -> "c"

Label comparison is case-insensitive throughout. It lowercases both sides
rather than applying full Unicode case folding, so "STRASSE" does not
match "straße".
"""

from __future__ import annotations

import enum as _enum
import threading as _threading
import typing as _typing

import layerconf.constants as constants
import layerconf.values as values


class NodeKind(_enum.Enum):
    """Structural role of a node."""

    VALUE = "value"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def of(cls, value: _typing.Any) -> NodeKind:
        """Derive the node kind from a generic value."""
        kind = values.kind_of(value)
        if kind is values.ValueKind.MAPPING:
            return cls.OBJECT
        if kind is values.ValueKind.SEQUENCE:
            return cls.ARRAY
        return cls.VALUE


class Node:
    """
    A labeled generic value with lazily computed children.

    The node never re-reads anything but the value it was built from.
    Child expansion happens at most once and is guarded by a per-node
    lock, so concurrent readers either compute the children or wait for
    the first caller to finish.

    Args:
        value: The generic value this node wraps.
        key: Label of this node (the root key for a tree root).
    """

    __slots__ = ("_key", "_folded", "_value", "_kind", "_children", "_lock")

    def __init__(self, value: _typing.Any, key: str = constants.ROOT) -> None:
        self._key = key
        self._folded = key.lower()
        self._value = value
        self._kind = NodeKind.of(value)
        self._children: tuple[Node, ...] | None = None
        self._lock = _threading.Lock()

    @property
    def key(self) -> str:
        """Label of this node."""
        return self._key

    @property
    def value(self) -> _typing.Any:
        """The wrapped generic value."""
        return self._value

    @property
    def kind(self) -> NodeKind:
        """Structural role of this node."""
        return self._kind

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Node(key={self._key!r}, kind={self._kind.value}, value={self._value!r})"

    def children(self) -> list[Node]:
        """
        Return this node's children.

        The returned list is a copy; mutating it does not affect later calls.
        """
        return list(self._ensure_children())

    def _ensure_children(self) -> tuple[Node, ...]:
        children = self._children
        if children is None:
            with self._lock:
                if self._children is None:
                    self._children = self._expand()
                children = self._children
        return children

    def _expand(self) -> tuple[Node, ...]:
        if self._kind is NodeKind.OBJECT:
            return tuple(
                Node(child, values.format_key(key))
                for key, child in self._value.items()
            )
        if self._kind is NodeKind.ARRAY:
            return tuple(
                Node(child, str(index))
                for index, child in enumerate(self._value)
            )
        return ()

    def find(
        self,
        path: str,
        *,
        separator: str = constants.PATH_SEPARATOR,
    ) -> Node | None:
        """
        Find the first longest match for a dotted path below this node.

        Args:
            path: Segments joined by separator.
            separator: Path separator character.

        Returns:
            The matching node, or None if the path does not resolve.
        """
        if not path:
            return None
        return self._find_segments(path.split(separator), 0, separator)

    def _find_segments(
        self,
        segments: list[str],
        start: int,
        separator: str,
    ) -> Node | None:
        """
        Resolve segments[start:] against this node's children.

        Candidates are segments[start:end] joined back together, for end
        from the last segment down to start + 1. A candidate matching a
        child label either completes the path or hands segments[end:] to
        that child. Empty candidates are never tried.
        """
        children = self._ensure_children()
        total = len(segments)

        for end in range(total, start, -1):
            candidate = separator.join(segments[start:end])
            if not candidate:
                break
            folded = candidate.lower()
            for child in children:
                if child._folded != folded:
                    continue
                if end == total:
                    return child
                found = child._find_segments(segments, end, separator)
                if found is not None:
                    return found

        return None
