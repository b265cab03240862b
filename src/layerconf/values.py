"""
Generic value classification.

A parsed document is a tree of plain Python objects. Every site that
inspects one goes through kind_of() so the four shapes are handled
exhaustively:

- MAPPING: any collections.abc.Mapping (keys of any scalar type)
- SEQUENCE: list or tuple
- SCALAR: str, bytes, numbers, booleans, dates, and any other leaf
- ABSENT: None
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing


class ValueKind(_enum.Enum):
    """Shape of a generic value."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    ABSENT = "absent"


def kind_of(value: _typing.Any) -> ValueKind:
    """Classify a generic value."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, _abc.Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def format_key(key: _typing.Any) -> str:
    """
    Render a mapping key as a tree label.

    YAML allows non-string keys (``1: x``, ``true: y``). Booleans and
    null are rendered in their YAML spelling so lookups can use the same
    text that appears in the document.
    """
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)
