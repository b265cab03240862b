"""
Merge engine for layered documents.

Documents are folded left to right, so later documents take priority:

    A:                B:                 merge(A, B):
      keep: A           new: B             keep: A
      update: fromA     update: fromB      update: fromB
                                           new: B

Rules for merge(dst, src):
- Absent (None) never overrides a present value, and any present value
  overrides Absent.
- Two mappings merge key by key, recursively.
- A mapping against a non-mapping (in either direction) is a MergeConflict.
- Otherwise src wins outright: sequences and scalars replace, never merge
  element-wise.

Neither operand is mutated; merged mappings are new dicts that share
untouched subtrees with their inputs.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import layerconf.errors as errors
import layerconf.values as values

_logger = _logging.getLogger(__name__)


def merge(dst: _typing.Any, src: _typing.Any) -> _typing.Any:
    """
    Merge src on top of dst.

    Args:
        dst: The lower-priority generic value.
        src: The higher-priority generic value.

    Returns:
        The merged generic value.

    Raises:
        MergeConflict: If exactly one side is a mapping.
    """
    dst_kind = values.kind_of(dst)
    src_kind = values.kind_of(src)

    if dst_kind is values.ValueKind.ABSENT:
        return src
    if src_kind is values.ValueKind.ABSENT:
        return dst

    if src_kind is values.ValueKind.MAPPING:
        if dst_kind is not values.ValueKind.MAPPING:
            _logger.debug("merge conflict: %s over %s", src_kind.value, dst_kind.value)
            raise errors.MergeConflict(dst, src)

        result = dict(dst)
        for key, value in src.items():
            # A key missing from dst reads as Absent, so src's value is taken.
            result[key] = merge(result.get(key), value)
        return result

    if dst_kind is values.ValueKind.MAPPING:
        _logger.debug("merge conflict: %s over %s", src_kind.value, dst_kind.value)
        raise errors.MergeConflict(dst, src)

    # Sequence or scalar: replace.
    return src


def merge_all(documents: _typing.Iterable[_typing.Any]) -> _typing.Any:
    """
    Fold documents left to right into a single merged root.

    An empty iterable yields None (no configuration).
    """
    root: _typing.Any = None
    for document in documents:
        root = merge(root, document)
    return root
