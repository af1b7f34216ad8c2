"""Structural JSON diff for settings values.

Produces an ordered list of typed diff records for two JSON-like values.

Ordering guarantees:
- dict: keys in left order, then keys only on the right in right order;
  each key either yields a presence record or is recursed into
- list: by index; trailing elements are reported whole, never recursed
- kind mismatch (including object vs array, or container vs scalar): one
  typeMismatch record at that path, no descent

Path rules from ``CompareConfig``:
- ignored: the path and everything under it yields nothing
- unordered: the array at exactly that path is compared after sorting copies
  of both sides by canonical text
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .canon import canon
from .paths import ROOT, PathSegment, child, is_under
from .types import (
    CompareConfig,
    DiffRecord,
    JsonKind,
    JsonValue,
    OnlyInLeft,
    OnlyInRight,
    TypeMismatch,
    ValueDiff,
    json_kind,
)

_EMPTY_CONFIG = CompareConfig()


def json_diff(
    left: JsonValue,
    right: JsonValue,
    config: Optional[CompareConfig] = None,
) -> List[DiffRecord]:
    """Compare two JSON values; ``left`` is the store side, ``right`` the file side."""
    diffs: List[DiffRecord] = []
    _diff_node(left, right, ROOT, config or _EMPTY_CONFIG, diffs)
    return diffs


def _diff_node(
    left: Any,
    right: Any,
    path: Tuple[PathSegment, ...],
    config: CompareConfig,
    diffs: List[DiffRecord],
) -> None:
    if is_under(path, config.ignored):
        return

    left_kind = json_kind(left)
    right_kind = json_kind(right)

    if left_kind == JsonKind.OBJECT and right_kind == JsonKind.OBJECT:
        _diff_objects(left, right, path, config, diffs)
        return

    if left_kind == JsonKind.ARRAY and right_kind == JsonKind.ARRAY:
        _diff_arrays(left, right, path, config, diffs)
        return

    if left_kind != right_kind:
        diffs.append(
            TypeMismatch(
                path=path,
                left=left,
                right=right,
                left_kind=left_kind,
                right_kind=right_kind,
            )
        )
        return

    if canon(left) != canon(right):
        diffs.append(ValueDiff(path=path, left=left, right=right))


def _diff_objects(
    left: dict,
    right: dict,
    path: Tuple[PathSegment, ...],
    config: CompareConfig,
    diffs: List[DiffRecord],
) -> None:
    keys = list(left)
    keys.extend(k for k in right if k not in left)
    for key in keys:
        key_path = child(path, key)
        if is_under(key_path, config.ignored):
            continue
        if key not in left:
            diffs.append(OnlyInRight(path=key_path, value=right[key]))
        elif key not in right:
            diffs.append(OnlyInLeft(path=key_path, value=left[key]))
        else:
            _diff_node(left[key], right[key], key_path, config, diffs)


def _diff_arrays(
    left: list,
    right: list,
    path: Tuple[PathSegment, ...],
    config: CompareConfig,
    diffs: List[DiffRecord],
) -> None:
    if path in config.unordered:
        left = sorted(left, key=canon)
        right = sorted(right, key=canon)

    for i in range(max(len(left), len(right))):
        item_path = child(path, i)
        if is_under(item_path, config.ignored):
            continue
        if i >= len(left):
            diffs.append(OnlyInRight(path=item_path, value=right[i]))
        elif i >= len(right):
            diffs.append(OnlyInLeft(path=item_path, value=left[i]))
        else:
            _diff_node(left[i], right[i], item_path, config, diffs)
