"""Canonical JSON text for settings values.

Guarantees:
- canon(v) is deterministic: same input always yields identical text
- Dict key order is irrelevant (sorted internally)
- Integral floats collapse to ints, so 1 and 1.0 canonicalize alike; -0.0 becomes 0
- Strings are compared exactly (no Unicode or newline normalization)
- Never raises: values outside the JSON model fall back to ``str()``
"""
from __future__ import annotations

import json
import math
from typing import Any

from ..errors import MalformedJsonError


def canon(value: Any) -> str:
    """Compact, key-sorted JSON text used for equality checks and sorting."""
    return json.dumps(
        _normalize_value(value),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )


def compact_json(value: Any) -> str:
    """Single-line JSON preserving key order; the form written to the store."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def pretty_json(value: Any) -> str:
    """Two-space indented JSON preserving key order."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def parse_json_strict(text: str) -> Any:
    """Parse *text* as JSON, raising ``MalformedJsonError`` on any failure.

    ``NaN`` and ``Infinity`` are rejected even though ``json`` accepts them.
    """
    length = len(text) if text else 0
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        raise MalformedJsonError(length, detail=str(exc)) from exc


def _normalize_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, dict):
        return {str(k): _normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_value(v) for v in value]
    return str(value)
