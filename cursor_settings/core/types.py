from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from .paths import PathSegment, format_path, parse_path


class JsonKind:
    """Kinds a JSON value can have. ``bool`` is never a number."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> str:
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    return type(value).__name__


class DiffKind:
    """Tags of the four diff record variants."""

    ONLY_IN_LEFT = "onlyInLeft"
    ONLY_IN_RIGHT = "onlyInRight"
    VALUE_DIFF = "valueDiff"
    TYPE_MISMATCH = "typeMismatch"


# ---------------------------------------------------------------------------
# Diff records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiffRecord:
    """
    One structural difference between two JSON trees.

    The left tree is the value read from the store, the right tree is the
    reference document; ``to_dict`` labels the sides ``db`` and ``file``.
    """

    kind: ClassVar[str] = ""

    path: Tuple[PathSegment, ...]

    @property
    def path_str(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "path": self.path_str}


@dataclass(frozen=True)
class OnlyInLeft(DiffRecord):
    kind: ClassVar[str] = DiffKind.ONLY_IN_LEFT

    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "path": self.path_str, "value": self.value}


@dataclass(frozen=True)
class OnlyInRight(DiffRecord):
    kind: ClassVar[str] = DiffKind.ONLY_IN_RIGHT

    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "path": self.path_str, "value": self.value}


@dataclass(frozen=True)
class ValueDiff(DiffRecord):
    kind: ClassVar[str] = DiffKind.VALUE_DIFF

    left: Any = None
    right: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "path": self.path_str,
            "db": self.left,
            "file": self.right,
        }


@dataclass(frozen=True)
class TypeMismatch(DiffRecord):
    kind: ClassVar[str] = DiffKind.TYPE_MISMATCH

    left: Any = None
    right: Any = None
    left_kind: str = ""
    right_kind: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "path": self.path_str,
            "db": self.left,
            "file": self.right,
            "db_type": self.left_kind,
            "file_type": self.right_kind,
        }


# ---------------------------------------------------------------------------
# Comparison configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompareConfig:
    """
    Path rules applied while diffing.

    Attributes:
        ignored: Paths excluded from comparison, with all descendants
        unordered: Paths whose array is compared as a multiset

    Both sets hold segment tuples, so rules never collide with keys that
    contain dots or are empty.
    """

    ignored: FrozenSet[Tuple[PathSegment, ...]] = field(default_factory=frozenset)
    unordered: FrozenSet[Tuple[PathSegment, ...]] = field(default_factory=frozenset)

    @classmethod
    def from_paths(
        cls,
        ignore: Optional[Iterable[str]] = None,
        unordered: Optional[Iterable[str]] = None,
    ) -> "CompareConfig":
        """Build a config from user-supplied path strings, skipping blanks."""
        return cls(ignored=_path_rules(ignore), unordered=_path_rules(unordered))


def _path_rules(texts: Optional[Iterable[str]]) -> FrozenSet[Tuple[PathSegment, ...]]:
    parsed = (parse_path(text) for text in texts or () if text)
    return frozenset(path for path in parsed if path)


JsonValue = Union[None, bool, int, float, str, list, dict]
