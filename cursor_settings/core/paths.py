"""Path helpers for locating values inside a JSON tree.

A path is a tuple of segments: ``str`` for object keys, ``int`` for array
indices. The string form joins keys with dots and writes indices in brackets::

    ("a", "b", 2, "c")  <->  "a.b[2].c"

The empty tuple is the root and formats as the empty string.
"""

from __future__ import annotations

import re
from typing import Collection, Iterator, Tuple, Union

PathSegment = Union[str, int]

ROOT: Tuple[PathSegment, ...] = ()

_TOKEN_RE = re.compile(r"\[(\d+)\]|([^.\[\]]+)")


def format_path(segments: Tuple[PathSegment, ...]) -> str:
    out = ""
    for seg in segments:
        if isinstance(seg, int):
            out += f"[{seg}]"
        elif out:
            out += f".{seg}"
        else:
            out = str(seg)
    return out


def parse_path(text: str) -> Tuple[PathSegment, ...]:
    """Split a dotted/bracketed path string into segments.

    Stray dots are dropped, so ``"a.[0]"`` and ``"a[0]"`` parse the same.
    Keys that themselves contain dots or brackets cannot be expressed.
    """
    segments = []
    for index, key in _TOKEN_RE.findall(text.strip()):
        if index:
            segments.append(int(index))
        else:
            segments.append(key)
    return tuple(segments)


def normalize_path(text: str) -> str:
    return format_path(parse_path(text))


def child(path: Tuple[PathSegment, ...], seg: PathSegment) -> Tuple[PathSegment, ...]:
    return path + (seg,)


def ancestors(path: Tuple[PathSegment, ...]) -> Iterator[Tuple[PathSegment, ...]]:
    """Yield every non-root prefix of *path*, shortest first, including *path*."""
    for end in range(1, len(path) + 1):
        yield path[:end]


def is_under(
    path: Tuple[PathSegment, ...], roots: Collection[Tuple[PathSegment, ...]]
) -> bool:
    """True if *path* or any of its ancestors is a member of *roots*.

    Matching is by segments, so the key ``"a.b"`` is not under ``("a", "b")``.
    The root path itself is never matched.
    """
    if not roots:
        return False
    return any(prefix in roots for prefix in ancestors(path))
