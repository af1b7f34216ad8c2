"""Core types and logic for cursor-settings."""

from .canon import canon, compact_json, parse_json_strict, pretty_json
from .json_diff import json_diff
from .paths import format_path, normalize_path, parse_path
from .report import (
    ReportContext,
    ReportFormat,
    render,
    render_json,
    render_markdown,
)
from .types import (
    CompareConfig,
    DiffKind,
    DiffRecord,
    JsonKind,
    OnlyInLeft,
    OnlyInRight,
    TypeMismatch,
    ValueDiff,
    json_kind,
)

__all__ = [
    # Canonical JSON
    "canon",
    "compact_json",
    "parse_json_strict",
    "pretty_json",
    # Paths
    "format_path",
    "normalize_path",
    "parse_path",
    # Types
    "CompareConfig",
    "DiffKind",
    "DiffRecord",
    "JsonKind",
    "OnlyInLeft",
    "OnlyInRight",
    "TypeMismatch",
    "ValueDiff",
    "json_kind",
    # Diff
    "json_diff",
    # Reporting
    "ReportContext",
    "ReportFormat",
    "render",
    "render_json",
    "render_markdown",
]
