"""Rendering of diff records as Markdown or structured JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from ..version import REPORT_SCHEMA_VERSION
from .canon import pretty_json
from .types import DiffKind, DiffRecord


class ReportFormat:
    """Output formats accepted by ``render``."""

    HUMAN = "md"
    STRUCTURED = "json"


ROOT_MARKER = "(root)"

# Group order and headings of the Markdown report.
_SECTIONS = (
    (DiffKind.TYPE_MISMATCH, "Type mismatches"),
    (DiffKind.VALUE_DIFF, "Value differences"),
    (DiffKind.ONLY_IN_LEFT, "Present only in DB"),
    (DiffKind.ONLY_IN_RIGHT, "Present only in file"),
)


@dataclass(frozen=True)
class ReportContext:
    """Where the compared values came from."""

    db_path: str
    key: str
    source: str


def render(diffs: Sequence[DiffRecord], fmt: str, context: ReportContext) -> str:
    if fmt == ReportFormat.STRUCTURED:
        return render_json(diffs, context)
    if fmt == ReportFormat.HUMAN:
        return render_markdown(diffs, context)
    raise ValueError(f"Unknown report format: {fmt!r}")


def report_dict(diffs: Sequence[DiffRecord], context: ReportContext) -> Dict[str, Any]:
    return {
        "schema_version": REPORT_SCHEMA_VERSION,
        "db_path": context.db_path,
        "key": context.key,
        "file": context.source,
        "diff_count": len(diffs),
        "diffs": [d.to_dict() for d in diffs],
    }


def render_json(diffs: Sequence[DiffRecord], context: ReportContext) -> str:
    return json.dumps(report_dict(diffs, context), indent=2, ensure_ascii=False, default=str)


def _json_block(value: Any) -> List[str]:
    return ["```json", pretty_json(value), "```"]


def _record_lines(record: DiffRecord) -> List[str]:
    label = record.path_str or ROOT_MARKER
    if record.kind == DiffKind.TYPE_MISMATCH:
        head = (
            f"- **{label}**: DB type `{record.left_kind}` "
            f"vs File type `{record.right_kind}`"
        )
        payload = {"db": record.left, "file": record.right}
    elif record.kind == DiffKind.VALUE_DIFF:
        head = f"- **{label}**"
        payload = {"db": record.left, "file": record.right}
    else:
        head = f"- **{label}**"
        payload = record.value
    return [head, ""] + _json_block(payload)


def render_markdown(diffs: Sequence[DiffRecord], context: ReportContext) -> str:
    lines: List[str] = []
    lines.append("# Cursor state comparison for key")
    lines.append("")
    lines.append(f"`{context.key}`")
    lines.append("")
    lines.append(f"- DB: `{context.db_path}`")
    lines.append(f"- File: `{context.source}`")
    lines.append("")

    if not diffs:
        lines.append("**No differences found.**")
        return "\n".join(lines)

    for kind, heading in _SECTIONS:
        group = [d for d in diffs if d.kind == kind]
        if not group:
            continue
        lines.append(f"## {heading}")
        for record in group:
            lines.extend(_record_lines(record))
        lines.append("")

    return "\n".join(lines)
