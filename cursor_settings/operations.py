"""Extract, compare and replace sequencing on top of the store and the differ.

Nothing here prints; the CLI decides what the user sees. Each function raises
a ``CursorSettingsError`` subclass on the first failure.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from .config import DEFAULT_BACKUP_DIR
from .core.canon import compact_json, parse_json_strict, pretty_json
from .core.json_diff import json_diff
from .core.types import CompareConfig, DiffRecord
from .errors import (
    KeyNotFoundError,
    MalformedJsonError,
    StoreUnwritableError,
    VerificationFailedError,
)
from .storage.backup import backup_store_file, backup_value
from .storage.store import StateStore

logger = logging.getLogger(__name__)

STDIN_NAMES = ("-", "/dev/stdin")


class ExtractMode:
    PRETTY = "pretty"
    COMPACT = "compact"
    RAW = "raw"


def read_source(path_or_dash: str, stdin: Optional[TextIO] = None) -> str:
    """Read a reference document from a file, or from stdin for ``-``."""
    if path_or_dash in STDIN_NAMES:
        try:
            return (stdin or sys.stdin).read()
        except UnicodeDecodeError as exc:
            raise MalformedJsonError(len(exc.object), detail=str(exc)) from exc
    with open(path_or_dash, "rb") as fh:
        data = fh.read()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedJsonError(len(data), detail=str(exc)) from exc


def fetch_raw(store: StateStore, key: str) -> str:
    raw = store.fetch_value(key)
    if raw is None or not raw.strip():
        raise KeyNotFoundError(key)
    return raw.strip()


def load_store_json(store: StateStore, key: str) -> Any:
    return parse_json_strict(fetch_raw(store, key))


def extract_value(store: StateStore, key: str, mode: str = ExtractMode.PRETTY) -> str:
    raw = fetch_raw(store, key)
    if mode == ExtractMode.RAW:
        return raw
    value = parse_json_strict(raw)
    if mode == ExtractMode.COMPACT:
        return compact_json(value)
    return pretty_json(value)


def compare_value(
    store: StateStore,
    key: str,
    reference_text: str,
    config: Optional[CompareConfig] = None,
) -> List[DiffRecord]:
    """Diff the stored value (left) against a reference document (right)."""
    stored = load_store_json(store, key)
    reference = parse_json_strict(reference_text)
    diffs = json_diff(stored, reference, config)
    logger.debug("compare found %d difference(s) for key %s", len(diffs), key)
    return diffs


# ---------------------------------------------------------------------------
# Replace
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReplacePlan:
    """
    A replacement whose backups already exist on disk.

    Attributes:
        key: Record key being replaced
        new_value: Parsed replacement document
        payload: Exact text that will be written and verified
        backup_path: JSON backup of the value being replaced
        db_backup_path: Copy of the whole store file, if one was requested
        writable: Result of the pre-write lock check
    """

    key: str
    new_value: Any
    payload: str
    backup_path: str
    db_backup_path: Optional[str] = None
    writable: bool = True

    @property
    def preview(self) -> str:
        return pretty_json(self.new_value)


def prepare_replace(
    store: StateStore,
    key: str,
    new_text: str,
    backup_dir: str = DEFAULT_BACKUP_DIR,
    backup_db: bool = False,
) -> ReplacePlan:
    """Validate the new document and back up the current state.

    Nothing in the store is changed. An unwritable store is logged and
    recorded on the plan, not raised.
    """
    writable = True
    try:
        store.check_writable()
    except StoreUnwritableError as exc:
        writable = False
        logger.warning("%s. Close Cursor and try again.", exc)

    new_value = parse_json_strict(new_text)
    current = fetch_raw(store, key)

    backup_path = backup_value(current, key, backup_dir)
    db_backup_path = backup_store_file(store.path, backup_dir) if backup_db else None

    return ReplacePlan(
        key=key,
        new_value=new_value,
        payload=compact_json(new_value),
        backup_path=backup_path,
        db_backup_path=db_backup_path,
        writable=writable,
    )


def apply_replace(store: StateStore, plan: ReplacePlan) -> None:
    """Write the planned value, read it back and byte-compare."""
    try:
        store.write_value(plan.key, plan.payload)
    except StoreUnwritableError as exc:
        raise StoreUnwritableError(
            f"{exc}. The original value was backed up to {plan.backup_path}"
        ) from exc
    after = store.fetch_value(plan.key)
    if after != plan.payload:
        logger.debug(
            "read-back mismatch for key %s: wrote %d chars, read %s",
            plan.key,
            len(plan.payload),
            "nothing" if after is None else f"{len(after)} chars",
        )
        raise VerificationFailedError(plan.key, plan.backup_path)
    logger.debug("verified %d chars for key %s", len(plan.payload), plan.key)
