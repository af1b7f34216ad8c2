from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import (
    KeyNotFoundError,
    MalformedJsonError,
    StoreUnreadableError,
    StoreUnwritableError,
)

logger = logging.getLogger(__name__)


@dataclass
class StateStore:
    """
    Accessor for the ``ItemTable`` key/value table of a ``state.vscdb`` file.

    Each call opens its own connection and closes it before returning; the
    editor that owns the file may have it open at the same time. The store is
    never created: a missing file is an error.
    """

    path: str
    timeout: float = 5.0

    def _connect(self, read_only: bool = False) -> sqlite3.Connection:
        if read_only:
            uri = Path(os.path.abspath(self.path)).as_uri() + "?mode=ro"
            conn = sqlite3.connect(uri, uri=True, timeout=self.timeout)
        else:
            conn = sqlite3.connect(self.path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        return conn

    def ensure_readable(self) -> None:
        if not os.path.exists(self.path):
            raise StoreUnreadableError(f"SQLite DB not found: {self.path}")
        try:
            conn = self._connect(read_only=True)
            try:
                row = conn.execute("PRAGMA schema_version").fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreUnreadableError(
                f"Failed to read SQLite DB. Is the path correct? Details: {exc}"
            ) from exc
        logger.debug("store %s readable (schema_version=%s)", self.path, row[0])

    def check_writable(self) -> None:
        """Take and release a write lock without changing anything."""
        try:
            conn = self._connect()
            try:
                conn.isolation_level = None
                conn.execute("BEGIN IMMEDIATE")
                conn.execute("ROLLBACK")
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreUnwritableError(
                f"DB may be locked or not writable: {exc}"
            ) from exc

    def fetch_value(self, key: str) -> Optional[str]:
        """Return the stored text for *key*, or ``None`` if there is no row."""
        try:
            conn = self._connect(read_only=True)
            try:
                row = conn.execute(
                    "SELECT value FROM ItemTable WHERE key = ? LIMIT 1",
                    (key,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreUnreadableError(f"sqlite3 error: {exc}") from exc
        if row is None:
            logger.debug("no row for key %s", key)
            return None
        value = row["value"]
        if isinstance(value, (bytes, bytearray)):
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedJsonError(len(value), detail=str(exc)) from exc
        elif value is not None and not isinstance(value, str):
            value = str(value)
        logger.debug("fetched %d chars for key %s", len(value or ""), key)
        return value

    def write_value(self, key: str, text: str) -> None:
        """Replace the value of an existing row in a single transaction."""
        try:
            conn = self._connect()
            try:
                with conn:
                    cursor = conn.execute(
                        "UPDATE ItemTable SET value = ? WHERE key = ?",
                        (text, key),
                    )
                    if cursor.rowcount == 0:
                        raise KeyNotFoundError(key)
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreUnwritableError(f"Failed to write value for {key}: {exc}") from exc
        logger.debug("wrote %d chars for key %s", len(text), key)
