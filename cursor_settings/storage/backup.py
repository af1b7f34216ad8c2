"""Timestamped backups taken before the store is modified."""

from __future__ import annotations

import logging
import os
import re
import shutil
from datetime import datetime
from typing import Optional

from ..config import DB_FILENAME

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")


def timestamp_string(now: Optional[datetime] = None) -> str:
    """Local time as ``YYYYMMDD_HHMMSS``."""
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


def safe_key_name(key: str) -> str:
    return _UNSAFE_CHARS.sub("_", key)


def write_text(path: str, content: str) -> None:
    """Write *content* to *path*, creating parent directories as needed."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(content)


def backup_value(
    raw: str,
    key: str,
    backup_dir: str,
    now: Optional[datetime] = None,
) -> str:
    """Save the current raw value of *key*; returns the backup file path."""
    path = os.path.join(
        backup_dir,
        f"{safe_key_name(key)}.backup_{timestamp_string(now)}.json",
    )
    write_text(path, raw)
    logger.debug("value backup written to %s", path)
    return path


def backup_store_file(
    db_path: str,
    backup_dir: str,
    now: Optional[datetime] = None,
) -> str:
    """Copy the whole store file into ``<backup_dir>/db``; returns the copy's path."""
    dest_dir = os.path.join(backup_dir, "db")
    os.makedirs(dest_dir, exist_ok=True)
    path = os.path.join(dest_dir, f"{DB_FILENAME}.{timestamp_string(now)}")
    shutil.copy2(db_path, path)
    logger.debug("store backup written to %s", path)
    return path
