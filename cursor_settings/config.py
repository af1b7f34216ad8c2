"""Defaults and environment discovery for cursor-settings.

Resolution order for the store path:
    1. ``--db`` on the command line
    2. ``$CURSOR_STATE_DB``
    3. the first per-platform candidate that exists
    4. the first per-platform candidate
"""

from __future__ import annotations

import os
import sys
from typing import List, Mapping, Optional

TARGET_KEY = (
    "src.vs.platform.reactivestorage.browser."
    "reactiveStorageServiceImpl.persistentStorage.applicationUser"
)

DB_ENV_VAR = "CURSOR_STATE_DB"

DB_FILENAME = "state.vscdb"

DEFAULT_BACKUP_DIR = "cursor_state_backups"

# Cursor has shipped both spellings of the profile directory.
_PROFILE_DIRS = ("User", "user")


def _global_storage_paths(base: str) -> List[str]:
    return [
        os.path.join(base, "Cursor", profile, "globalStorage", DB_FILENAME)
        for profile in _PROFILE_DIRS
    ]


def default_db_candidates(
    platform: Optional[str] = None,
    home: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Candidate locations of ``state.vscdb`` for a platform, most likely first."""
    platform = platform or sys.platform
    home = home or os.path.expanduser("~")
    environ = os.environ if environ is None else environ

    mac_base = os.path.join(home, "Library", "Application Support")
    if platform == "darwin":
        return _global_storage_paths(mac_base)
    if platform.startswith("linux"):
        return _global_storage_paths(os.path.join(home, ".config"))
    if platform == "win32":
        app_data = environ.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
        return _global_storage_paths(app_data)
    return _global_storage_paths(mac_base)[:1]


def resolve_db_path(
    db_arg: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Pick the store path to operate on, as an absolute path."""
    environ = os.environ if environ is None else environ
    if db_arg:
        return os.path.abspath(db_arg)
    env_db = environ.get(DB_ENV_VAR)
    if env_db:
        return os.path.abspath(env_db)
    candidates = default_db_candidates(environ=environ)
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return candidates[0]
