"""Store access and backups for cursor-settings."""

from .backup import backup_store_file, backup_value, safe_key_name, timestamp_string
from .store import StateStore

__all__ = [
    "StateStore",
    "backup_store_file",
    "backup_value",
    "safe_key_name",
    "timestamp_string",
]
