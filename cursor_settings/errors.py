"""Exceptions raised by cursor-settings.

Every failure the command layer reports derives from ``CursorSettingsError`` so
the CLI can turn it into a one-line diagnostic. The differ and reporter never
raise these; they are total over JSON input.
"""

from __future__ import annotations

from typing import Optional


class CursorSettingsError(Exception):
    """Base exception for cursor-settings errors."""

    pass


class MalformedJsonError(CursorSettingsError):
    """
    Raised when text that must be JSON does not parse.

    The length of the offending input is kept for diagnostics; the input
    itself is not echoed since it may hold private settings.
    """

    def __init__(self, length: int, detail: Optional[str] = None):
        self.length = length
        self.detail = detail
        message = f"Value is not valid JSON. Raw value length: {length}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class KeyNotFoundError(CursorSettingsError):
    """Raised when the store has no row, or an empty value, for a key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key not found or empty value: {key}")


class StoreUnreadableError(CursorSettingsError):
    """Raised when the store file is missing or cannot be queried."""

    pass


class StoreUnwritableError(CursorSettingsError):
    """
    Raised by the writability check, or by a failed write.

    A failed check is only a warning: the host editor may hold a lock that is
    gone by the time the real write happens. A failed write is fatal.
    """

    pass


class VerificationFailedError(CursorSettingsError):
    """Raised when the value read back after a write differs from what was written."""

    def __init__(self, key: str, backup_path: str):
        self.key = key
        self.backup_path = backup_path
        super().__init__(
            "Verification failed: DB content does not match the provided JSON. "
            f"The original value was backed up to {backup_path}"
        )


class MissingRequiredOptionError(CursorSettingsError):
    """Raised when a subcommand is missing an option it cannot run without."""

    def __init__(self, option: str, usage: str = ""):
        self.option = option
        message = f"Missing {option}"
        if usage:
            message = f"{message} {usage}"
        super().__init__(message)
