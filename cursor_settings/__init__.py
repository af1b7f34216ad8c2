from .config import DB_ENV_VAR, DEFAULT_BACKUP_DIR, TARGET_KEY, resolve_db_path
from .core import (
    # Types
    CompareConfig,
    DiffKind,
    DiffRecord,
    JsonKind,
    OnlyInLeft,
    OnlyInRight,
    # Reporting
    ReportContext,
    ReportFormat,
    TypeMismatch,
    ValueDiff,
    # Canonical JSON
    canon,
    compact_json,
    # Diff
    json_diff,
    json_kind,
    parse_json_strict,
    pretty_json,
    render,
)
from .errors import (
    CursorSettingsError,
    KeyNotFoundError,
    MalformedJsonError,
    MissingRequiredOptionError,
    StoreUnreadableError,
    StoreUnwritableError,
    VerificationFailedError,
)
from .operations import (
    ExtractMode,
    ReplacePlan,
    apply_replace,
    compare_value,
    extract_value,
    prepare_replace,
)
from .storage import StateStore
from .version import CURSOR_SETTINGS_VERSION, REPORT_SCHEMA_VERSION

__all__ = [
    # Version
    "CURSOR_SETTINGS_VERSION",
    "REPORT_SCHEMA_VERSION",
    # Config
    "DB_ENV_VAR",
    "DEFAULT_BACKUP_DIR",
    "TARGET_KEY",
    "resolve_db_path",
    # Canonical JSON
    "canon",
    "compact_json",
    "parse_json_strict",
    "pretty_json",
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
    # Errors
    "CursorSettingsError",
    "KeyNotFoundError",
    "MalformedJsonError",
    "MissingRequiredOptionError",
    "StoreUnreadableError",
    "StoreUnwritableError",
    "VerificationFailedError",
    # Storage
    "StateStore",
    # Operations
    "ExtractMode",
    "ReplacePlan",
    "apply_replace",
    "compare_value",
    "extract_value",
    "prepare_replace",
]
