"""cursor-settings CLI.

Entry point for the ``cursor-settings`` command-line tool.

Usage:
    cursor-settings extract [--db PATH] [--key KEY] [--out FILE|-] [--raw|--compact|--pretty]
    cursor-settings compare --file PATH|- [--db PATH] [--key KEY] [--out FILE]
                            [--format md|json] [--ignore PATH]... [--unordered PATH]...
                            [--fail-on-diff]
    cursor-settings replace --file PATH|- [--db PATH] [--key KEY] [--backup-dir DIR]
                            [--backup-db] [--dry-run] [--yes]
    cursor-settings doctor [--db PATH]
"""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sqlite3
import sys
import time

from .config import DB_ENV_VAR, DEFAULT_BACKUP_DIR, TARGET_KEY, resolve_db_path
from .core.report import ReportContext, ReportFormat, render
from .core.types import CompareConfig
from .errors import CursorSettingsError, MissingRequiredOptionError
from .operations import (
    STDIN_NAMES,
    ExtractMode,
    apply_replace,
    compare_value,
    extract_value,
    prepare_replace,
    read_source,
)
from .storage.backup import write_text
from .storage.store import StateStore
from .version import CURSOR_SETTINGS_VERSION

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_DIFFERENCES = 2

CONFIRM_DELAY_SECONDS = 3


def _with_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def _open_store(args: argparse.Namespace) -> StateStore:
    store = StateStore(path=resolve_db_path(args.db))
    logger.debug("using store %s", store.path)
    store.ensure_readable()
    return store


def _source_arg(path: str) -> str:
    return path if path in STDIN_NAMES else os.path.abspath(path)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_extract(args: argparse.Namespace) -> int:
    store = _open_store(args)
    text = extract_value(store, args.key, mode=args.mode)

    if args.out and args.out != "-":
        out_path = os.path.abspath(args.out)
        write_text(out_path, text)
        print(f"Wrote {args.mode} JSON to: {out_path}")
    else:
        sys.stdout.write(_with_newline(text))
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    if not args.file:
        raise MissingRequiredOptionError("--file", "<path|->")
    store = _open_store(args)
    config = CompareConfig.from_paths(ignore=args.ignore, unordered=args.unordered)

    source = _source_arg(args.file)
    diffs = compare_value(store, args.key, read_source(source), config)
    context = ReportContext(db_path=store.path, key=args.key, source=args.file)
    output = _with_newline(render(diffs, args.format, context))

    if args.out:
        out_path = os.path.abspath(args.out)
        write_text(out_path, output)
        print(f"Wrote report to {out_path}")
    else:
        sys.stdout.write(output)

    if args.fail_on_diff and diffs:
        return EXIT_DIFFERENCES
    return 0


def _cmd_replace(args: argparse.Namespace) -> int:
    if not args.file:
        raise MissingRequiredOptionError("--file", "<path|->")
    store = _open_store(args)

    new_text = read_source(_source_arg(args.file))
    backup_dir = os.path.abspath(args.backup_dir)
    plan = prepare_replace(
        store,
        args.key,
        new_text,
        backup_dir=backup_dir,
        backup_db=args.backup_db,
    )
    print(f"JSON backup written: {plan.backup_path}")
    if plan.db_backup_path:
        print(f"DB backup written: {plan.db_backup_path}")

    if args.dry_run:
        print(f"Dry run: would replace value for key: {args.key}")
        print("New JSON preview:")
        print(plan.preview)
        return 0

    if not args.yes:
        print(
            "About to write new JSON into the DB. If Cursor is open, close it now. "
            f"Proceeding in {CONFIRM_DELAY_SECONDS} seconds..."
        )
        sys.stdout.flush()
        time.sleep(CONFIRM_DELAY_SECONDS)

    apply_replace(store, plan)
    print("Replacement successful and verified.")
    return 0


def _doctor_line(section: str, ok: bool, message: str) -> str:
    return f"[{'OK' if ok else 'FAIL'}] {section} - {message}"


def _cmd_doctor(args: argparse.Namespace) -> int:
    py = platform.python_version()
    print(_doctor_line("python", sys.version_info >= (3, 8), f"version {py}"))
    print(_doctor_line("sqlite3", True, f"library version {sqlite3.sqlite_version}"))

    db_path = resolve_db_path(args.db)
    found = os.path.exists(db_path)
    print(
        _doctor_line(
            "state.vscdb", found, f"found at {db_path}" if found else f"not found ({db_path})"
        )
    )

    print("")
    print("Environment:")
    print(f"- OS: {platform.system()} {platform.release()} ({platform.machine()})")
    print(f"- Home: {os.path.expanduser('~')}")
    print(f"- {DB_ENV_VAR}: {os.environ.get(DB_ENV_VAR) or '(unset)'}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _add_store_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        default=None,
        help=f"Path to state.vscdb (default: ${DB_ENV_VAR} or the platform location)",
    )
    parser.add_argument(
        "--key",
        default=TARGET_KEY,
        help="ItemTable key to operate on (default: the applicationUser settings key)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cursor-settings",
        description="Extract, compare and safely replace Cursor settings JSON",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {CURSOR_SETTINGS_VERSION}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug details to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    extract_parser = subparsers.add_parser(
        "extract", help="Read settings JSON from the DB and print or save it"
    )
    _add_store_args(extract_parser)
    extract_parser.add_argument("--out", help="Write to FILE instead of stdout ('-' for stdout)")
    mode = extract_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--raw", dest="mode", action="store_const", const=ExtractMode.RAW,
        help="Print the stored text untouched",
    )
    mode.add_argument(
        "--compact", dest="mode", action="store_const", const=ExtractMode.COMPACT,
        help="Print single-line JSON",
    )
    mode.add_argument(
        "--pretty", dest="mode", action="store_const", const=ExtractMode.PRETTY,
        help="Print indented JSON (default)",
    )
    extract_parser.set_defaults(func=_cmd_extract, mode=ExtractMode.PRETTY)

    compare_parser = subparsers.add_parser(
        "compare", help="Diff DB JSON against a reference JSON file"
    )
    _add_store_args(compare_parser)
    compare_parser.add_argument("--file", help="Reference JSON file ('-' for stdin)")
    compare_parser.add_argument("--out", help="Write the report to FILE")
    compare_parser.add_argument(
        "--format",
        choices=[ReportFormat.HUMAN, ReportFormat.STRUCTURED],
        default=ReportFormat.HUMAN,
        help="Report format (default: md)",
    )
    compare_parser.add_argument(
        "--ignore", action="append", default=[], metavar="PATH",
        help="Skip PATH and everything under it (repeatable)",
    )
    compare_parser.add_argument(
        "--unordered", action="append", default=[], metavar="PATH",
        help="Compare the array at PATH ignoring order (repeatable)",
    )
    compare_parser.add_argument(
        "--fail-on-diff", "--fail", dest="fail_on_diff", action="store_true",
        help=f"Exit with status {EXIT_DIFFERENCES} when differences are found",
    )
    compare_parser.set_defaults(func=_cmd_compare)

    replace_parser = subparsers.add_parser(
        "replace", help="Safely back up and replace settings JSON in the DB"
    )
    _add_store_args(replace_parser)
    replace_parser.add_argument("--file", help="New JSON file ('-' for stdin)")
    replace_parser.add_argument(
        "--backup-dir",
        default=DEFAULT_BACKUP_DIR,
        help=f"Directory for backups (default: ./{DEFAULT_BACKUP_DIR})",
    )
    replace_parser.add_argument(
        "--backup-db", action="store_true", help="Also copy the whole DB file"
    )
    replace_parser.add_argument(
        "--dry-run", action="store_true", help="Back up and preview without writing"
    )
    replace_parser.add_argument(
        "--yes", action="store_true", help="Skip the pause before writing"
    )
    replace_parser.set_defaults(func=_cmd_replace)

    doctor_parser = subparsers.add_parser("doctor", help="Check the local environment")
    doctor_parser.add_argument("--db", default=None, help="Path to state.vscdb to look for")
    doctor_parser.set_defaults(func=_cmd_doctor)

    return parser


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger("cursor_settings")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(EXIT_ERROR)

    try:
        status = args.func(args)
    except (CursorSettingsError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
