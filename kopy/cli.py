# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy CLI - Command-line entry point.

    kopy copydir  SRC DST          copy a whole directory
    kopy copyfile SRC DST          copy one file into DST
    kopy copymd   SRC DST [--days] copy files modified in the last N days
    kopy comdir   SRC DST          compress a directory to DST/<name>.tar.gz
    kopy comfile  SRC DST          compress a file to DST/<name>.zip
    kopy dcdir    ARCHIVE          extract <name>.tar.gz into <name>/
    kopy dcfile   ARCHIVE          extract <name>.zip into <name>/

Settings come from KOPY_* environment variables (see kopy.env).
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict

import structlog

from kopy import __version__
from kopy.backup import (
    archive_directory,
    archive_file,
    backup_directory,
    backup_file,
    backup_modified,
    restore_directory,
    restore_file,
)
from kopy.config import KopyConfig
from kopy.env import create_config_from_env
from kopy.exceptions import KopyError
from kopy.filters import normalize_patterns
from kopy.logs import configure_logging, reset_logging

logger = structlog.get_logger()

Handler = Callable[[argparse.Namespace, KopyConfig], int]


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args)
        configure_logging(config)
    except KopyError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        return _HANDLERS[args.command](args, config)
    except KopyError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        logger.error("command_failed", command=args.command, error=str(exc))
        return 1
    finally:
        reset_logging()


def _load_config(args: argparse.Namespace) -> KopyConfig:
    config = create_config_from_env()
    if args.ignore is not None:
        config = config.with_updates(ignore_patterns=normalize_patterns(args.ignore))
    if args.log_dir:
        config = config.with_updates(log_dir=Path(args.log_dir))
    if args.quiet:
        config = config.with_updates(log_copied_file=False)
    return config


def _run_copydir(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Starts copying the entire directory or a folder:", args.src)
    counters = backup_directory(args.src, args.dst, config)
    print(
        "Successfully copied the entire directory or a folder:",
        args.src,
        f"Number of Folders Copied: {counters.folders_copied}",
        f"Number of Files Copied: {counters.files_copied}",
    )
    return 0


def _run_copyfile(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Starts copying the single file:", args.src)
    dest = backup_file(args.src, args.dst, config)
    print("Successfully copied the file:", args.src, "->", dest)
    return 0


def _run_copymd(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Starts copying the latest files from:", args.src)
    counters = backup_modified(args.src, args.dst, config, window_days=args.days)
    print(
        "Successfully copied the latest files from:",
        args.src,
        f"Number of Files Copied: {counters.files_copied}",
    )
    return 0


def _run_comdir(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Start compressing the directory or a folder:", args.src)
    archive = archive_directory(args.src, args.dst, config)
    print("Done compressing the directory or a folder:", archive)
    return 0


def _run_comfile(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Start compressing the file:", args.src)
    archive = archive_file(args.src, args.dst, config)
    print("Done compressing the file:", archive)
    return 0


def _run_dcdir(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Start decompressing the folder or a directory:", args.archive)
    result = restore_directory(args.archive, config, original_root=args.root)
    _print_skipped(result.skipped_entries)
    print("Done decompressing the folder or a directory:", result.destination)
    return 0


def _run_dcfile(args: argparse.Namespace, config: KopyConfig) -> int:
    print("Start decompressing the file:", args.archive)
    result = restore_file(args.archive, config, original_root=args.root)
    _print_skipped(result.skipped_entries)
    print("Done decompressing the file:", result.destination)
    return 0


def _print_skipped(entries: list[str]) -> None:
    for name in entries:
        print("WARNING: skipped entry:", name)


_HANDLERS: Dict[str, Handler] = {
    "copydir": _run_copydir,
    "copyfile": _run_copyfile,
    "copymd": _run_copymd,
    "comdir": _run_comdir,
    "comfile": _run_comfile,
    "dcdir": _run_dcdir,
    "dcfile": _run_dcfile,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kopy",
        description="A lightweight backup for an entire directory, a folder, or a single file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--ignore",
        help="Comma-separated substrings to skip (overrides KOPY_IGNORE), e.g. '.db, .thumb'.",
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for log files (overrides KOPY_LOG_DIR).",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not log every copied or extracted file.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    copydir = sub.add_parser("copydir", help="Copy the entire folder or directory without compression.")
    copydir.add_argument("src", help="Source directory.")
    copydir.add_argument("dst", help="Destination directory.")

    copyfile = sub.add_parser("copyfile", help="Copy a single file without compression.")
    copyfile.add_argument("src", help="Source file.")
    copyfile.add_argument("dst", help="Destination directory.")

    copymd = sub.add_parser(
        "copymd",
        help="Copy the latest files based on their modified date and time.",
    )
    copymd.add_argument("src", help="Source directory.")
    copymd.add_argument("dst", help="Destination directory.")
    copymd.add_argument(
        "--days",
        type=int,
        default=None,
        help="Negative number of days to look back (default: KOPY_MOD_DAYS or -1).",
    )

    comdir = sub.add_parser("comdir", help="Compress the entire directory as .tar.gz.")
    comdir.add_argument("src", help="Directory to compress.")
    comdir.add_argument("dst", help="Folder receiving <name>.tar.gz.")

    comfile = sub.add_parser("comfile", help="Compress a single file as .zip.")
    comfile.add_argument("src", help="File to compress.")
    comfile.add_argument("dst", help="Folder receiving <name>.zip.")

    dcdir = sub.add_parser("dcdir", help="Decompress a .tar.gz made by comdir.")
    dcdir.add_argument("archive", help="Path to <name>.tar.gz.")
    dcdir.add_argument("--root", default=None, help="Original source root (default: first folder entry).")

    dcfile = sub.add_parser("dcfile", help="Decompress a .zip made by comfile.")
    dcfile.add_argument("archive", help="Path to <name>.zip.")
    dcfile.add_argument("--root", default=None, help="Folder prefix to strip (default: common parent folder).")

    return parser
