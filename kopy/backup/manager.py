# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Backup Manager - One entry point per backup command.

Each function takes an explicit KopyConfig, tags its log events with a
fresh ULID operation_id, and returns what it produced:

- backup_directory: copy a whole tree (copydir)
- backup_file: copy one file into a folder (copyfile)
- backup_modified: copy recently modified files only (copymd)
- archive_directory: write <name>.tar.gz of a tree (comdir)
- archive_file: write <name>.zip of one file (comfile)
"""

import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

import structlog
from ulid import ULID

from kopy.archive.common import TAR_GZ_SUFFIX, ZIP_SUFFIX, archive_name_for
from kopy.archive.targz import compress_directory
from kopy.archive.zipfiles import compress_files
from kopy.config import KopyConfig
from kopy.copier import TransferCounters, copy_dir, copy_file
from kopy.exceptions import ArchiveError, CopyError
from kopy.selector import copy_modified_within

logger = structlog.get_logger()


@contextmanager
def operation_context(command: str) -> Iterator[str]:
    """Bind a new operation_id (and the command name) to every log event inside."""
    operation_id = str(ULID())
    with structlog.contextvars.bound_contextvars(operation_id=operation_id, command=command):
        yield operation_id


def backup_directory(
    src: str | os.PathLike,
    dst: str | os.PathLike,
    config: KopyConfig,
) -> TransferCounters:
    """
    Copy an entire directory tree, replacing existing destination files.

    Args:
        src: Source directory
        dst: Destination directory
        config: Kopy configuration (ignore list, per-file logging)

    Returns:
        TransferCounters with files and folders copied
    """
    with operation_context("copydir"):
        logger.info("copydir_started", src=str(src), dst=str(dst))

        counters = copy_dir(
            src,
            dst,
            config.ignore_patterns,
            log_copied_file=config.log_copied_file,
        )

        logger.info(
            "copydir_completed",
            src=str(src),
            dst=str(dst),
            folders_copied=counters.folders_copied,
            files_copied=counters.files_copied,
        )
        return counters


def backup_file(
    src: str | os.PathLike,
    dst_dir: str | os.PathLike,
    config: KopyConfig,
) -> Path:
    """
    Copy one file into a destination folder, keeping its name.

    Returns:
        Path of the copied file
    """
    with operation_context("copyfile"):
        dest = Path(dst_dir) / Path(src).name
        logger.info("copyfile_started", src=str(src), dst=str(dest))

        try:
            copy_file(src, dest)
        except OSError as e:
            raise CopyError(
                f"Failed to copy file: {e}",
                details={"src": str(src), "dst": str(dest)},
            ) from e

        if config.log_copied_file:
            logger.info("copied_file", file=dest.name, path=str(dest))
        logger.info("copyfile_completed", src=str(src), dst=str(dest))
        return dest


def backup_modified(
    src: str | os.PathLike,
    dst: str | os.PathLike,
    config: KopyConfig,
    window_days: int | None = None,
    now: datetime | None = None,
) -> TransferCounters:
    """
    Copy files modified within the last N days, keeping the folder layout.

    Args:
        src: Source directory
        dst: Destination directory
        config: Kopy configuration
        window_days: Days to look back (<= 0); defaults to
            config.copy_mod_files_num_days
        now: Reference time (default: current time)

    Returns:
        TransferCounters with files_copied set
    """
    days = config.copy_mod_files_num_days if window_days is None else window_days

    with operation_context("copymd"):
        logger.info("copymd_started", src=str(src), dst=str(dst), window_days=days)

        counters = copy_modified_within(
            src,
            dst,
            days,
            config.ignore_patterns,
            now=now,
            log_copied_file=config.log_copied_file,
        )

        logger.info(
            "copymd_completed",
            src=str(src),
            dst=str(dst),
            copied_files=counters.files_copied,
        )
        return counters


def archive_directory(
    src: str | os.PathLike,
    dst_dir: str | os.PathLike,
    config: KopyConfig,
) -> Path:
    """
    Compress a directory into <dst_dir>/<name>.tar.gz.

    The archive is streamed into a temporary file and renamed into place
    once complete, so a failed run never leaves a truncated .tar.gz.

    Returns:
        Path to the created archive
    """
    src_path = Path(src)
    if src_path.name in ("", ".", ".."):
        src_path = src_path.resolve()
    archive_path = Path(dst_dir) / archive_name_for(src_path, TAR_GZ_SUFFIX)

    with operation_context("comdir"):
        logger.info("comdir_started", src=str(src_path), dst=str(archive_path))

        temp_path = archive_path.with_name(archive_path.name + ".tmp")
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "wb") as out:
                entries = compress_directory(src_path, out, config.ignore_patterns)
            temp_path.replace(archive_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ArchiveError(
                f"Failed to write archive: {e}",
                details={"src": str(src_path), "archive": str(archive_path)},
            ) from e
        except ArchiveError:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("comdir_completed", dst=str(archive_path), entries=entries)
        return archive_path


def archive_file(
    src: str | os.PathLike,
    dst_dir: str | os.PathLike,
    config: KopyConfig,
) -> Path:
    """
    Compress a single file into <dst_dir>/<name>.zip.

    Returns:
        Path to the created archive
    """
    archive_path = Path(dst_dir) / archive_name_for(src, ZIP_SUFFIX)

    with operation_context("comfile"):
        logger.info("comfile_started", src=str(src), dst=str(archive_path))

        temp_path = archive_path.with_name(archive_path.name + ".tmp")
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            compress_files(temp_path, [src])
            temp_path.replace(archive_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ArchiveError(
                f"Failed to write archive: {e}",
                details={"src": str(src), "archive": str(archive_path)},
            ) from e
        except ArchiveError:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("comfile_completed", src=str(src), dst=str(archive_path))
        return archive_path
