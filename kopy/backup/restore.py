# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Restore - Extract archives made by the backup manager.

An archive is always restored next to itself, into a folder named after
it: /backups/photos.tar.gz -> /backups/photos/, /backups/notes.zip ->
/backups/notes/.
"""

import os
from pathlib import Path

import structlog

from kopy.archive.common import ExtractResult
from kopy.archive.targz import extract_tar_gz
from kopy.archive.zipfiles import extract_zip
from kopy.backup.manager import operation_context
from kopy.config import KopyConfig
from kopy.exceptions import ExtractError

logger = structlog.get_logger()


def restore_directory(
    archive_path: str | os.PathLike,
    config: KopyConfig,
    original_root: str | os.PathLike | None = None,
) -> ExtractResult:
    """
    Decompress a .tar.gz made from a whole directory (dcdir).

    Args:
        archive_path: Path to the .tar.gz file
        config: Kopy configuration (per-file logging)
        original_root: Source root the archive was built from; defaults to
            the archive's first folder entry

    Returns:
        ExtractResult describing what was restored
    """
    path = Path(archive_path)

    with operation_context("dcdir"):
        logger.info("dcdir_started", src=str(path))

        try:
            stream = open(path, "rb")
        except OSError as e:
            raise ExtractError(
                f"Failed to open archive: {e}",
                details={"archive_path": str(path)},
            ) from e

        with stream:
            result = extract_tar_gz(
                stream,
                path,
                original_root=original_root,
                log_copied_file=config.log_copied_file,
            )

        logger.info(
            "dcdir_completed",
            src=str(path),
            dst=str(result.destination),
            files_extracted=result.files_extracted,
            folders_created=result.folders_created,
            skipped=len(result.skipped_entries),
        )
        return result


def restore_file(
    archive_path: str | os.PathLike,
    config: KopyConfig,
    original_root: str | os.PathLike | None = None,
) -> ExtractResult:
    """
    Decompress a .zip made from single files (dcfile).

    Args:
        archive_path: Path to the .zip file
        config: Kopy configuration (per-file logging)
        original_root: Folder prefix to strip from entry names; defaults to
            the common parent folder of all entries

    Returns:
        ExtractResult describing what was restored
    """
    path = Path(archive_path)

    with operation_context("dcfile"):
        logger.info("dcfile_started", src=str(path))

        result = extract_zip(
            path,
            original_root=original_root,
            log_copied_file=config.log_copied_file,
        )

        logger.info(
            "dcfile_completed",
            src=str(path),
            dst=str(result.destination),
            files_extracted=result.files_extracted,
            skipped=len(result.skipped_entries),
        )
        return result
