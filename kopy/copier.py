# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Copier - Recursive directory copy with ignore filtering.

copy_dir() mirrors a source tree into a destination tree, copying file
content and permission bits (not timestamps). A failure on one entry is
logged and the walk carries on with its siblings; only a source that
cannot be read at all aborts the call.
"""

import os
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import structlog

from kopy.exceptions import CopyError
from kopy.filters import should_exclude

logger = structlog.get_logger()


@dataclass
class TransferCounters:
    """Files and folders copied by one top-level operation."""

    files_copied: int = 0
    folders_copied: int = 0

    @property
    def total(self) -> int:
        return self.files_copied + self.folders_copied


def copy_file(src: str | os.PathLike, dst: str | os.PathLike) -> Path:
    """
    Copy a single file's bytes and permission bits.

    The destination's parent folder is created when missing and an
    existing destination file is overwritten.

    Args:
        src: File to copy
        dst: Full destination file path

    Returns:
        The destination path
    """
    dst_path = Path(dst)
    dst_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst_path)
    shutil.copymode(src, dst_path)
    return dst_path


def copy_dir(
    src: str | os.PathLike,
    dst: str | os.PathLike,
    patterns: Iterable[str] = (),
    *,
    log_copied_file: bool = False,
    counters: TransferCounters | None = None,
) -> TransferCounters:
    """
    Copy a whole directory recursively, honoring ignore patterns.

    Args:
        src: Source directory
        dst: Destination directory (created with the source's mode)
        patterns: Ignore substrings matched against each child's full path
        log_copied_file: Emit a "copied_file"/"copied_folder" event per entry
        counters: Accumulator shared through the recursion; a fresh one is
            created for the top-level call

    Returns:
        The counters, updated with everything copied under src

    Raises:
        CopyError: If src cannot be stat'ed or listed, or dst cannot be created
    """
    if counters is None:
        counters = TransferCounters()
    patterns = list(patterns)
    src_path = Path(src)
    dst_path = Path(dst)

    try:
        src_info = src_path.stat()
        with os.scandir(src_path) as it:
            children = sorted(it, key=lambda e: e.name)
        dst_path.mkdir(mode=stat.S_IMODE(src_info.st_mode), parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(
            f"Failed to copy directory: {e}",
            details={"src": str(src_path), "dst": str(dst_path)},
        ) from e

    for child in children:
        child_src = src_path / child.name
        child_dst = dst_path / child.name

        if should_exclude(child_src, patterns):
            continue

        if child.is_dir(follow_symlinks=False):
            try:
                copy_dir(
                    child_src,
                    child_dst,
                    patterns,
                    log_copied_file=log_copied_file,
                    counters=counters,
                )
            except CopyError as e:
                logger.error("copy_folder_failed", path=str(child_src), error=str(e))
                continue

            counters.folders_copied += 1
            if log_copied_file:
                logger.info("copied_folder", name=child.name, path=str(child_dst))
        else:
            try:
                copy_file(child_src, child_dst)
            except OSError as e:
                logger.error("copy_file_failed", path=str(child_src), error=str(e))
                continue

            counters.files_copied += 1
            if log_copied_file:
                logger.info("copied_file", file=child.name, path=str(child_dst))

    return counters
