# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Modified-Window Selector - Copy only recently changed files.

The source tree is walked once. Every folder is recreated under the
destination first, so the full folder skeleton exists even when nothing
inside it is recent; then each file whose modification time falls in
[now + window_days, now] is copied.
"""

import os
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Iterable, List, Tuple

import structlog

from kopy.copier import TransferCounters, copy_file
from kopy.errors import explain_positive_window_days
from kopy.exceptions import ConfigurationError, CopyError
from kopy.walker import iter_tree

logger = structlog.get_logger()


def time_window(window_days: int, now: datetime | None = None) -> Tuple[int, int]:
    """
    Compute the inclusive (start, end) Unix-second window.

    Days are fixed 24-hour spans counted back from a UTC instant, so the
    window is exactly -window_days * 86400 seconds wide even across a
    daylight saving change.

    Args:
        window_days: Days to look back; must be <= 0
        now: Reference time (default: current UTC time)

    Returns:
        (start_time, end_time) as integer Unix timestamps
    """
    if window_days > 0:
        raise ConfigurationError(explain_positive_window_days(window_days))

    reference = now or datetime.now(UTC)
    start_time = int((reference + timedelta(days=window_days)).timestamp())
    end_time = int(reference.timestamp())
    return (start_time, end_time)


def collect_tree(
    src: str | os.PathLike,
    patterns: Iterable[str] = (),
) -> Tuple[List[Path], List[Path]]:
    """
    Walk src once and split it into folders and files.

    Ignored entries land in neither list. Folders that cannot be listed
    are logged and their subtree is skipped.

    Returns:
        (folders, files), both in walk order
    """
    folders: List[Path] = []
    files: List[Path] = []

    def _on_error(directory: Path, exc: OSError) -> None:
        logger.error("list_folder_failed", path=str(directory), error=str(exc))

    for entry in iter_tree(src, patterns, on_error=_on_error):
        if entry.is_dir:
            folders.append(entry.path)
        else:
            files.append(entry.path)

    return (folders, files)


def copy_modified_within(
    src: str | os.PathLike,
    dst: str | os.PathLike,
    window_days: int,
    patterns: Iterable[str] = (),
    *,
    now: datetime | None = None,
    log_copied_file: bool = False,
    counters: TransferCounters | None = None,
) -> TransferCounters:
    """
    Copy the files of src modified within the last -window_days days.

    Args:
        src: Source directory
        dst: Destination directory; src's layout is recreated below it
        window_days: Negative day count to look back (0 = this second only)
        patterns: Ignore substrings matched against each full path
        now: Reference time for the window (default: current time)
        log_copied_file: Emit a "copied_file" event per copied file
        counters: Accumulator to update (default: a fresh one)

    Returns:
        Counters with files_copied set to the number of files copied

    Raises:
        ConfigurationError: If window_days is positive
        CopyError: If src is not a readable directory
    """
    start_time, end_time = time_window(window_days, now)
    if counters is None:
        counters = TransferCounters()

    src_path = Path(src)
    dst_path = Path(dst)
    if not src_path.is_dir():
        raise CopyError(
            f"Source is not a directory: {src_path}",
            details={"src": str(src_path)},
        )

    try:
        dst_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(
            f"Failed to create destination: {e}",
            details={"dst": str(dst_path)},
        ) from e

    folders, files = collect_tree(src_path, patterns)

    # Phase 1: folder skeleton
    for folder in folders:
        target = dst_path / folder.relative_to(src_path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("create_folder_failed", path=str(target), error=str(e))

    # Phase 2: files inside the window
    for file_path in files:
        try:
            mtime = int(os.stat(file_path).st_mtime)
        except OSError as e:
            logger.error("stat_file_failed", path=str(file_path), error=str(e))
            continue

        if not (start_time <= mtime <= end_time):
            continue

        target = dst_path / file_path.relative_to(src_path)
        try:
            copy_file(file_path, target)
        except OSError as e:
            logger.error("copy_file_failed", path=str(file_path), error=str(e))
            continue

        counters.files_copied += 1
        if log_copied_file:
            logger.info("copied_file", name=file_path.name, path=str(target))

    logger.debug(
        "modified_window_scan_complete",
        src=str(src_path),
        folders=len(folders),
        candidates=len(files),
        copied=counters.files_copied,
        start_time=start_time,
        end_time=end_time,
    )

    return counters
