# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy zip archiver and extractor for discrete file sets.

compress_files() stores each file under its full given path (not just the
base name) with deflate compression. extract_zip() restores the archive
into the folder named after it ("notes.zip" -> "notes/"), replacing the
common parent folder of all entries with that folder. A single archived
file therefore lands directly inside the extraction folder, and several
files from different folders keep their layout relative to each other.
"""

import os
import shutil
import stat
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Iterable, List

import structlog

from kopy.archive.common import (
    ZIP_SUFFIX,
    ExtractResult,
    entry_name_for,
    extraction_root,
    normalize_root,
    remap_entry,
)
from kopy.exceptions import ArchiveError, ExtractError

logger = structlog.get_logger()

_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, OSError)


def compress_files(dest_archive: str | os.PathLike, files: Iterable[str | os.PathLike]) -> int:
    """
    Bundle files into a single deflate-compressed zip archive.

    Args:
        dest_archive: Zip file to create (overwritten if present)
        files: Files to add; each is stored under its full path

    Returns:
        Number of files added

    Raises:
        ArchiveError: On the first file that cannot be added. The zip is
            still closed before the error propagates.
    """
    dest = Path(dest_archive)
    added = 0

    try:
        zf = zipfile.ZipFile(dest, mode="w", compression=zipfile.ZIP_DEFLATED)
    except OSError as e:
        raise ArchiveError(
            f"Failed to create zip archive: {e}",
            details={"dest_archive": str(dest)},
        ) from e

    with zf:
        for file_name in files:
            try:
                _add_file(zf, Path(file_name))
            except (OSError, ValueError) as e:
                logger.error("zip_add_file_failed", path=os.fspath(file_name), error=str(e))
                raise ArchiveError(
                    f"Failed to add file to zip archive: {e}",
                    details={"file": os.fspath(file_name), "dest_archive": str(dest)},
                ) from e
            added += 1

    logger.debug("zip_written", dest_archive=str(dest), files=added)
    return added


def _add_file(zf: zipfile.ZipFile, path: Path) -> None:
    # from_file() derives size, mtime and mode bits from the file itself
    info = zipfile.ZipInfo.from_file(path, arcname=entry_name_for(path))
    info.compress_type = zipfile.ZIP_DEFLATED

    with open(path, "rb") as src, zf.open(info, mode="w") as dst:
        shutil.copyfileobj(src, dst)


def common_root(names: Iterable[str]) -> str:
    """
    Longest folder prefix shared by all entry names.

    Files contribute their parent folder and folder entries (names ending
    in "/") contribute themselves, so an explicit "proj/" entry does not
    change the result:

    ["a/b/x.txt", "a/b/c/y.txt"] -> "a/b"; ["proj/", "proj/x.txt"] -> "proj";
    ["x.txt"] -> "".
    """
    common: List[str] | None = None
    for name in names:
        path = PurePosixPath(entry_name_for(name))
        parts = list(path.parts if name.endswith("/") else path.parent.parts)
        if common is None:
            common = parts
            continue
        n = 0
        while n < len(common) and n < len(parts) and common[n] == parts[n]:
            n += 1
        common = common[:n]
    return "/".join(common or [])


def extract_zip(
    archive_path: str | os.PathLike,
    *,
    original_root: str | os.PathLike | None = None,
    log_copied_file: bool = False,
) -> ExtractResult:
    """
    Extract a zip archive next to itself.

    Args:
        archive_path: Path of the .zip; its name minus ".zip" is the
            extraction folder
        original_root: Folder prefix to strip from entry names. When
            omitted, the common parent folder of all entries is used.
        log_copied_file: Emit an "extracted_file" event per file

    Returns:
        ExtractResult with counts and the names of skipped entries

    Raises:
        ExtractError: If the archive cannot be opened, an entry path is
            unsafe, or copying an entry's content fails
    """
    destination = extraction_root(archive_path, ZIP_SUFFIX)
    result = ExtractResult(destination=destination)

    try:
        zf = zipfile.ZipFile(archive_path, mode="r")
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractError(
            f"Failed to open zip archive: {e}",
            details={"archive_path": os.fspath(archive_path)},
        ) from e

    with zf:
        infos = zf.infolist()
        root = (
            normalize_root(original_root)
            if original_root is not None
            else common_root(info.filename for info in infos)
        )
        plan = [(info, remap_entry(info.filename, root, destination)) for info in infos]

        # Folders first, files after
        folders = {destination}
        for info, target in plan:
            folders.add(target if info.is_dir() else target.parent)
        for folder in sorted(folders):
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ExtractError(
                    f"Failed to create folder: {e}",
                    details={"target": str(folder)},
                ) from e
        result.folders_created = len(folders) - 1

        for info, target in plan:
            if info.is_dir():
                continue
            if _extract_member(zf, info, target):
                result.files_extracted += 1
                if log_copied_file:
                    logger.info("extracted_file", dst=str(target))
            else:
                result.skipped_entries.append(info.filename)

    return result


def _extract_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path) -> bool:
    try:
        source = zf.open(info, mode="r")
    except (*_READ_ERRORS, RuntimeError, NotImplementedError) as e:
        logger.error("open_zip_entry_failed", entry=info.filename, error=str(e))
        return False

    with source:
        try:
            out = open(target, "wb")
        except OSError as e:
            logger.error("create_file_failed", path=str(target), error=str(e))
            return False

        with out:
            try:
                shutil.copyfileobj(source, out)
            except _READ_ERRORS as e:
                logger.error("extract_file_failed", entry=info.filename, error=str(e))
                raise ExtractError(
                    f"Failed to extract zip entry: {e}",
                    details={"entry": info.filename, "target": str(target)},
                ) from e

    mode = stat.S_IMODE(info.external_attr >> 16)
    if mode:
        try:
            os.chmod(target, mode)
        except OSError as e:
            logger.warning("chmod_failed", path=str(target), error=str(e))
    return True
