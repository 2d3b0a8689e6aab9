# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy tar.gz archiver and extractor.

compress_directory() streams a whole directory tree into a gzip-compressed
tar written to any binary stream. Entries keep their full source path as
the member name (forward slashes, leading "/" stripped), e.g.:

    home/me/photos/
    home/me/photos/2024/
    home/me/photos/2024/beach.jpg

extract_tar_gz() restores such an archive into the folder named after the
archive ("photos.tar.gz" -> "photos/"), replacing the original root
("home/me/photos") with that folder. Both directions are streaming: no
member is buffered in memory.
"""

import os
import shutil
import stat
import tarfile
import zlib
from pathlib import Path
from typing import BinaryIO, Iterable

import structlog

from kopy.archive.common import (
    TAR_GZ_SUFFIX,
    ExtractResult,
    entry_name_for,
    extraction_root,
    normalize_root,
    remap_entry,
)
from kopy.exceptions import ArchiveError, ExtractError
from kopy.walker import iter_tree

logger = structlog.get_logger()

# Errors raised by the gzip/tar decoding layers on corrupt or truncated input
_DECODE_ERRORS = (tarfile.TarError, EOFError, zlib.error)


def compress_directory(
    src: str | os.PathLike,
    out: BinaryIO,
    patterns: Iterable[str] = (),
) -> int:
    """
    Write a tar.gz of src to out.

    The tar trailer and then the gzip trailer are written before this
    returns; out itself is left open for the caller to close.

    Args:
        src: Directory to archive
        out: Binary writable stream (file, BytesIO, socket wrapper...)
        patterns: Ignore substrings matched against each full path

    Returns:
        Number of entries written

    Raises:
        ArchiveError: If src is not a directory or any entry cannot be
            read or written (no partial archive is considered valid)
    """
    src_path = Path(src)
    if src_path.name in ("", ".", ".."):
        src_path = src_path.resolve()
    if not src_path.is_dir():
        raise ArchiveError(
            f"Source is not a directory: {src_path}",
            details={"src": str(src_path)},
        )

    written = 0
    current = src_path
    try:
        with tarfile.open(fileobj=out, mode="w|gz") as tar:
            for entry in iter_tree(src_path, patterns):
                current = entry.path
                written += _add_entry(tar, entry.path)
    except (OSError, tarfile.TarError) as e:
        raise ArchiveError(
            f"Failed to compress directory: {e}",
            details={"src": str(src_path), "entry": str(current)},
        ) from e

    logger.debug("tar_gz_written", src=str(src_path), entries=written)
    return written


def _add_entry(tar: tarfile.TarFile, path: Path) -> int:
    tarinfo = tar.gettarinfo(name=str(path), arcname=entry_name_for(path))
    if tarinfo is None:
        # Sockets and other types tar cannot represent
        logger.warning("unsupported_entry_skipped", path=str(path))
        return 0

    if tarinfo.islnk():
        # Store every hard link as a full copy so extraction never depends
        # on another member
        tarinfo.type = tarfile.REGTYPE
        tarinfo.linkname = ""
        tarinfo.size = os.stat(path).st_size

    if tarinfo.isreg():
        with open(path, "rb") as f:
            tar.addfile(tarinfo, f)
    else:
        tar.addfile(tarinfo)
    return 1


def extract_tar_gz(
    stream: BinaryIO,
    archive_path: str | os.PathLike,
    *,
    original_root: str | os.PathLike | None = None,
    log_copied_file: bool = False,
) -> ExtractResult:
    """
    Extract a tar.gz stream next to its archive file.

    Args:
        stream: Binary readable stream of the .tar.gz content
        archive_path: Path of the archive; its name minus ".tar.gz" is the
            extraction folder
        original_root: Root path the archive was built from. When omitted,
            the first directory entry of the archive is used.
        log_copied_file: Emit an "extracted_file" event per file

    Returns:
        ExtractResult with counts and skipped entries

    Raises:
        ExtractError: On corrupt input, entries outside the root, or any
            failure to create or write an output
    """
    destination = extraction_root(archive_path, TAR_GZ_SUFFIX)
    root = normalize_root(original_root) if original_root is not None else None
    result = ExtractResult(destination=destination)

    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractError(
            f"Failed to create extraction folder: {e}",
            details={"destination": str(destination)},
        ) from e

    try:
        tar = tarfile.open(fileobj=stream, mode="r|gz")
    except _DECODE_ERRORS as e:
        raise ExtractError(
            f"Failed to read tar.gz archive: {e}",
            details={"archive_path": os.fspath(archive_path)},
        ) from e

    with tar:
        while True:
            try:
                member = tar.next()
            except _DECODE_ERRORS as e:
                raise ExtractError(
                    f"Corrupt tar.gz archive: {e}",
                    details={"archive_path": os.fspath(archive_path)},
                ) from e
            if member is None:
                break

            if member.isdir():
                if root is None:
                    root = normalize_root(member.name)
                target = remap_entry(member.name, root, destination)
                try:
                    target.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise ExtractError(
                        f"Failed to create folder: {e}",
                        details={"entry": member.name, "target": str(target)},
                    ) from e
                result.folders_created += 1

            elif member.isreg():
                if root is None:
                    raise ExtractError(
                        "Cannot determine the archive root: a file precedes every folder entry",
                        details={"entry": member.name},
                    )
                target = remap_entry(member.name, root, destination)
                _write_member(tar, member, target)
                result.files_extracted += 1
                if log_copied_file:
                    logger.info("extracted_file", dst=str(target))

            else:
                logger.warning(
                    "unknown_tar_entry_type",
                    file_type=member.name,
                    type=member.type.decode("ascii", "replace"),
                )
                result.skipped_entries.append(member.name)

    return result


def _write_member(tar: tarfile.TarFile, member: tarfile.TarInfo, target: Path) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        source = tar.extractfile(member)
        with open(target, "wb") as out:
            if source is not None:
                with source:
                    shutil.copyfileobj(source, out)
        mode = stat.S_IMODE(member.mode)
        if mode:
            os.chmod(target, mode)
    except _DECODE_ERRORS as e:
        raise ExtractError(
            f"Corrupt tar.gz member: {e}",
            details={"entry": member.name},
        ) from e
    except OSError as e:
        raise ExtractError(
            f"Failed to write file: {e}",
            details={"entry": member.name, "target": str(target)},
        ) from e
