# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Archive naming and root-remapping helpers shared by the tar.gz and zip code.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path, PurePath, PurePosixPath
from typing import List

from kopy.errors import explain_missing_archive_suffix
from kopy.exceptions import ExtractError

# Whole directories are archived as tar + gzip
TAR_GZ_SUFFIX = ".tar.gz"

# Single files are archived as zip
ZIP_SUFFIX = ".zip"


@dataclass
class ExtractResult:
    """Result of extracting one archive."""

    destination: Path
    files_extracted: int = 0
    folders_created: int = 0
    skipped_entries: List[str] = field(default_factory=list)


def file_name_without_ext(file_name: str) -> str:
    """Strip the last extension: "report.v2.txt" -> "report.v2"."""
    return os.path.splitext(file_name)[0]


def archive_name_for(src: str | os.PathLike, suffix: str) -> str:
    """
    Compose the archive file name for a source path.

    "/data/photos" -> "photos.tar.gz", "/data/notes.txt" -> "notes.zip".
    """
    base = PurePath(os.fspath(src).rstrip("/\\")).name
    return file_name_without_ext(base) + suffix


def extraction_root(archive_path: str | os.PathLike, suffix: str) -> Path:
    """
    Folder an archive extracts into: the archive path minus its suffix.

    Raises:
        ExtractError: If the archive name does not end with the suffix
    """
    text = os.fspath(archive_path)
    if not text.endswith(suffix) or len(Path(text).name) <= len(suffix):
        raise ExtractError(
            explain_missing_archive_suffix(text, suffix),
            details={"archive_path": text},
        )
    return Path(text[: -len(suffix)])


def entry_name_for(path: str | os.PathLike) -> str:
    """
    Stored archive name for a filesystem path.

    Forward slashes, no leading slash, no trailing slash. This is the same
    normalization tarfile and zipfile apply to member names.
    """
    posix = PurePath(os.fspath(path)).as_posix()
    return posix.strip("/")


def normalize_root(root: str | os.PathLike) -> str:
    """Normalize an explicit original root the same way entry names are."""
    return entry_name_for(root)


def remap_entry(name: str, original_root: str, destination: Path) -> Path:
    """
    Rewrite a stored entry name from its original root to the destination.

    "home/me/src/sub/a.txt" with root "home/me/src" and destination
    "/backups/src" -> "/backups/src/sub/a.txt".

    Raises:
        ExtractError: If the entry lies outside the original root or would
            land outside the destination
    """
    clean = name.replace("\\", "/").strip("/")
    if original_root == "":
        relative = clean
    elif clean == original_root:
        relative = ""
    elif clean.startswith(original_root + "/"):
        relative = clean[len(original_root) + 1 :]
    else:
        raise ExtractError(
            f"Archive entry is outside the archive root: {name}",
            details={"entry": name, "original_root": original_root},
        )

    parts = [p for p in PurePosixPath(relative).parts if p not in ("", ".")]
    if ".." in parts:
        raise ExtractError(
            f"Unsafe archive entry path: {name}",
            details={"entry": name},
        )
    return destination.joinpath(*parts)
