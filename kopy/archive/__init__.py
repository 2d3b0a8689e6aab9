# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Archive Engine - tar.gz for whole directories, zip for single files.
"""

from kopy.archive.common import (
    TAR_GZ_SUFFIX,
    ZIP_SUFFIX,
    ExtractResult,
    archive_name_for,
    entry_name_for,
    extraction_root,
    file_name_without_ext,
    remap_entry,
)

from kopy.archive.targz import (
    compress_directory,
    extract_tar_gz,
)

from kopy.archive.zipfiles import (
    common_root,
    compress_files,
    extract_zip,
)

__all__ = [
    # Naming
    "TAR_GZ_SUFFIX",
    "ZIP_SUFFIX",
    "ExtractResult",
    "archive_name_for",
    "entry_name_for",
    "extraction_root",
    "file_name_without_ext",
    "remap_entry",
    # tar.gz
    "compress_directory",
    "extract_tar_gz",
    # zip
    "common_root",
    "compress_files",
    "extract_zip",
]
