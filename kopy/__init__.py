# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy - A lightweight backup engine for directories and single files.

Copies whole trees or only recently modified files, skips paths by
substring ignore rules, and bundles directories into streaming tar.gz
archives and single files into zip archives, with matching extraction.
"""

__version__ = "1.0.0"

# Configuration creation (user-facing API)
from kopy.builder import create_config
from kopy.config import KopyConfig
from kopy.env import create_config_from_env, skip_common_junk

# Core engine
from kopy.filters import should_exclude
from kopy.copier import TransferCounters, copy_dir, copy_file
from kopy.selector import copy_modified_within
from kopy.archive import (
    compress_directory,
    compress_files,
    extract_tar_gz,
    extract_zip,
)

# Command-level operations
from kopy.backup import (
    archive_directory,
    archive_file,
    backup_directory,
    backup_file,
    backup_modified,
    restore_directory,
    restore_file,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "create_config",
    "create_config_from_env",
    "skip_common_junk",
    "KopyConfig",
    # Core engine
    "should_exclude",
    "TransferCounters",
    "copy_dir",
    "copy_file",
    "copy_modified_within",
    "compress_directory",
    "compress_files",
    "extract_tar_gz",
    "extract_zip",
    # Operations
    "backup_directory",
    "backup_file",
    "backup_modified",
    "archive_directory",
    "archive_file",
    "restore_directory",
    "restore_file",
]
