# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Backup Engine - Copy, archive and restore operations.
"""

from kopy.backup.manager import (
    backup_directory,
    backup_file,
    backup_modified,
    archive_directory,
    archive_file,
    operation_context,
)

from kopy.backup.restore import (
    restore_directory,
    restore_file,
)

__all__ = [
    # Manager
    "backup_directory",
    "backup_file",
    "backup_modified",
    "archive_directory",
    "archive_file",
    "operation_context",
    # Restore
    "restore_directory",
    "restore_file",
]
