# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Configuration - Immutable configuration data structures.

All configuration is frozen (immutable) after creation and is passed
explicitly into every backup operation. Nothing in kopy reads settings
from module-level state.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


DEFAULT_LOG_DIR = Path("logs")
DEFAULT_LOG_FILE_PREFIX = "kopy_log_"


def _validate_ignore_patterns(patterns: List[str]) -> bool:
    """Ignore patterns must be a list of strings (blank entries are allowed and ignored)."""
    if not isinstance(patterns, (list, tuple)):
        return False
    return all(isinstance(p, str) for p in patterns)


@dataclass(frozen=True)
class KopyConfig:
    """
    Immutable configuration for kopy backup runs.

    The config carries everything the copy, archive and extract operations
    need from the outside world: the ignore list, the default modified-time
    window and the logging switches.
    """

    # Substrings of paths to skip, e.g. [".db", "node_modules"]
    ignore_patterns: List[str] = field(default_factory=list)

    # Default window for copymd; must be <= 0 (look back N days)
    copy_mod_files_num_days: int = -1

    # Report every copied/extracted entry to the log
    log_copied_file: bool = True

    # Where rotating log files are written
    log_dir: Path = field(default_factory=lambda: DEFAULT_LOG_DIR)

    # Log file name prefix; the date (MM-DD-YYYY) and ".log" are appended
    log_file_prefix: str = DEFAULT_LOG_FILE_PREFIX

    # Rotate the log file once it reaches this size
    max_log_file_size_mb: int = 100

    # Delete log files older than this many days (0 keeps them forever)
    max_log_age_days: int = 0

    # Number of rotated log files kept next to the active one
    max_log_backups: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after creation."""
        errors: List[str] = []

        if not _validate_ignore_patterns(self.ignore_patterns):
            errors.append("ignore_patterns must be a list of strings")

        if self.copy_mod_files_num_days > 0:
            errors.append(
                f"copy_mod_files_num_days must be <= 0, got {self.copy_mod_files_num_days}"
            )

        if self.max_log_file_size_mb < 1:
            errors.append(f"max_log_file_size_mb must be >= 1, got {self.max_log_file_size_mb}")

        if self.max_log_age_days < 0:
            errors.append(f"max_log_age_days must be >= 0, got {self.max_log_age_days}")

        if self.max_log_backups < 1:
            errors.append(f"max_log_backups must be >= 1, got {self.max_log_backups}")

        if not self.log_file_prefix:
            errors.append("log_file_prefix must not be empty")

        # Raise all errors at once
        if errors:
            from kopy.exceptions import ConfigurationError

            raise ConfigurationError(
                "Configuration validation failed",
                details={"errors": errors},
            )

    def with_updates(self, **kwargs) -> "KopyConfig":
        """
        Create a new config with updated values.

        Since the config is frozen, this creates a new instance.
        """
        from dataclasses import asdict

        current = asdict(self)
        current.update(kwargs)
        return KopyConfig(**current)
