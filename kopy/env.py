# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Environment-based configuration helpers and profiles.

These helpers are small, convenient wrappers around create_config() and
KopyConfig.with_updates(). They make it easy to:

- Build a configuration from environment variables
- Apply ready-made ignore profiles
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping

from kopy.builder import create_config
from kopy.config import DEFAULT_LOG_DIR, DEFAULT_LOG_FILE_PREFIX, KopyConfig
from kopy.errors import (
    explain_invalid_bool_env,
    explain_invalid_mod_days_env,
    explain_invalid_positive_int_env,
)
from kopy.exceptions import ConfigurationError
from kopy.filters import normalize_patterns

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Thumbnail caches, local databases and OS metadata files
COMMON_JUNK_PATTERNS = (".thumb", ".db", "Thumbs.db", ".DS_Store", "desktop.ini")


def _parse_mod_days(value: str | None) -> int:
    if not value:
        return -1
    try:
        days = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(explain_invalid_mod_days_env(value)) from exc
    if days > 0:
        raise ConfigurationError(explain_invalid_mod_days_env(value))
    return days


def _parse_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(explain_invalid_bool_env(name, value))


def _parse_int(name: str, value: str | None, default: int, minimum: int) -> int:
    if not value:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(explain_invalid_positive_int_env(name, value, minimum)) from exc
    if number < minimum:
        raise ConfigurationError(explain_invalid_positive_int_env(name, value, minimum))
    return number


def _parse_ignore_patterns(value: str | None) -> List[str]:
    return normalize_patterns(value)


def create_config_from_env(environ: Mapping[str, str] | None = None) -> KopyConfig:
    """
    Create a KopyConfig from environment variables.

    Optional environment variables:
        - KOPY_IGNORE: Comma-separated substrings, e.g. ".db, .thumb, node_modules"
        - KOPY_MOD_DAYS: Default copymd window, <= 0 (default: -1)
        - KOPY_LOG_COPIED_FILE: Report each copied file (default: true)
        - KOPY_LOG_DIR: Directory for log files (default: ./logs)
        - KOPY_LOG_FILE_PREFIX: Log file name prefix (default: kopy_log_)
        - KOPY_MAX_LOG_FILE_SIZE_MB: Rotation size in MB (default: 100)
        - KOPY_MAX_LOG_AGE_DAYS: Delete logs older than N days, 0 keeps all (default: 0)
        - KOPY_MAX_LOG_BACKUPS: Rotated log files kept (default: 10)

    Args:
        environ: Mapping to read from instead of os.environ (handy in tests)
    """
    env = os.environ if environ is None else environ

    log_dir_env = env.get("KOPY_LOG_DIR")

    return create_config(
        ignore_patterns=_parse_ignore_patterns(env.get("KOPY_IGNORE")),
        copy_mod_files_num_days=_parse_mod_days(env.get("KOPY_MOD_DAYS")),
        log_copied_file=_parse_bool(
            "KOPY_LOG_COPIED_FILE", env.get("KOPY_LOG_COPIED_FILE"), True
        ),
        log_dir=Path(log_dir_env) if log_dir_env else DEFAULT_LOG_DIR,
        log_file_prefix=env.get("KOPY_LOG_FILE_PREFIX") or DEFAULT_LOG_FILE_PREFIX,
        max_log_file_size_mb=_parse_int(
            "KOPY_MAX_LOG_FILE_SIZE_MB", env.get("KOPY_MAX_LOG_FILE_SIZE_MB"), 100, 1
        ),
        max_log_age_days=_parse_int(
            "KOPY_MAX_LOG_AGE_DAYS", env.get("KOPY_MAX_LOG_AGE_DAYS"), 0, 0
        ),
        max_log_backups=_parse_int(
            "KOPY_MAX_LOG_BACKUPS", env.get("KOPY_MAX_LOG_BACKUPS"), 10, 1
        ),
    )


# ============================================================================
# Profiles
# ============================================================================

def skip_common_junk(config: KopyConfig) -> KopyConfig:
    """
    Add the usual noise to the ignore list.

    - Thumbnail caches (.thumb) and local databases (.db)
    - OS metadata files (Thumbs.db, .DS_Store, desktop.ini)
    """

    patterns = list(config.ignore_patterns)
    for p in COMMON_JUNK_PATTERNS:
        if p not in patterns:
            patterns.append(p)

    return config.with_updates(ignore_patterns=patterns)
