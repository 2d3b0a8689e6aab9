# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Builder - Functional builder pattern for configuration.

This module provides pure functions for building KopyConfig objects.
Each function takes a config dict and returns a new dict with the
modification applied (immutable updates).
"""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List

from kopy.config import DEFAULT_LOG_DIR, DEFAULT_LOG_FILE_PREFIX, KopyConfig
from kopy.filters import normalize_patterns


# Type alias for builder functions
ConfigDict = Dict[str, Any]
BuilderFunc = Callable[[ConfigDict], ConfigDict]


def create_empty_config() -> ConfigDict:
    """
    Create an initial configuration dictionary.

    Returns:
        Dict with default values for all configuration fields
    """
    return {
        "ignore_patterns": [],
        "copy_mod_files_num_days": -1,
        "log_copied_file": True,
        "log_dir": DEFAULT_LOG_DIR,
        "log_file_prefix": DEFAULT_LOG_FILE_PREFIX,
        "max_log_file_size_mb": 100,
        "max_log_age_days": 0,
        "max_log_backups": 10,
    }


def ignore(config: ConfigDict, patterns: str | Iterable[str]) -> ConfigDict:
    """
    Add ignore patterns (file extensions or folder-name fragments).

    Args:
        config: Current configuration dictionary
        patterns: Comma-delimited string or list, e.g. ".db, .thumb"

    Returns:
        New configuration dictionary with the patterns appended
    """
    new_patterns = list(config["ignore_patterns"])
    for pattern in normalize_patterns(patterns):
        if pattern not in new_patterns:
            new_patterns.append(pattern)
    return {**config, "ignore_patterns": new_patterns}


def with_ignore_patterns(config: ConfigDict, patterns: str | Iterable[str]) -> ConfigDict:
    """
    Replace the ignore list entirely.

    Args:
        config: Current configuration dictionary
        patterns: Comma-delimited string or list

    Returns:
        New configuration dictionary with the ignore list replaced
    """
    return {**config, "ignore_patterns": normalize_patterns(patterns)}


def copy_modified_within_days(config: ConfigDict, days: int) -> ConfigDict:
    """
    Set the default look-back window used by copymd.

    Positive values are accepted and turned into a look-back, so
    ``copy_modified_within_days(c, 7)`` and ``(c, -7)`` are the same.

    Args:
        config: Current configuration dictionary
        days: Number of days to look back

    Returns:
        New configuration dictionary with the window set
    """
    return {**config, "copy_mod_files_num_days": -abs(days)}


def log_copied_files(config: ConfigDict, enabled: bool = True) -> ConfigDict:
    """
    Enable or disable per-entry "copied_file" / "extracted_file" events.

    Args:
        config: Current configuration dictionary
        enabled: Whether each copied entry is reported

    Returns:
        New configuration dictionary
    """
    return {**config, "log_copied_file": enabled}


def with_log_dir(config: ConfigDict, log_dir: Path | str) -> ConfigDict:
    """
    Set the directory for rotating log files.

    Args:
        config: Current configuration dictionary
        log_dir: Directory path

    Returns:
        New configuration dictionary with log_dir set
    """
    path = Path(log_dir) if isinstance(log_dir, str) else log_dir
    return {**config, "log_dir": path}


def with_log_rotation(
    config: ConfigDict,
    max_size_mb: int | None = None,
    max_age_days: int | None = None,
    max_backups: int | None = None,
) -> ConfigDict:
    """
    Configure log rotation limits.

    Args:
        config: Current configuration dictionary
        max_size_mb: Rotate once the active log reaches this size
        max_age_days: Delete logs older than this (0 keeps everything)
        max_backups: Rotated files kept next to the active log

    Returns:
        New configuration dictionary with rotation settings applied
    """
    updated = dict(config)
    if max_size_mb is not None:
        if max_size_mb < 1:
            raise ValueError(f"max_size_mb must be >= 1, got {max_size_mb}")
        updated["max_log_file_size_mb"] = max_size_mb
    if max_age_days is not None:
        if max_age_days < 0:
            raise ValueError(f"max_age_days must be >= 0, got {max_age_days}")
        updated["max_log_age_days"] = max_age_days
    if max_backups is not None:
        if max_backups < 1:
            raise ValueError(f"max_backups must be >= 1, got {max_backups}")
        updated["max_log_backups"] = max_backups
    return updated


def build_config(config_dict: ConfigDict) -> KopyConfig:
    """
    Validate and build an immutable KopyConfig from a configuration dictionary.

    Args:
        config_dict: Configuration dictionary built using builder functions

    Returns:
        Validated, immutable KopyConfig instance

    Raises:
        ConfigurationError: If validation fails
    """
    return KopyConfig(**config_dict)


def pipe(*funcs: BuilderFunc) -> BuilderFunc:
    """
    Compose multiple builder functions into a single function.

        config = pipe(
            lambda c: ignore(c, ".db, .thumb"),
            lambda c: copy_modified_within_days(c, 7),
        )(create_empty_config())

    Args:
        *funcs: Builder functions to compose

    Returns:
        A single function that applies all functions in sequence
    """

    def composed(config: ConfigDict) -> ConfigDict:
        result = config
        for func in funcs:
            result = func(result)
        return result

    return composed


def build_from_steps(*steps: BuilderFunc) -> KopyConfig:
    """
    Build config by applying a sequence of builder functions.

    This is a convenience function that combines pipe() and build_config().

    Args:
        *steps: Builder functions to apply in sequence

    Returns:
        Validated, immutable KopyConfig instance
    """
    return build_config(pipe(*steps)(create_empty_config()))


def create_config(
    *,
    ignore_patterns: str | List[str] | None = None,
    copy_mod_files_num_days: int = -1,
    log_copied_file: bool = True,
    log_dir: str | Path | None = None,
    **kwargs: Any,
) -> KopyConfig:
    """
    Create kopy configuration from simple parameters.

    This is the recommended user-facing API for creating configurations.

    Args:
        ignore_patterns: Comma-delimited string or list of substrings to skip
        copy_mod_files_num_days: Default copymd window, <= 0 (default: -1)
        log_copied_file: Report each copied entry (default: True)
        log_dir: Directory for log files (default: "./logs")
        **kwargs: Additional configuration options

    Returns:
        Validated, immutable KopyConfig instance

    Example:
        config = create_config(
            ignore_patterns=".db, .thumb, node_modules",
            copy_mod_files_num_days=-7,
        )
    """
    config_dict = create_empty_config()

    if ignore_patterns:
        config_dict = with_ignore_patterns(config_dict, ignore_patterns)

    config_dict["copy_mod_files_num_days"] = copy_mod_files_num_days
    config_dict = log_copied_files(config_dict, log_copied_file)

    if log_dir:
        config_dict = with_log_dir(config_dict, log_dir)

    # Apply any additional kwargs
    for key, value in kwargs.items():
        if key in config_dict:
            config_dict[key] = value

    return build_config(config_dict)
