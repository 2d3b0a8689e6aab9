# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Human-friendly error message helpers for kopy.

These helpers centralize wording for common configuration errors so that
the CLI and the env loader present consistent, actionable messages.
"""


def explain_invalid_mod_days_env(value: str | None) -> str:
    """
    Explain that KOPY_MOD_DAYS is invalid.
    """

    return (
        f"Invalid KOPY_MOD_DAYS value: {value!r}. "
        "It must be zero or a negative integer (e.g. -7 copies files modified in the last 7 days)."
    )


def explain_positive_window_days(days: int) -> str:
    """
    Explain that a modified-time window must look back, not forward.
    """

    return (
        f"Invalid day window: {days}. "
        "Use a negative number of days to look back from now, or 0 for files modified this second."
    )


def explain_invalid_bool_env(name: str, value: str | None) -> str:
    """
    Explain that a boolean environment variable could not be parsed.
    """

    return (
        f"Invalid {name} value: {value!r}. "
        "Expected one of: true/false, yes/no, 1/0, on/off."
    )


def explain_invalid_positive_int_env(name: str, value: str | None, minimum: int) -> str:
    """
    Explain that a numeric log setting is out of range or not a number.
    """

    return (
        f"Invalid {name} value: {value!r}. "
        f"It must be an integer >= {minimum}."
    )


def explain_missing_archive_suffix(archive_path: str, suffix: str) -> str:
    """
    Explain that an archive path does not carry the expected suffix.
    """

    return (
        f"Cannot derive an extraction folder from {archive_path!r}. "
        f"The archive name must end with {suffix!r}."
    )
