# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Path Filter - Substring-based exclusion of files and folders.

A path is excluded when any ignore pattern occurs anywhere in it. Matching
is plain, case-sensitive substring search: ".db" excludes "notes.db" and
also everything under a folder called "my.db.d".
"""

import os
from typing import Iterable, List


def normalize_patterns(raw: str | Iterable[str] | None) -> List[str]:
    """
    Turn configured ignore patterns into a clean pattern list.

    Accepts either a comma-delimited string (".db, .thumb") or an iterable
    of strings. Patterns are trimmed and blank ones are dropped, because an
    empty substring would match every path.

    Args:
        raw: Comma-delimited string, iterable of patterns, or None

    Returns:
        Ordered list of non-empty, trimmed patterns
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [p.strip() for p in raw if p and p.strip()]


def should_exclude(path: str | os.PathLike, patterns: Iterable[str]) -> bool:
    """
    Check whether a path matches any ignore pattern.

    Args:
        path: File or folder path as walked (absolute or as given)
        patterns: Ignore substrings; blank entries never match

    Returns:
        True if the path should be skipped
    """
    text = os.fspath(path)
    for pattern in patterns:
        needle = pattern.strip()
        if needle and needle in text:
            return True
    return False
