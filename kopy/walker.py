# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Depth-first tree walk with ignore filtering.

Yields the root first, then each child in name order, descending into a
directory right after yielding it. Excluded entries are not yielded and
excluded directories are not descended into. Symlinks are reported as
non-directories and never followed.
"""

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, NamedTuple

from kopy.filters import should_exclude

OnWalkError = Callable[[Path, OSError], None]


class TreeEntry(NamedTuple):
    """One walked filesystem entry."""

    path: Path
    is_dir: bool


def iter_tree(
    root: str | os.PathLike,
    patterns: Iterable[str] = (),
    on_error: OnWalkError | None = None,
) -> Iterator[TreeEntry]:
    """
    Walk a tree depth-first, skipping ignored paths.

    Args:
        root: Directory to walk; its path is kept as given, not resolved
        patterns: Ignore substrings matched against each full path
        on_error: Called with (directory, error) when a directory cannot be
            listed; the subtree is then skipped. Without a callback the
            error propagates.

    Yields:
        TreeEntry for every non-excluded entry, the root included
    """
    patterns = list(patterns)
    root_path = Path(root)
    if should_exclude(root_path, patterns):
        return

    yield TreeEntry(root_path, root_path.is_dir() and not root_path.is_symlink())
    if root_path.is_dir() and not root_path.is_symlink():
        yield from _walk_children(root_path, patterns, on_error)


def _walk_children(
    directory: Path,
    patterns: list,
    on_error: OnWalkError | None,
) -> Iterator[TreeEntry]:
    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        if on_error is None:
            raise
        on_error(directory, exc)
        return

    for child in children:
        child_path = directory / child.name
        if should_exclude(child_path, patterns):
            continue
        try:
            is_dir = child.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        yield TreeEntry(child_path, is_dir)
        if is_dir:
            yield from _walk_children(child_path, patterns, on_error)
