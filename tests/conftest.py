# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Test fixtures for kopy tests.

Provides temporary directories, tree builders, mtime helpers and a test
configuration.
"""

import os
import tempfile
from datetime import datetime, UTC
from pathlib import Path
from typing import Dict, Generator, Iterable, Set, Tuple

import pytest

# Fixed reference time for modified-window tests
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_kopy_logging() -> Generator[None, None, None]:
    """Undo any logging configuration a test performed."""
    yield
    from kopy.logs import reset_logging

    reset_logging()


@pytest.fixture
def test_config(temp_dir: Path):
    """Create a test configuration."""
    from kopy.config import KopyConfig

    return KopyConfig(
        ignore_patterns=[".db"],
        copy_mod_files_num_days=-7,
        log_copied_file=True,
        log_dir=temp_dir / "logs",
    )


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """
    A small source tree:

        src/a.txt
        src/empty/
        src/sub/b.txt
        src/sub/ignore.db
        src/sub/deeper/c.bin
    """
    return make_tree(
        temp_dir / "src",
        files={
            "a.txt": b"alpha",
            "sub/b.txt": b"bravo",
            "sub/ignore.db": b"sqlite",
            "sub/deeper/c.bin": bytes(range(256)) * 4,
        },
        dirs=["empty"],
    )


def make_tree(
    root: Path,
    files: Dict[str, bytes],
    dirs: Iterable[str] = (),
) -> Path:
    """Create root with the given files (relative posix paths) and empty dirs."""
    root.mkdir(parents=True, exist_ok=True)
    for rel in dirs:
        (root / rel).mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


def read_tree(root: Path) -> Tuple[Dict[str, bytes], Set[str]]:
    """Return ({relative file path: content}, {relative dir path}) under root."""
    files: Dict[str, bytes] = {}
    dirs: Set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        for name in dirnames:
            dirs.add((base / name).relative_to(root).as_posix())
        for name in filenames:
            path = base / name
            files[path.relative_to(root).as_posix()] = path.read_bytes()
    return files, dirs


def set_mtime(path: Path, when: datetime) -> None:
    """Set both atime and mtime of path to a whole-second timestamp."""
    ts = int(when.timestamp())
    os.utime(path, (ts, ts))
