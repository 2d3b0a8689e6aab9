# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Tests for log file setup and log pruning.
"""

import json
import logging
import os
import time
from datetime import datetime
from pathlib import Path

import structlog

from kopy.backup import backup_directory
from kopy.config import KopyConfig
from kopy.logs import LOG_TIME_FORMAT, configure_logging, log_file_path, prune_old_logs

from conftest import make_tree


def _records(path: Path) -> list:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


# ============================================================================
# configure_logging
# ============================================================================

def test_log_file_name_carries_the_date(temp_dir: Path):
    """Log files are named <prefix><MM-DD-YYYY>.log inside log_dir."""
    config = KopyConfig(log_dir=temp_dir, log_file_prefix="gokopy_logs_")

    path = log_file_path(config, today=datetime(2026, 10, 19))

    assert path == temp_dir / "gokopy_logs_10-19-2026.log"


def test_configure_logging_writes_json_events(temp_dir: Path):
    """Events land in the log file as JSON with a formatted log_time."""
    config = KopyConfig(log_dir=temp_dir / "logs")

    path = configure_logging(config)
    structlog.get_logger().info("copied_file", file="a.txt", path="/dst/a.txt")

    (record,) = _records(path)
    assert record["event"] == "copied_file"
    assert record["file"] == "a.txt"
    assert record["level"] == "info"
    datetime.strptime(record["log_time"], LOG_TIME_FORMAT)


def test_configure_logging_respects_level(temp_dir: Path):
    """Events below the configured level are dropped."""
    config = KopyConfig(log_dir=temp_dir / "logs")

    path = configure_logging(config, level=logging.WARNING)
    log = structlog.get_logger()
    log.info("too_quiet")
    log.warning("loud_enough")

    assert [r["event"] for r in _records(path)] == ["loud_enough"]


def test_configure_logging_twice_keeps_one_handler(temp_dir: Path):
    """Reconfiguring replaces the kopy file handler instead of stacking it."""
    config = KopyConfig(log_dir=temp_dir / "logs")

    configure_logging(config)
    configure_logging(config)

    named = [h for h in logging.getLogger().handlers if h.get_name() == "kopy_file"]
    assert len(named) == 1


def test_operation_events_share_one_operation_id(temp_dir: Path):
    """All events of one operation carry the same ULID and command name."""
    src = make_tree(temp_dir / "src", files={"a.txt": b"a"})
    config = KopyConfig(log_dir=temp_dir / "logs")
    path = configure_logging(config)

    backup_directory(src, temp_dir / "dst", config)
    backup_directory(src, temp_dir / "dst2", config)

    records = _records(path)
    ids = [r["operation_id"] for r in records]
    assert {r["command"] for r in records} == {"copydir"}
    assert len(set(ids)) == 2
    assert all(len(i) == 26 for i in ids)
    assert [r["event"] for r in records if r["operation_id"] == ids[0]] == [
        "copydir_started",
        "copied_file",
        "copydir_completed",
    ]


# ============================================================================
# prune_old_logs
# ============================================================================

def _age(path: Path, days: int) -> None:
    ts = time.time() - days * 86400
    os.utime(path, (ts, ts))


def test_prune_old_logs_deletes_only_old_prefixed_files(temp_dir: Path):
    """Old files with the prefix go; new ones and foreign files stay."""
    old = make_tree(temp_dir, files={"kopy_log_01-01-2026.log": b"x" * 10}) / "kopy_log_01-01-2026.log"
    new = temp_dir / "kopy_log_10-19-2026.log"
    new.write_bytes(b"y")
    foreign = temp_dir / "other.log"
    foreign.write_bytes(b"z")
    _age(old, 40)
    _age(foreign, 40)

    deleted, freed = prune_old_logs(temp_dir, 30, prefix="kopy_log_")

    assert (deleted, freed) == (1, 10)
    assert not old.exists()
    assert new.exists()
    assert foreign.exists()


def test_prune_old_logs_dry_run_keeps_files(temp_dir: Path):
    """A dry run only reports."""
    old = temp_dir / "kopy_log_01-01-2026.log"
    old.write_bytes(b"abc")
    _age(old, 90)

    assert prune_old_logs(temp_dir, 30, dry_run=True) == (1, 3)
    assert old.exists()


def test_prune_old_logs_disabled_or_missing_dir(temp_dir: Path):
    """Zero age or a missing directory prunes nothing."""
    assert prune_old_logs(temp_dir, 0) == (0, 0)
    assert prune_old_logs(temp_dir / "missing", 30) == (0, 0)


def test_configure_logging_prunes_when_age_is_set(temp_dir: Path):
    """Old logs are pruned at setup when max_log_age_days > 0."""
    log_dir = temp_dir / "logs"
    log_dir.mkdir()
    stale = log_dir / "kopy_log_01-01-2020.log"
    stale.write_text("{}\n")
    _age(stale, 400)

    configure_logging(KopyConfig(log_dir=log_dir, max_log_age_days=30))

    assert not stale.exists()
