# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Logging - structlog setup with rotating JSON log files.

Every kopy module logs through ``structlog.get_logger()``. This module
routes those events into a size-rotated JSON log file under the
configured log directory, one file per day:

    logs/kopy_log_10-19-2026.log

and prunes old log files according to ``max_log_age_days``.
"""

import logging
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Tuple

import structlog

from kopy.config import KopyConfig

# Event timestamp format, e.g. "Oct-19-2026 03:04:05 PM"
LOG_TIME_FORMAT = "%b-%d-%Y %I:%M:%S %p"

# Date stamp in log file names
LOG_FILE_DATE_FORMAT = "%m-%d-%Y"

_HANDLER_NAME = "kopy_file"

logger = structlog.get_logger()


def log_file_path(config: KopyConfig, today: datetime | None = None) -> Path:
    """Path of the log file for the given day."""
    day = today or datetime.now()
    return config.log_dir / f"{config.log_file_prefix}{day.strftime(LOG_FILE_DATE_FORMAT)}.log"


def configure_logging(config: KopyConfig, level: int = logging.INFO) -> Path:
    """
    Configure structlog to write JSON events to a rotating log file.

    Calling this more than once replaces the previous kopy file handler.

    Args:
        config: Kopy configuration (log directory and rotation limits)
        level: Minimum stdlib log level

    Returns:
        Path to the active log file
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)
    path = log_file_path(config)

    handler = RotatingFileHandler(
        path,
        maxBytes=config.max_log_file_size_mb * 1024 * 1024,
        backupCount=config.max_log_backups,
        encoding="utf-8",
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
        )
    )

    _detach_file_handler()
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt=LOG_TIME_FORMAT, utc=False, key="log_time"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    if config.max_log_age_days > 0:
        prune_old_logs(config.log_dir, config.max_log_age_days, prefix=config.log_file_prefix)

    return path


def prune_old_logs(
    log_dir: Path,
    max_age_days: int,
    prefix: str = "",
    dry_run: bool = False,
) -> Tuple[int, int]:
    """
    Delete log files older than max_age_days.

    Args:
        log_dir: Directory holding the log files
        max_age_days: Maximum age in days; 0 disables pruning
        prefix: Only consider files whose name starts with this prefix
        dry_run: If True, only report what would be deleted

    Returns:
        Tuple of (files_deleted, bytes_freed)
    """
    if max_age_days <= 0 or not log_dir.exists():
        return (0, 0)

    cutoff = datetime.now() - timedelta(days=max_age_days)
    files_deleted = 0
    bytes_freed = 0

    for log_file in log_dir.glob(f"{prefix}*.log*"):
        try:
            stat = log_file.stat()
            if datetime.fromtimestamp(stat.st_mtime) >= cutoff:
                continue

            if not dry_run:
                log_file.unlink()

            files_deleted += 1
            bytes_freed += stat.st_size

        except OSError as e:
            logger.warning(
                "prune_log_file_error",
                path=str(log_file),
                error=str(e),
            )

    if files_deleted:
        logger.info(
            "log_pruning_complete",
            files_deleted=files_deleted,
            bytes_freed=bytes_freed,
            dry_run=dry_run,
        )

    return (files_deleted, bytes_freed)


def reset_logging() -> None:
    """Detach the kopy file handler and restore structlog's defaults."""
    _detach_file_handler()
    structlog.reset_defaults()


def _detach_file_handler() -> None:
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()
