# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Kopy Exceptions - Custom exceptions for the kopy package.
"""


class KopyError(Exception):
    """Base exception for all kopy errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(KopyError):
    """Raised when configuration is invalid."""

    pass


class CopyError(KopyError):
    """Raised when a copy operation cannot start or complete."""

    pass


class ArchiveError(KopyError):
    """Raised when building a tar.gz or zip archive fails."""

    pass


class ExtractError(KopyError):
    """Raised when an archive cannot be read or restored."""

    pass
