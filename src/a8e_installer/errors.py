# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised while resolving and installing release artifacts."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Enumerate failure categories reported back to the host."""

    UNSUPPORTED_PLATFORM = "unsupported_platform"
    INVALID_VERSION = "invalid_version"
    UNKNOWN_RELEASE = "unknown_release"
    DOWNLOAD_ERROR = "download_error"
    TIMEOUT = "timeout"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    EXTRACTION_ERROR = "extraction_error"
    SMOKE_TEST_FAILED = "smoke_test_failed"


RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset({ErrorKind.DOWNLOAD_ERROR, ErrorKind.TIMEOUT})


class ConfigError(Exception):
    """Raised when a manifest or settings file is invalid."""


class InstallerError(RuntimeError):
    """Base class for every failure surfaced by the resolver and installer."""

    kind: ClassVar[ErrorKind]

    @property
    def retryable(self) -> bool:
        """Return ``True`` when the caller may retry the same install attempt.

        Returns:
            bool: ``True`` for transient network failures only.
        """

        return self.kind in RETRYABLE_KINDS


class UnsupportedPlatform(InstallerError):
    """Raised when no artifact is published for the requested platform."""

    kind = ErrorKind.UNSUPPORTED_PLATFORM


class InvalidVersion(InstallerError, ValueError):
    """Raised when the requested version is empty or not a semantic version."""

    kind = ErrorKind.INVALID_VERSION


class UnknownRelease(InstallerError):
    """Raised when the manifest holds no checksum for a version/platform pair."""

    kind = ErrorKind.UNKNOWN_RELEASE


class DownloadError(InstallerError):
    """Raised when the artifact cannot be fetched."""

    kind = ErrorKind.DOWNLOAD_ERROR


class DownloadTimeout(DownloadError):
    """Raised when the fetch exceeds the caller-supplied timeout."""

    kind = ErrorKind.TIMEOUT


class ChecksumMismatch(InstallerError):
    """Raised when the downloaded bytes do not match the published digest."""

    kind = ErrorKind.CHECKSUM_MISMATCH

    def __init__(self, url: str, expected: str, actual: str) -> None:
        super().__init__(f"Checksum mismatch for {url}: expected {expected}, got {actual}")
        self.url = url
        self.expected = expected
        self.actual = actual


class ExtractionError(InstallerError):
    """Raised when the archive is malformed or lacks the expected binary."""

    kind = ErrorKind.EXTRACTION_ERROR


class SmokeTestFailed(InstallerError):
    """Raised when the installed binary does not report the requested version."""

    kind = ErrorKind.SMOKE_TEST_FAILED


__all__ = [
    "ChecksumMismatch",
    "ConfigError",
    "DownloadError",
    "DownloadTimeout",
    "ErrorKind",
    "ExtractionError",
    "InstallerError",
    "InvalidVersion",
    "RETRYABLE_KINDS",
    "SmokeTestFailed",
    "UnknownRelease",
    "UnsupportedPlatform",
]
