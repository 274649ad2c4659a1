# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects exchanged between the resolver, installer, and host."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import RETRYABLE_KINDS, ErrorKind, InstallerError
from .platform import PlatformKey


@dataclass(frozen=True, slots=True)
class ArtifactEntry:
    """Download location and expected digest for one platform and version."""

    platform_key: PlatformKey
    version: str
    url: str
    expected_checksum: str
    binary_name: str

    @property
    def filename(self) -> str:
        """Return the archive filename component of :attr:`url`."""

        return self.url.rstrip("/").split("/")[-1]


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of a single install attempt reported back to the host.

    Attributes:
        installed_path: Final binary path, or the path that would have been used.
        version: Version requested by the caller.
        success: ``True`` when the binary was placed and passed the smoke test.
        error_kind: Failure category when ``success`` is ``False``.
        message: Human-readable failure description.
    """

    installed_path: Path | None
    version: str
    success: bool
    error_kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def installed(cls, path: Path, version: str) -> InstallResult:
        """Return a successful result for ``path``."""

        return cls(installed_path=path, version=version, success=True)

    @classmethod
    def failed(cls, error: InstallerError, *, version: str, path: Path | None = None) -> InstallResult:
        """Return a failed result describing ``error``."""

        return cls(
            installed_path=path,
            version=version,
            success=False,
            error_kind=error.kind,
            message=str(error),
        )

    @property
    def retryable(self) -> bool:
        """Return ``True`` when the failure was transient."""

        return self.error_kind in RETRYABLE_KINDS


__all__ = ["ArtifactEntry", "InstallResult"]
