# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve, verify, and install prebuilt a8e release binaries."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("a8e-installer")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

from .errors import (
    ChecksumMismatch,
    ConfigError,
    DownloadError,
    DownloadTimeout,
    ErrorKind,
    ExtractionError,
    InstallerError,
    InvalidVersion,
    SmokeTestFailed,
    UnknownRelease,
    UnsupportedPlatform,
)
from .installer import Installer
from .manifest import ReleaseManifest, default_manifest
from .models import ArtifactEntry, InstallResult
from .platform import CpuArchitecture, OperatingSystem, PlatformKey
from .resolver import ArtifactResolver
from .service import install_release

__all__ = [
    "ArtifactEntry",
    "ArtifactResolver",
    "ChecksumMismatch",
    "ConfigError",
    "CpuArchitecture",
    "DownloadError",
    "DownloadTimeout",
    "ErrorKind",
    "ExtractionError",
    "InstallResult",
    "Installer",
    "InstallerError",
    "InvalidVersion",
    "OperatingSystem",
    "PlatformKey",
    "ReleaseManifest",
    "SmokeTestFailed",
    "UnknownRelease",
    "UnsupportedPlatform",
    "__version__",
    "default_manifest",
    "install_release",
]
