# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host-facing entry point combining resolution and installation."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .config import InstallerSettings
from .errors import InstallerError
from .installer import Installer
from .manifest import ReleaseManifest, default_manifest
from .models import InstallResult
from .platform import PlatformKey
from .resolver import ArtifactResolver

LOGGER = logging.getLogger(__name__)


def install_release(
    platform_key: PlatformKey,
    version: str,
    destination_dir: Path,
    *,
    manifest: ReleaseManifest | None = None,
    settings: InstallerSettings | None = None,
    checksum: str | None = None,
    session: requests.Session | None = None,
) -> InstallResult:
    """Resolve and install ``version`` for ``platform_key`` into ``destination_dir``.

    Installer failures are reported through the returned result rather than
    raised, so hosts can branch on :attr:`InstallResult.error_kind` and
    :attr:`InstallResult.retryable`. Unexpected exceptions still propagate.

    Args:
        platform_key: Host operating system and CPU architecture.
        version: Exact version to install.
        destination_dir: Directory receiving the binary.
        manifest: Release table; defaults to the built-in manifest.
        settings: Installer settings; ``destination`` is ignored in favour of ``destination_dir``.
        checksum: Optional SHA-256 digest overriding the manifest.
        session: Optional HTTP session reused for the download.

    Returns:
        InstallResult: Outcome of the attempt.
    """

    release = manifest or default_manifest()
    options = settings or InstallerSettings()
    final_path = destination_dir.expanduser() / release.binary
    try:
        entry = ArtifactResolver(release).resolve(platform_key, version, checksum=checksum)
        installer = Installer.from_settings(options, allowed_hosts=release.allowed_hosts, session=session)
        return installer.install(entry, destination_dir)
    except InstallerError as exc:
        LOGGER.info("Install of %s %s failed (%s): %s", release.name, version, exc.kind.value, exc)
        return InstallResult.failed(exc, version=version, path=final_path)


__all__ = ["install_release"]
