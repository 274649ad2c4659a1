# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map a platform and version onto a single downloadable artifact."""

from __future__ import annotations

import logging

from .checksums import normalize_checksum
from .errors import UnknownRelease
from .manifest import ReleaseManifest, default_manifest
from .models import ArtifactEntry
from .platform import PlatformKey
from .versioning import SEMVER_PATTERN, normalize_version

LOGGER = logging.getLogger(__name__)


class ArtifactResolver:
    """Resolve artifacts from a static, immutable release table."""

    def __init__(self, manifest: ReleaseManifest | None = None) -> None:
        self._manifest = manifest or default_manifest()

    @property
    def manifest(self) -> ReleaseManifest:
        """Return the release table backing this resolver."""

        return self._manifest

    def supported_platforms(self) -> tuple[PlatformKey, ...]:
        """Return every platform with a published artifact."""

        return self._manifest.supported_platforms()

    def resolve(self, platform_key: PlatformKey, version: str, *, checksum: str | None = None) -> ArtifactEntry:
        """Return the unique artifact for ``platform_key`` at ``version``.

        Args:
            platform_key: Target operating system and CPU architecture.
            version: Exact semantic version to install.
            checksum: Optional SHA-256 digest overriding the manifest entry.

        Returns:
            ArtifactEntry: URL with ``version`` substituted and the expected digest.

        Raises:
            InvalidVersion: If ``version`` is not a semantic version.
            UnsupportedPlatform: If no artifact is published for ``platform_key``.
            UnknownRelease: If neither the manifest nor ``checksum`` supplies a digest.
        """

        resolved_version = normalize_version(version)
        url = self._manifest.artifact_url(platform_key, resolved_version)
        if checksum is not None:
            try:
                expected = normalize_checksum(checksum)
            except ValueError as exc:
                raise UnknownRelease(f"Checksum override rejected: {exc}") from exc
        else:
            expected = self._manifest.checksum_for(platform_key, resolved_version)
        LOGGER.debug("Resolved %s %s for %s to %s", self._manifest.name, resolved_version, platform_key, url)
        return ArtifactEntry(
            platform_key=platform_key,
            version=resolved_version,
            url=url,
            expected_checksum=expected,
            binary_name=self._manifest.binary,
        )


__all__ = ["ArtifactResolver", "SEMVER_PATTERN", "normalize_version"]
