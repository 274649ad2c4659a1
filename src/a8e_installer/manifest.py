# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static release table describing where artifacts live and what they hash to."""

from __future__ import annotations

import re
from collections.abc import Mapping
from string import Formatter
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .checksums import normalize_checksum, parse_checksum_file
from .errors import UnknownRelease, UnsupportedPlatform
from .platform import PlatformKey
from .versioning import normalize_version, version_sort_key

DEFAULT_BASE_URL: Final[str] = "https://github.com/a8e-ai/a8e/releases/download"
DEFAULT_TEMPLATE: Final[str] = "{base_url}/v{version}/{binary}-{triple}.tar.bz2"
DEFAULT_ALLOWED_HOSTS: Final[tuple[str, ...]] = ("github.com", "objects.githubusercontent.com")
DEFAULT_TARGETS: Final[dict[str, str]] = {
    "macos/arm64": "aarch64-apple-darwin",
    "macos/x86_64": "x86_64-apple-darwin",
    "linux/arm64": "aarch64-unknown-linux-gnu",
    "linux/x86_64": "x86_64-unknown-linux-gnu",
}
TEMPLATE_FIELDS: Final[frozenset[str]] = frozenset({"base_url", "version", "binary", "triple"})
_TRIPLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_.-]+$")


def _platform_token(raw: str) -> str:
    try:
        return str(PlatformKey.parse(raw))
    except UnsupportedPlatform as exc:
        raise ValueError(str(exc)) from exc


class ReleaseManifest(BaseModel):
    """Describe a project's published binaries.

    ``targets`` maps ``"os/arch"`` tokens to the target triple embedded in
    artifact names. ``checksums`` maps a version to per-platform SHA-256
    digests; a published digest never changes for a given URL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "a8e"
    description: str = "Articulate (a8e): The sovereign AI operator for your terminal"
    homepage: str = "https://github.com/a8e-ai/a8e"
    license: str = "Apache-2.0"
    binary: str = "a8e"
    base_url: str = DEFAULT_BASE_URL
    template: str = DEFAULT_TEMPLATE
    allowed_hosts: tuple[str, ...] = DEFAULT_ALLOWED_HOSTS
    targets: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TARGETS))
    checksums: dict[str, dict[str, str]] = Field(default_factory=dict)

    @field_validator("name", "binary")
    @classmethod
    def _require_identifier(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped or "/" in stripped:
            raise ValueError("must be a non-empty name without path separators")
        return stripped

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("template")
    @classmethod
    def _validate_template(cls, value: str) -> str:
        fields = [field for _, field, _, _ in Formatter().parse(value) if field is not None]
        unknown = sorted(set(fields) - TEMPLATE_FIELDS)
        if unknown:
            raise ValueError(f"unknown template placeholders: {', '.join(unknown)}")
        if fields.count("version") != 1:
            raise ValueError("template must reference {version} exactly once")
        return value

    @field_validator("allowed_hosts")
    @classmethod
    def _lower_hosts(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(host.strip().lower() for host in value if host.strip())

    @field_validator("targets")
    @classmethod
    def _normalize_targets(cls, value: dict[str, str]) -> dict[str, str]:
        normalized: dict[str, str] = {}
        for raw_key, triple in value.items():
            token = _platform_token(raw_key)
            if token in normalized:
                raise ValueError(f"duplicate target for platform {token}")
            if not _TRIPLE_PATTERN.match(triple):
                raise ValueError(f"invalid target triple {triple!r}")
            normalized[token] = triple
        return normalized

    @field_validator("checksums")
    @classmethod
    def _normalize_checksums(cls, value: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
        normalized: dict[str, dict[str, str]] = {}
        for version, per_platform in value.items():
            normalized[normalize_version(version)] = {
                _platform_token(raw_key): normalize_checksum(digest) for raw_key, digest in per_platform.items()
            }
        return normalized

    def supported_platforms(self) -> tuple[PlatformKey, ...]:
        """Return the platforms with a published target, in declaration order."""

        return tuple(PlatformKey.parse(token) for token in self.targets)

    def target_for(self, key: PlatformKey) -> str:
        """Return the target triple for ``key``.

        Raises:
            UnsupportedPlatform: If no artifact is published for ``key``.
        """

        triple = self.targets.get(str(key))
        if triple is None:
            raise UnsupportedPlatform(f"No {self.name} artifact is published for {key}")
        return triple

    def artifact_url(self, key: PlatformKey, version: str) -> str:
        """Render the download URL for ``key`` at ``version``."""

        return self.template.format(
            base_url=self.base_url,
            version=version,
            binary=self.binary,
            triple=self.target_for(key),
        )

    def checksum_for(self, key: PlatformKey, version: str) -> str:
        """Return the published digest for ``key`` at ``version``.

        Raises:
            UnknownRelease: If no digest was published for the pair.
            InvalidVersion: If ``version`` is not a semantic version.
        """

        digest = self.checksums.get(normalize_version(version), {}).get(str(key))
        if digest is None:
            raise UnknownRelease(f"No published checksum for {self.name} {version} on {key}")
        return digest

    def known_versions(self) -> tuple[str, ...]:
        """Return versions with published checksums, newest first."""

        return tuple(sorted(self.checksums, key=version_sort_key, reverse=True))

    def with_checksums(self, version: str, digests: Mapping[PlatformKey, str]) -> ReleaseManifest:
        """Return a copy with ``digests`` recorded for ``version``."""

        merged = {release: dict(per_platform) for release, per_platform in self.checksums.items()}
        release = merged.setdefault(version, {})
        for key, digest in digests.items():
            release[str(key)] = digest
        return ReleaseManifest.model_validate({**self.model_dump(), "checksums": merged})

    def with_checksum_file(self, version: str, text: str) -> ReleaseManifest:
        """Return a copy populated from a ``sha256sum``-style file for ``version``.

        Filenames are matched against the artifact names the template yields
        for each supported platform; unrelated lines are ignored.

        Raises:
            UnknownRelease: If the file lists none of this release's artifacts.
        """

        by_filename = parse_checksum_file(text)
        digests: dict[PlatformKey, str] = {}
        for key in self.supported_platforms():
            filename = self.artifact_url(key, version).rstrip("/").split("/")[-1]
            if filename in by_filename:
                digests[key] = by_filename[filename]
        if not digests:
            raise UnknownRelease(f"Checksum file lists no {self.name} {version} artifacts")
        return self.with_checksums(version, digests)


def default_manifest() -> ReleaseManifest:
    """Return the built-in manifest for the ``a8e`` release binaries."""

    return ReleaseManifest()


__all__ = [
    "DEFAULT_ALLOWED_HOSTS",
    "DEFAULT_BASE_URL",
    "DEFAULT_TARGETS",
    "DEFAULT_TEMPLATE",
    "ReleaseManifest",
    "default_manifest",
]
