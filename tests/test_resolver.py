# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for artifact resolution."""

from __future__ import annotations

import pytest

from a8e_installer.errors import InvalidVersion, UnknownRelease, UnsupportedPlatform
from a8e_installer.manifest import ReleaseManifest
from a8e_installer.platform import PlatformKey
from a8e_installer.resolver import ArtifactResolver, normalize_version

DIGEST = "ab" * 32


def test_linux_x86_64_url_matches_release_layout() -> None:
    entry = ArtifactResolver().resolve(PlatformKey.parse("linux/x86_64"), "2.3.1", checksum=DIGEST)

    assert entry.url == "https://github.com/a8e-ai/a8e/releases/download/v2.3.1/a8e-x86_64-unknown-linux-gnu.tar.bz2"
    assert entry.url.endswith("a8e-x86_64-unknown-linux-gnu.tar.bz2")
    assert entry.filename == "a8e-x86_64-unknown-linux-gnu.tar.bz2"
    assert entry.binary_name == "a8e"
    assert entry.expected_checksum == DIGEST


@pytest.mark.parametrize("version", ["0.1.0", "2.3.1", "10.0.0-rc.1"])
def test_url_contains_version_exactly_once(version: str) -> None:
    resolver = ArtifactResolver()

    for key in resolver.supported_platforms():
        entry = resolver.resolve(key, version, checksum=DIGEST)
        assert entry.url.count(version) == 1, entry.url
        assert entry.version == version


def test_every_platform_has_distinct_artifact() -> None:
    resolver = ArtifactResolver()
    urls = {resolver.resolve(key, "1.0.0", checksum=DIGEST).url for key in resolver.supported_platforms()}

    assert len(urls) == 4


def test_unsupported_platform_fails() -> None:
    manifest = ReleaseManifest(targets={"linux/x86_64": "x86_64-unknown-linux-gnu"})

    with pytest.raises(UnsupportedPlatform):
        ArtifactResolver(manifest).resolve(PlatformKey.parse("macos/arm64"), "1.0.0", checksum=DIGEST)


def test_checksum_comes_from_manifest() -> None:
    key = PlatformKey.parse("linux/arm64")
    manifest = ReleaseManifest().with_checksums("1.2.0", {key: DIGEST.upper()})

    entry = ArtifactResolver(manifest).resolve(key, "v1.2.0")

    assert entry.expected_checksum == DIGEST
    assert entry.version == "1.2.0"


def test_missing_checksum_is_unknown_release() -> None:
    with pytest.raises(UnknownRelease):
        ArtifactResolver().resolve(PlatformKey.parse("linux/arm64"), "9.9.9")


def test_malformed_checksum_override_is_rejected() -> None:
    with pytest.raises(UnknownRelease, match="Checksum override"):
        ArtifactResolver().resolve(PlatformKey.parse("linux/arm64"), "1.0.0", checksum="not-a-digest")


@pytest.mark.parametrize("version", ["", "latest", "1.2", "1.2.3/../../x", "v"])
def test_invalid_versions_are_rejected(version: str) -> None:
    with pytest.raises(InvalidVersion):
        normalize_version(version)


def test_normalize_version_strips_prefix() -> None:
    assert normalize_version(" v2.3.1 ") == "2.3.1"
