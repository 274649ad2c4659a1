# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the release manifest model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from a8e_installer.errors import UnknownRelease, UnsupportedPlatform
from a8e_installer.manifest import DEFAULT_TARGETS, ReleaseManifest, default_manifest
from a8e_installer.platform import PlatformKey

DIGEST_A = "a" * 64
DIGEST_B = "b" * 64


def test_default_manifest_publishes_four_targets() -> None:
    manifest = default_manifest()

    assert [str(key) for key in manifest.supported_platforms()] == list(DEFAULT_TARGETS)
    assert manifest.target_for(PlatformKey.parse("macos/arm64")) == "aarch64-apple-darwin"
    assert manifest.allowed_hosts == ("github.com", "objects.githubusercontent.com")


def test_target_keys_are_normalised() -> None:
    manifest = ReleaseManifest(targets={"Darwin/aarch64": "aarch64-apple-darwin"})

    assert manifest.targets == {"macos/arm64": "aarch64-apple-darwin"}
    with pytest.raises(UnsupportedPlatform):
        manifest.target_for(PlatformKey.parse("linux/x86_64"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"template": "{base_url}/{binary}-{triple}.tar.bz2"},
        {"template": "{base_url}/v{version}/{binary}-{version}.tar.bz2"},
        {"template": "{base_url}/v{version}/{unknown}.tar.bz2"},
        {"targets": {"windows/x86_64": "x86_64-pc-windows-msvc"}},
        {"targets": {"linux/amd64": "a", "linux/x86_64": "b"}},
        {"targets": {"linux/x86_64": "bad triple"}},
        {"checksums": {"1.0.0": {"linux/x86_64": "deadbeef"}}},
        {"binary": "bin/a8e"},
        {"unexpected": True},
    ],
)
def test_invalid_manifests_are_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        ReleaseManifest.model_validate(overrides)


def test_checksums_strip_version_prefix_and_normalise_digests() -> None:
    manifest = ReleaseManifest(checksums={"v1.0.0": {"Linux/amd64": f"sha256:{DIGEST_A.upper()}"}})

    assert manifest.checksum_for(PlatformKey.parse("linux/x86_64"), "1.0.0") == DIGEST_A


def test_known_versions_are_newest_first() -> None:
    manifest = ReleaseManifest(
        checksums={
            "1.9.0": {"linux/x86_64": DIGEST_A},
            "1.10.0": {"linux/x86_64": DIGEST_A},
            "1.10.0-rc.1": {"linux/x86_64": DIGEST_A},
        },
    )

    assert manifest.known_versions() == ("1.10.0", "1.10.0-rc.1", "1.9.0")


def test_with_checksums_merges_without_mutating() -> None:
    linux = PlatformKey.parse("linux/x86_64")
    macos = PlatformKey.parse("macos/arm64")
    original = ReleaseManifest(checksums={"1.0.0": {"linux/x86_64": DIGEST_A}})

    updated = original.with_checksums("1.0.0", {macos: DIGEST_B})

    assert updated.checksum_for(linux, "1.0.0") == DIGEST_A
    assert updated.checksum_for(macos, "1.0.0") == DIGEST_B
    with pytest.raises(UnknownRelease):
        original.checksum_for(macos, "1.0.0")


def test_with_checksum_file_matches_artifact_names() -> None:
    text = "\n".join(
        [
            "# release 2.3.1",
            f"{DIGEST_A}  a8e-x86_64-unknown-linux-gnu.tar.bz2",
            f"{DIGEST_B} *dist/a8e-aarch64-apple-darwin.tar.bz2",
            f"{DIGEST_B}  a8e-2.3.1.tar.gz",
            "",
        ],
    )

    manifest = default_manifest().with_checksum_file("2.3.1", text)

    assert manifest.checksum_for(PlatformKey.parse("linux/x86_64"), "2.3.1") == DIGEST_A
    assert manifest.checksum_for(PlatformKey.parse("macos/arm64"), "2.3.1") == DIGEST_B
    with pytest.raises(UnknownRelease):
        manifest.checksum_for(PlatformKey.parse("linux/arm64"), "2.3.1")


def test_with_checksum_file_without_matches_fails() -> None:
    with pytest.raises(UnknownRelease):
        default_manifest().with_checksum_file("2.3.1", f"{DIGEST_A}  something-else.tar.bz2\n")


@pytest.mark.parametrize("key", ["V2.3.1", "v2.3.1", " 2.3.1 "])
def test_checksum_versions_share_resolver_normalisation(key: str) -> None:
    manifest = ReleaseManifest(checksums={key: {"linux/x86_64": DIGEST_A}})

    assert manifest.known_versions() == ("2.3.1",)
    assert manifest.checksum_for(PlatformKey.parse("linux/x86_64"), "V2.3.1") == DIGEST_A


def test_non_semver_checksum_version_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ReleaseManifest(checksums={"${VERSION}": {"linux/x86_64": DIGEST_A}})
