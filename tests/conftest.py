# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

import pytest
from support import LINUX_X86, VERSION, build_archive, version_script

from a8e_installer.manifest import ReleaseManifest
from a8e_installer.models import ArtifactEntry
from a8e_installer.resolver import ArtifactResolver


@pytest.fixture
def release_archive() -> bytes:
    """Return a well-formed ``.tar.bz2`` release for :data:`VERSION`."""

    return build_archive({"a8e": version_script(VERSION)})


@pytest.fixture
def make_entry() -> Callable[[bytes], ArtifactEntry]:
    """Return a factory resolving linux/x86_64 with the digest of ``payload``."""

    def factory(payload: bytes, *, version: str = VERSION) -> ArtifactEntry:
        digest = hashlib.sha256(payload).hexdigest()
        return ArtifactResolver().resolve(LINUX_X86, version, checksum=digest)

    return factory


@pytest.fixture
def published_manifest(release_archive: bytes) -> ReleaseManifest:
    """Return the default manifest with the fixture archive published for every platform."""

    digest = hashlib.sha256(release_archive).hexdigest()
    manifest = ReleaseManifest()
    return manifest.with_checksums(VERSION, dict.fromkeys(manifest.supported_platforms(), digest))


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Return an empty installation directory."""

    path = tmp_path / "bin"
    path.mkdir()
    return path
