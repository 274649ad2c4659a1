# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download, verify, extract, and atomically place a release binary."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Collection
from pathlib import Path
from typing import Final

import requests

from .checksums import digests_match, file_sha256
from .config import DEFAULT_SMOKE_TEST_TIMEOUT, DEFAULT_TIMEOUT, DEFAULT_VERSION_FLAG, InstallerSettings
from .download import download_to_file
from .errors import ChecksumMismatch
from .extract import extract_binary
from .models import ArtifactEntry, InstallResult
from .smoke import smoke_test

LOGGER = logging.getLogger(__name__)

STAGING_PREFIX: Final[str] = ".a8e-staging-"
EXTRACT_DIRNAME: Final[str] = "extract"


class Installer:
    """Install a resolved :class:`ArtifactEntry` into a destination directory.

    All intermediate files live in a staging directory created inside the
    destination so the final :func:`os.replace` is a same-filesystem rename.
    The staging directory is removed on every exit path, and a failed attempt
    never touches ``<destination>/<binary>``.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        allowed_hosts: Collection[str] = (),
        run_smoke_test: bool = True,
        smoke_test_timeout: float = DEFAULT_SMOKE_TEST_TIMEOUT,
        version_flag: str = DEFAULT_VERSION_FLAG,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._allowed_hosts = tuple(allowed_hosts)
        self._run_smoke_test = run_smoke_test
        self._smoke_test_timeout = smoke_test_timeout
        self._version_flag = version_flag
        self._session = session

    @classmethod
    def from_settings(
        cls,
        settings: InstallerSettings,
        *,
        allowed_hosts: Collection[str] = (),
        session: requests.Session | None = None,
    ) -> Installer:
        """Build an installer from validated settings."""

        return cls(
            timeout=settings.timeout,
            allowed_hosts=allowed_hosts,
            run_smoke_test=settings.smoke_test,
            smoke_test_timeout=settings.smoke_test_timeout,
            version_flag=settings.version_flag,
            session=session,
        )

    def install(self, entry: ArtifactEntry, destination_dir: Path) -> InstallResult:
        """Install ``entry`` into ``destination_dir``.

        Args:
            entry: Resolved artifact to fetch.
            destination_dir: Directory receiving ``entry.binary_name``.

        Returns:
            InstallResult: Successful result carrying the final binary path.

        Raises:
            DownloadError: If the archive cannot be fetched (retryable).
            DownloadTimeout: If the fetch exceeds the timeout (retryable).
            ChecksumMismatch: If the archive digest differs from the entry.
            ExtractionError: If the archive is malformed or lacks the binary.
            SmokeTestFailed: If the staged binary does not report the version.
        """

        target_dir = destination_dir.expanduser().resolve()
        target_dir.mkdir(parents=True, exist_ok=True)
        final_path = target_dir / entry.binary_name

        with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, dir=target_dir) as staging:
            staging_dir = Path(staging)
            archive_path = staging_dir / entry.filename
            download_to_file(
                entry.url,
                archive_path,
                timeout=self._timeout,
                allowed_hosts=self._allowed_hosts,
                session=self._session,
            )
            verify_archive(archive_path, entry)

            extract_dir = staging_dir / EXTRACT_DIRNAME
            extract_dir.mkdir()
            staged_binary = extract_binary(archive_path, entry.binary_name, extract_dir)
            make_executable(staged_binary)

            if self._run_smoke_test:
                smoke_test(
                    staged_binary,
                    entry.version,
                    version_flag=self._version_flag,
                    timeout=self._smoke_test_timeout,
                )

            os.replace(staged_binary, final_path)
            LOGGER.debug("Placed %s at %s", entry.binary_name, final_path)

        return InstallResult.installed(final_path, entry.version)


def verify_archive(archive_path: Path, entry: ArtifactEntry) -> str:
    """Return the archive digest after confirming it matches ``entry``.

    Raises:
        ChecksumMismatch: If the digests differ. This is never retried.
    """

    actual = file_sha256(archive_path)
    LOGGER.debug("sha256(%s) = %s", archive_path.name, actual)
    if not digests_match(entry.expected_checksum, actual):
        raise ChecksumMismatch(entry.url, entry.expected_checksum, actual)
    return actual


def make_executable(path: Path) -> None:
    """Add execute permission for user, group, and other on ``path``."""

    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


__all__ = ["Installer", "make_executable", "verify_archive"]
