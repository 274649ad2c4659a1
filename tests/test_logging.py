# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console reporting of install outcomes."""

from __future__ import annotations

from pathlib import Path

import pytest

from a8e_installer.errors import ChecksumMismatch, DownloadError, DownloadTimeout, InstallerError
from a8e_installer.logging import report_result, report_retry, shared_console
from a8e_installer.models import InstallResult


def test_success_names_binary_and_path(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    result = InstallResult.installed(tmp_path / "a8e", "2.3.1")

    report_result(result, name="a8e", use_emoji=False)

    out = capsys.readouterr().out
    assert f"Installed a8e 2.3.1 at {tmp_path / 'a8e'}" in out
    assert "✅" not in out


@pytest.mark.parametrize("error", [DownloadError("offline"), DownloadTimeout("stalled")])
def test_transient_failures_read_as_safe_to_retry(capsys: pytest.CaptureFixture[str], error: InstallerError) -> None:
    report_result(InstallResult.failed(error, version="2.3.1"), name="a8e", use_emoji=False)

    out = capsys.readouterr().out
    assert f"[{error.kind.value}] {error}" in out
    assert "transient, safe to retry" in out


def test_checksum_mismatch_is_not_offered_as_retryable(capsys: pytest.CaptureFixture[str]) -> None:
    error = ChecksumMismatch("https://github.com/a8e.tar.bz2", "a" * 64, "b" * 64)

    report_result(InstallResult.failed(error, version="2.3.1"), name="a8e", use_emoji=True)

    out = capsys.readouterr().out
    assert "❌" in out
    assert "[checksum_mismatch]" in out
    assert "safe to retry" not in out


def test_retry_notice_counts_attempts(capsys: pytest.CaptureFixture[str]) -> None:
    result = InstallResult.failed(DownloadError("offline"), version="2.3.1")

    report_retry(result, attempt=1, attempts=3, use_emoji=True)

    out = capsys.readouterr().out
    assert "🔁" in out
    assert "Attempt 1 of 3 failed (download_error): offline; retrying" in out


def test_console_is_shared_per_colour_mode() -> None:
    assert shared_console(color=False) is shared_console(color=False)
    assert shared_console(color=False) is not shared_console(color=True)
