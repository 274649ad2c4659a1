# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the post-install smoke test."""

from __future__ import annotations

from pathlib import Path

import pytest

from a8e_installer.errors import ErrorKind, SmokeTestFailed
from a8e_installer.process_utils import TIMEOUT_RETURNCODE, run_executable
from a8e_installer.smoke import smoke_test


def _script(tmp_path: Path, body: str, *, executable: bool = True) -> Path:
    path = tmp_path / "a8e"
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(0o755 if executable else 0o644)
    return path


def test_reports_version(tmp_path: Path) -> None:
    binary = _script(tmp_path, 'echo "a8e 2.3.1 (abc123)"')

    assert smoke_test(binary, "2.3.1") == "a8e 2.3.1 (abc123)"


def test_custom_version_flag_is_passed(tmp_path: Path) -> None:
    binary = _script(tmp_path, 'if [ "$1" = "-V" ]; then echo 1.0.0; else exit 2; fi')

    assert smoke_test(binary, "1.0.0", version_flag="-V") == "1.0.0"


@pytest.mark.parametrize(
    ("body", "match"),
    [
        ('echo "a8e 2.3.0"', "expected '2.3.1'"),
        ('echo "boom" >&2; exit 3', "status 3: boom"),
        ("exec sleep 5", "timed out"),
    ],
)
def test_failures_raise(tmp_path: Path, body: str, match: str) -> None:
    binary = _script(tmp_path, body)

    with pytest.raises(SmokeTestFailed, match=match) as excinfo:
        smoke_test(binary, "2.3.1", timeout=0.5)

    assert excinfo.value.kind is ErrorKind.SMOKE_TEST_FAILED
    assert not excinfo.value.retryable


def test_non_executable_binary_fails(tmp_path: Path) -> None:
    binary = _script(tmp_path, "echo 2.3.1", executable=False)

    with pytest.raises(SmokeTestFailed, match="Could not execute"):
        smoke_test(binary, "2.3.1")


def test_run_executable_maps_timeout(tmp_path: Path) -> None:
    binary = _script(tmp_path, "exec sleep 5")

    completed = run_executable(binary, timeout=0.2)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr
