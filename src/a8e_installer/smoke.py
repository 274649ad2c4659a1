# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Post-install check that the binary runs and reports the expected version."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import SmokeTestFailed
from .process_utils import TIMEOUT_RETURNCODE, run_executable

LOGGER = logging.getLogger(__name__)


def smoke_test(binary: Path, version: str, *, version_flag: str = "--version", timeout: float = 30.0) -> str:
    """Run ``<binary> <version_flag>`` and confirm it reports ``version``.

    Args:
        binary: Executable to invoke.
        version: Version string that must appear on stdout.
        version_flag: Flag asking the binary for its version.
        timeout: Seconds to wait for the process.

    Returns:
        str: The stripped stdout reported by the binary.

    Raises:
        SmokeTestFailed: If the binary cannot run, exits non-zero, times out,
            or does not print ``version``.
    """

    try:
        completed = run_executable(binary, [version_flag], timeout=timeout)
    except OSError as exc:
        raise SmokeTestFailed(f"Could not execute {binary}: {exc}") from exc

    stdout = completed.stdout.strip()
    if completed.returncode == TIMEOUT_RETURNCODE:
        raise SmokeTestFailed(f"{binary.name} {version_flag} timed out after {timeout:g}s")
    if completed.returncode != 0:
        detail = completed.stderr.strip() or stdout or "<no output>"
        raise SmokeTestFailed(f"{binary.name} {version_flag} exited with status {completed.returncode}: {detail}")
    if version not in stdout:
        raise SmokeTestFailed(f"{binary.name} {version_flag} reported {stdout!r}, expected {version!r}")
    LOGGER.debug("Smoke test passed: %s", stdout)
    return stdout


__all__ = ["smoke_test"]
