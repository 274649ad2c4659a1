# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

# Bandit: subprocess usage is intentional; the only command run is the freshly
# verified binary, invoked with an argument list and without ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


def _ensure_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def run_executable(
    executable: Path,
    args: Sequence[str] = (),
    *,
    timeout: float | None = None,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run ``executable`` with ``args`` and capture its text output.

    The executable must be given as a path; nothing is looked up on ``PATH``.
    A timeout is reported as a completed process with return code
    :data:`TIMEOUT_RETURNCODE` and a note appended to stderr.

    Raises:
        FileNotFoundError: If ``executable`` does not exist.
        PermissionError: If ``executable`` cannot be executed.
    """

    command = [str(executable), *args]
    try:
        # Bandit: argument list only, no shell expansion.
        return subprocess.run(  # nosec B603
            command,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        return subprocess.CompletedProcess(
            args=command,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout),
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )


__all__ = ["TIMEOUT_RETURNCODE", "run_executable"]
