# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""SHA-256 helpers for release artifacts."""

from __future__ import annotations

import hashlib
import hmac
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Final

CHUNK_SIZE: Final[int] = 64 * 1024
SHA256_HEX_LENGTH: Final[int] = 64
_SHA256_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9a-f]{64}$")


def normalize_checksum(value: str) -> str:
    """Return ``value`` as a lowercase SHA-256 hex digest.

    Args:
        value: Candidate digest, optionally prefixed with ``sha256:``.

    Returns:
        str: Lowercase 64-character hex digest.

    Raises:
        ValueError: If ``value`` is not a SHA-256 hex digest.
    """

    candidate = value.strip().lower().removeprefix("sha256:")
    if not _SHA256_PATTERN.match(candidate):
        raise ValueError(f"expected a {SHA256_HEX_LENGTH}-character SHA-256 hex digest, got {value!r}")
    return candidate


def file_sha256(path: Path) -> str:
    """Return the SHA-256 hex digest of ``path`` read in chunks."""

    hasher = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def digests_match(expected: str, actual: str) -> bool:
    """Compare two hex digests without leaking timing information."""

    return hmac.compare_digest(expected.strip().lower().encode("ascii"), actual.strip().lower().encode("ascii"))


def parse_checksum_file(text: str) -> dict[str, str]:
    """Parse ``sha256sum`` output into a ``filename -> digest`` mapping.

    Blank lines and ``#`` comments are skipped. A leading ``*`` binary marker
    on the filename is removed.

    Raises:
        ValueError: If a line carries an invalid digest or no filename.
    """

    checksums: dict[str, str] = {}
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(maxsplit=1)
        if len(parts) < 2:
            raise ValueError(f"line {number}: expected '<digest>  <filename>'")
        digest = normalize_checksum(parts[0])
        filename = parts[1].strip().removeprefix("*")
        checksums[Path(filename).name] = digest
    return checksums


def compute_file_checksums(paths: Sequence[Path]) -> list[str]:
    """Return ``sha256sum``-style lines for ``paths``."""

    return [f"{file_sha256(path)}  {path.name}" for path in paths]


__all__ = [
    "CHUNK_SIZE",
    "compute_file_checksums",
    "digests_match",
    "file_sha256",
    "normalize_checksum",
    "parse_checksum_file",
]
