# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe extraction of the release binary from its archive."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path, PurePosixPath
from typing import Final

from .errors import ExtractionError

LOGGER = logging.getLogger(__name__)

PATH_TRAVERSAL_COMPONENT: Final[str] = ".."


def extract_binary(archive_path: Path, binary_name: str, scratch_dir: Path) -> Path:
    """Extract ``binary_name`` from ``archive_path`` into ``scratch_dir``.

    Compression is detected from the archive contents, so ``.tar.bz2``,
    ``.tar.gz`` and ``.tar.xz`` are all accepted.

    Args:
        archive_path: Downloaded archive on disk.
        binary_name: Basename of the executable to pull out of the archive.
        scratch_dir: Directory receiving the extracted file.

    Returns:
        Path: Location of the extracted binary inside ``scratch_dir``.

    Raises:
        ExtractionError: If the archive is malformed, holds unsafe paths, or
            lacks a regular file named ``binary_name``.
    """

    try:
        with tarfile.open(archive_path, "r:*") as archive:
            member = _select_binary_member(archive, binary_name)
            archive.extract(member, path=scratch_dir, filter="data")
    except tarfile.TarError as exc:
        raise ExtractionError(f"Malformed archive {archive_path.name}: {exc}") from exc
    except (EOFError, OSError) as exc:
        raise ExtractionError(f"Could not read archive {archive_path.name}: {exc}") from exc

    extracted = scratch_dir / member.name
    if not extracted.is_file():
        raise ExtractionError(f"Archive member {member.name!r} did not extract to a file")
    LOGGER.debug("Extracted %s from %s", member.name, archive_path.name)
    return extracted


def _select_binary_member(archive: tarfile.TarFile, binary_name: str) -> tarfile.TarInfo:
    """Return the regular-file member whose basename is ``binary_name``.

    The shallowest match wins so ``a8e`` is preferred over ``docs/a8e``.

    Raises:
        ExtractionError: If the member is missing, ambiguous at the same depth,
            not a regular file, or escapes the extraction directory.
    """

    candidates: list[tarfile.TarInfo] = []
    for member in archive.getmembers():
        member_path = PurePosixPath(member.name)
        if member_path.name != binary_name:
            continue
        if member_path.is_absolute() or PATH_TRAVERSAL_COMPONENT in member_path.parts:
            raise ExtractionError(f"Unsafe path in archive: {member.name!r}")
        if not member.isfile():
            raise ExtractionError(f"Archive member {member.name!r} is not a regular file")
        candidates.append(member)

    if not candidates:
        raise ExtractionError(f"Archive does not contain {binary_name!r}")
    candidates.sort(key=lambda member: len(PurePosixPath(member.name).parts))
    shallowest = len(PurePosixPath(candidates[0].name).parts)
    if sum(1 for member in candidates if len(PurePosixPath(member.name).parts) == shallowest) > 1:
        raise ExtractionError(f"Archive contains several {binary_name!r} entries")
    return candidates[0]


__all__ = ["extract_binary"]
