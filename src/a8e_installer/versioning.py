# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Release version parsing shared by the manifest and the resolver."""

from __future__ import annotations

import re
from typing import Final

from packaging.version import InvalidVersion as _PackagingInvalidVersion
from packaging.version import Version

from .errors import InvalidVersion

SEMVER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$",
)


def normalize_version(version: str) -> str:
    """Return ``version`` stripped of whitespace and a leading ``v`` or ``V``.

    Args:
        version: Version requested by the caller, e.g. ``"2.3.1"`` or ``"v2.3.1"``.

    Returns:
        str: Bare semantic version.

    Raises:
        InvalidVersion: If ``version`` is empty or not a semantic version.
    """

    candidate = version.strip()
    if candidate[:1] in {"v", "V"}:
        candidate = candidate[1:]
    if not candidate:
        raise InvalidVersion("Version must be a non-empty semantic version")
    if not SEMVER_PATTERN.match(candidate):
        raise InvalidVersion(f"Version {version!r} is not a semantic version")
    return candidate


def version_sort_key(value: str) -> tuple[int, Version | str]:
    """Order PEP 440 parseable versions after anything packaging cannot parse."""

    try:
        return (1, Version(value))
    except _PackagingInvalidVersion:
        return (0, value)


__all__ = ["SEMVER_PATTERN", "normalize_version", "version_sort_key"]
