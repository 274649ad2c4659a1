# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the resolve CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

ALL_PLATFORMS_OPTION = Annotated[
    bool,
    typer.Option("--all", "-a", help="Resolve every supported platform instead of one."),
]
JSON_OPTION = Annotated[
    bool,
    typer.Option("--json", help="Emit machine-readable JSON instead of a table."),
]


@dataclass(slots=True)
class ResolveCLIOptions:
    """Normalised CLI inputs for the resolve command."""

    version: str
    platform: str | None
    all_platforms: bool
    manifest: Path | None
    checksums_file: Path | None
    sha256: str | None
    as_json: bool
    use_emoji: bool


@dataclass(frozen=True, slots=True)
class ResolvedRow:
    """One platform's resolution as shown to the user."""

    platform: str
    version: str
    url: str
    sha256: str | None

    def as_dict(self) -> dict[str, str | None]:
        return {"platform": self.platform, "version": self.version, "url": self.url, "sha256": self.sha256}


__all__ = ["ALL_PLATFORMS_OPTION", "JSON_OPTION", "ResolveCLIOptions", "ResolvedRow"]
