# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer option declarations shared by several commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Final

import typer

EXIT_FAILURE: Final[int] = 1
# sysexits.h EX_TEMPFAIL: the host may retry later.
EXIT_RETRYABLE: Final[int] = 75

VERSION_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Exact release version, e.g. 2.3.1."),
]
PLATFORM_OPTION = Annotated[
    str | None,
    typer.Option("--platform", "-p", help="Target platform as os/arch; defaults to the running host."),
]
MANIFEST_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--manifest",
        "-m",
        exists=True,
        dir_okay=False,
        help="TOML release manifest overriding the built-in table.",
    ),
]
CHECKSUMS_FILE_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--checksums-file",
        exists=True,
        dir_okay=False,
        help="sha256sum-style file listing the release's artifact digests.",
    ),
]
SHA256_OPTION = Annotated[
    str | None,
    typer.Option("--sha256", help="Expected SHA-256 digest, overriding the manifest."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log each installation step to stderr."),
]

__all__ = [
    "CHECKSUMS_FILE_OPTION",
    "EMOJI_OPTION",
    "EXIT_FAILURE",
    "EXIT_RETRYABLE",
    "MANIFEST_OPTION",
    "PLATFORM_OPTION",
    "SHA256_OPTION",
    "VERBOSE_OPTION",
    "VERSION_ARGUMENT",
]
