# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the install CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

DEST_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--dest",
        "-d",
        file_okay=False,
        help="Directory receiving the binary; defaults to $A8E_INSTALL_DIR or ~/.local/bin.",
    ),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.001, help="Download timeout in seconds."),
]
RETRIES_OPTION = Annotated[
    int,
    typer.Option("--retries", min=0, help="Extra attempts after a retryable failure."),
]
SMOKE_TEST_OPTION = Annotated[
    bool,
    typer.Option(
        "--smoke-test/--no-smoke-test",
        help="Run '<binary> --version' before placing the binary.",
    ),
]


@dataclass(slots=True)
class InstallCLIOptions:
    """Normalised CLI inputs for the install command."""

    version: str
    destination: Path | None
    platform: str | None
    manifest: Path | None
    checksums_file: Path | None
    sha256: str | None
    timeout: float | None
    retries: int
    smoke_test: bool
    use_emoji: bool
    verbose: bool

    @property
    def attempts(self) -> int:
        """Return the total number of install attempts allowed."""

        return self.retries + 1


def build_install_options(
    *,
    version: str,
    destination: Path | None,
    platform: str | None,
    manifest: Path | None,
    checksums_file: Path | None,
    sha256: str | None,
    timeout: float | None,
    retries: int,
    smoke_test: bool,
    emoji: bool,
    verbose: bool,
) -> InstallCLIOptions:
    """Construct ``InstallCLIOptions`` from Typer parameters.

    Args:
        version: Release version argument.
        destination: Optional destination directory.
        platform: Optional ``os/arch`` override.
        manifest: Optional TOML manifest path.
        checksums_file: Optional checksum file path.
        sha256: Optional digest override.
        timeout: Optional download timeout override.
        retries: Extra attempts for retryable failures.
        smoke_test: Whether the staged binary is smoke-tested.
        emoji: Flag controlling emoji usage in logging output.
        verbose: Flag enabling step-level logging on stderr.

    Returns:
        InstallCLIOptions: Normalised install command options.
    """

    return InstallCLIOptions(
        version=version.strip(),
        destination=destination.expanduser() if destination is not None else None,
        platform=platform,
        manifest=manifest,
        checksums_file=checksums_file,
        sha256=sha256,
        timeout=timeout,
        retries=retries,
        smoke_test=smoke_test,
        use_emoji=emoji,
        verbose=verbose,
    )


__all__ = [
    "DEST_OPTION",
    "InstallCLIOptions",
    "RETRIES_OPTION",
    "SMOKE_TEST_OPTION",
    "TIMEOUT_OPTION",
    "build_install_options",
]
