# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers shared by CLI commands for config loading and platform selection."""

from __future__ import annotations

from pathlib import Path

import typer

from ..config import InstallerConfig, load_config
from ..errors import ConfigError, InstallerError
from ..logging import fail
from ..platform import PlatformKey
from ..resolver import normalize_version
from .options import EXIT_FAILURE


def load_cli_config(
    manifest_path: Path | None,
    *,
    use_emoji: bool,
    checksums_file: Path | None = None,
    version: str | None = None,
) -> InstallerConfig:
    """Load configuration, merging an optional checksum file for ``version``.

    Args:
        manifest_path: Optional TOML manifest supplied via ``--manifest``.
        use_emoji: Flag controlling emoji usage in failure output.
        checksums_file: Optional ``sha256sum``-style file supplied via ``--checksums-file``.
        version: Release the checksum file describes.

    Returns:
        InstallerConfig: Loaded configuration.

    Raises:
        typer.Exit: If the configuration or checksum file cannot be used.
    """

    try:
        config = load_config(manifest_path)
        if checksums_file is None or version is None:
            return config
        text = checksums_file.read_text(encoding="utf-8")
        manifest = config.manifest.with_checksum_file(normalize_version(version), text)
    except (ConfigError, InstallerError, OSError, ValueError) as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc
    return config.model_copy(update={"manifest": manifest})


def select_platform(raw: str | None, *, use_emoji: bool) -> PlatformKey:
    """Return the platform named by ``--platform`` or the running host's key.

    Raises:
        typer.Exit: If the platform cannot be parsed or detected.
    """

    try:
        return PlatformKey.parse(raw) if raw else PlatformKey.detect()
    except InstallerError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc


__all__ = ["load_cli_config", "select_platform"]
