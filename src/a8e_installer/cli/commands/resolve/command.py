# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `a8e-installer resolve` command."""

from __future__ import annotations

import json

import typer
from rich import box
from rich.table import Table

from ....errors import InstallerError, UnknownRelease
from ....logging import fail, shared_console, stdout_is_terminal
from ....platform import PlatformKey
from ....resolver import ArtifactResolver, normalize_version
from ...options import (
    CHECKSUMS_FILE_OPTION,
    EMOJI_OPTION,
    EXIT_FAILURE,
    MANIFEST_OPTION,
    PLATFORM_OPTION,
    SHA256_OPTION,
    VERSION_ARGUMENT,
)
from ...shared import load_cli_config, select_platform
from .models import ALL_PLATFORMS_OPTION, JSON_OPTION, ResolveCLIOptions, ResolvedRow

UNPUBLISHED = "unpublished"


def resolve_command(
    version: VERSION_ARGUMENT,
    platform: PLATFORM_OPTION = None,
    all_platforms: ALL_PLATFORMS_OPTION = False,
    manifest: MANIFEST_OPTION = None,
    checksums_file: CHECKSUMS_FILE_OPTION = None,
    sha256: SHA256_OPTION = None,
    as_json: JSON_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Show the artifact URL and expected digest without downloading anything."""

    options = ResolveCLIOptions(
        version=version.strip(),
        platform=platform,
        all_platforms=all_platforms,
        manifest=manifest,
        checksums_file=checksums_file,
        sha256=sha256,
        as_json=as_json,
        use_emoji=emoji,
    )
    config = load_cli_config(
        options.manifest,
        use_emoji=options.use_emoji,
        checksums_file=options.checksums_file,
        version=options.version,
    )
    resolver = ArtifactResolver(config.manifest)
    if options.all_platforms:
        keys = resolver.supported_platforms()
    else:
        keys = (select_platform(options.platform, use_emoji=options.use_emoji),)

    try:
        rows = [_resolve_row(resolver, key, options.version, options.sha256) for key in keys]
    except InstallerError as exc:
        fail(str(exc), use_emoji=options.use_emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if options.as_json:
        payload = [row.as_dict() for row in rows]
        typer.echo(json.dumps(payload if options.all_platforms else payload[0], indent=2))
    else:
        _render_table(rows)
    raise typer.Exit(code=0)


def _resolve_row(resolver: ArtifactResolver, key: PlatformKey, version: str, sha256: str | None) -> ResolvedRow:
    """Resolve ``key`` and fall back to a digest-less row for unpublished releases."""

    try:
        entry = resolver.resolve(key, version, checksum=sha256)
    except UnknownRelease:
        if sha256 is not None:
            raise
        release = normalize_version(version)
        return ResolvedRow(str(key), release, resolver.manifest.artifact_url(key, release), None)
    return ResolvedRow(str(key), entry.version, entry.url, entry.expected_checksum)


def _render_table(rows: list[ResolvedRow]) -> None:
    color = stdout_is_terminal()
    console = shared_console(color=color)
    table = Table(box=box.SIMPLE_HEAVY if color else box.SIMPLE, header_style="bold" if color else None)
    table.add_column("Platform", style="cyan" if color else None)
    table.add_column("Version")
    table.add_column("URL", overflow="fold")
    table.add_column("SHA-256", style="green" if color else None, overflow="fold")
    for row in rows:
        table.add_row(row.platform, row.version, row.url, row.sha256 or UNPUBLISHED)
    console.print(table)


__all__ = ["resolve_command"]
