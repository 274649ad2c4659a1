# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `a8e-installer formula` command."""

from __future__ import annotations

import typer

from ....errors import InstallerError
from ....formula import render_formula
from ....logging import fail, ok
from ...options import CHECKSUMS_FILE_OPTION, EMOJI_OPTION, EXIT_FAILURE, MANIFEST_OPTION, VERSION_ARGUMENT
from ...shared import load_cli_config
from .models import OUTPUT_OPTION


def formula_command(
    version: VERSION_ARGUMENT,
    manifest: MANIFEST_OPTION = None,
    checksums_file: CHECKSUMS_FILE_OPTION = None,
    output: OUTPUT_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Render the Homebrew formula for a published release.

    Every supported platform needs a checksum, either from the manifest or
    from ``--checksums-file``.
    """

    config = load_cli_config(manifest, use_emoji=emoji, checksums_file=checksums_file, version=version)
    try:
        rendered = render_formula(config.manifest, version)
    except InstallerError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if output is None:
        typer.echo(rendered, nl=False)
        raise typer.Exit(code=0)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        fail(f"Unable to write {output}: {exc}", use_emoji=emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc
    ok(f"Wrote formula to {output}", use_emoji=emoji)
    raise typer.Exit(code=0)


__all__ = ["formula_command"]
