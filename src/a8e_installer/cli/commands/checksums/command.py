# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `a8e-installer checksums` command."""

from __future__ import annotations

import typer

from ....checksums import compute_file_checksums
from ....logging import fail
from ...options import EMOJI_OPTION, EXIT_FAILURE
from .models import FILES_ARGUMENT


def checksums_command(files: FILES_ARGUMENT, emoji: EMOJI_OPTION = True) -> None:
    """Print ``sha256sum``-style lines for release archives."""

    try:
        lines = compute_file_checksums(files)
    except OSError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc
    for line in lines:
        typer.echo(line)
    raise typer.Exit(code=0)


__all__ = ["checksums_command"]
