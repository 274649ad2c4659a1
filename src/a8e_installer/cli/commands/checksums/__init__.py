# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksums CLI command."""

from __future__ import annotations

from typer import Typer

from .command import checksums_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Attach the ``checksums`` command to ``app``."""

    app.command(name="checksums")(checksums_command)
