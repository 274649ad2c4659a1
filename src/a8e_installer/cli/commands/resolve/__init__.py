# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolve CLI command."""

from __future__ import annotations

from typer import Typer

from .command import resolve_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Attach the ``resolve`` command to ``app``."""

    app.command(name="resolve")(resolve_command)
