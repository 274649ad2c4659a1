# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Formula CLI command."""

from __future__ import annotations

from typer import Typer

from .command import formula_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Attach the ``formula`` command to ``app``."""

    app.command(name="formula")(formula_command)
