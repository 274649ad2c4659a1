# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from .commands import register_commands

app = typer.Typer(
    help="Fetch, verify, and install prebuilt a8e release binaries.",
    no_args_is_help=True,
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"a8e-installer {__version__}")
        raise typer.Exit(code=0)


@app.callback()
def _root(
    show_version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the installer version and exit.",
        ),
    ] = False,
) -> None:
    """Fetch, verify, and install prebuilt a8e release binaries."""


register_commands(app)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
