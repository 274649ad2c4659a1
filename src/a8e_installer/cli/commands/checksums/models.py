# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Argument declarations for the checksums CLI command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

FILES_ARGUMENT = Annotated[
    list[Path],
    typer.Argument(exists=True, dir_okay=False, readable=True, help="Release archives to digest."),
]

__all__ = ["FILES_ARGUMENT"]
