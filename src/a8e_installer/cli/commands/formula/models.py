# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations for the formula CLI command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", dir_okay=False, help="Write the formula here instead of stdout."),
]

__all__ = ["OUTPUT_OPTION"]
