# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting for installer commands and opt-in step logging.

User-facing lines go through a shared Rich console. Each line has a tone
(glyph plus colour), and install outcomes pick their tone from the result:
a transient failure reads as "try again later", a terminal one as an error.
Library modules never print; they log through ``logging.getLogger(__name__)``
and :func:`enable_verbose_logging` makes those records visible.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.text import Text

from .models import InstallResult

PACKAGE_LOGGER: Final[str] = "a8e_installer"
VERBOSE_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class Tone:
    """Glyph and Rich style used for one kind of console line."""

    glyph: str
    style: str


INFO: Final[Tone] = Tone("ℹ️ ", "cyan")
OK: Final[Tone] = Tone("✅ ", "green")
WARN: Final[Tone] = Tone("⚠️ ", "yellow")
RETRY: Final[Tone] = Tone("🔁 ", "yellow")
FAIL: Final[Tone] = Tone("❌ ", "red")


def stdout_is_terminal() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=2)
def shared_console(*, color: bool) -> Console:
    """Return the process-wide console for ``color``.

    The console resolves ``sys.stdout`` on every write, so redirected
    output (pipes, test runners) is honoured after the console is cached.
    """

    return Console(
        color_system="auto" if color else None,
        no_color=not color,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def emit(tone: Tone, msg: str, *, use_emoji: bool) -> None:
    """Print ``msg`` with ``tone``; colour only when stdout is a terminal."""

    color = stdout_is_terminal()
    prefix = tone.glyph if use_emoji else ""
    shared_console(color=color).print(Text(f"{prefix}{msg}", style=tone.style if color else ""))


def info(msg: str, *, use_emoji: bool) -> None:
    emit(INFO, msg, use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool) -> None:
    emit(OK, msg, use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool) -> None:
    emit(WARN, msg, use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool) -> None:
    emit(FAIL, msg, use_emoji=use_emoji)


def report_retry(result: InstallResult, *, attempt: int, attempts: int, use_emoji: bool) -> None:
    """Announce that a transient failure is about to be retried."""

    emit(
        RETRY,
        f"Attempt {attempt} of {attempts} failed ({result.error_kind}): {result.message}; retrying",
        use_emoji=use_emoji,
    )


def report_result(result: InstallResult, *, name: str, use_emoji: bool) -> None:
    """Print the final outcome of an install.

    Args:
        result: Outcome returned by :func:`a8e_installer.service.install_release`.
        name: Project name shown to the user.
        use_emoji: Flag controlling emoji prefixes.
    """

    if result.success:
        emit(OK, f"Installed {name} {result.version} at {result.installed_path}", use_emoji=use_emoji)
        return
    kind = result.error_kind.value if result.error_kind is not None else "error"
    line = f"[{kind}] {result.message}"
    if result.retryable:
        emit(RETRY, f"{line} (transient, safe to retry)", use_emoji=use_emoji)
    else:
        emit(FAIL, line, use_emoji=use_emoji)


def enable_verbose_logging() -> None:
    """Stream the package's debug records to stderr."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(logger, "_a8e_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_a8e_verbose_configured", True)


__all__ = [
    "Tone",
    "emit",
    "enable_verbose_logging",
    "fail",
    "info",
    "ok",
    "report_result",
    "report_retry",
    "shared_console",
    "stdout_is_terminal",
    "warn",
]
