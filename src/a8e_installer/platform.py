# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Platform keys used to select release artifacts."""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .errors import UnsupportedPlatform


class OperatingSystem(StrEnum):
    """Operating systems with published release artifacts."""

    MACOS = "macos"
    LINUX = "linux"


class CpuArchitecture(StrEnum):
    """CPU architectures with published release artifacts."""

    ARM64 = "arm64"
    X86_64 = "x86_64"


OS_ALIASES: Final[dict[str, OperatingSystem]] = {
    "macos": OperatingSystem.MACOS,
    "darwin": OperatingSystem.MACOS,
    "osx": OperatingSystem.MACOS,
    "mac": OperatingSystem.MACOS,
    "linux": OperatingSystem.LINUX,
}

ARCH_ALIASES: Final[dict[str, CpuArchitecture]] = {
    "arm64": CpuArchitecture.ARM64,
    "aarch64": CpuArchitecture.ARM64,
    "armv8": CpuArchitecture.ARM64,
    "x86_64": CpuArchitecture.X86_64,
    "amd64": CpuArchitecture.X86_64,
    "x64": CpuArchitecture.X86_64,
}

PLATFORM_SEPARATOR: Final[str] = "/"


def normalize_operating_system(raw: str) -> OperatingSystem:
    """Return the operating system identified by ``raw``.

    Args:
        raw: Value reported by the host, e.g. ``platform.system()``.

    Returns:
        OperatingSystem: Canonical operating system.

    Raises:
        UnsupportedPlatform: If ``raw`` names an operating system without artifacts.
    """

    resolved = OS_ALIASES.get(raw.strip().lower())
    if resolved is None:
        raise UnsupportedPlatform(f"Unsupported operating system: {raw!r}")
    return resolved


def normalize_architecture(raw: str) -> CpuArchitecture:
    """Return the CPU architecture identified by ``raw``.

    Args:
        raw: Value reported by the host, e.g. ``platform.machine()``.

    Returns:
        CpuArchitecture: Canonical architecture.

    Raises:
        UnsupportedPlatform: If ``raw`` names an architecture without artifacts.
    """

    resolved = ARCH_ALIASES.get(raw.strip().lower())
    if resolved is None:
        raise UnsupportedPlatform(f"Unsupported architecture: {raw!r}")
    return resolved


@dataclass(frozen=True, slots=True)
class PlatformKey:
    """Immutable ``(operating system, CPU architecture)`` lookup key."""

    operating_system: OperatingSystem
    cpu_architecture: CpuArchitecture

    @classmethod
    def of(cls, operating_system: str, cpu_architecture: str) -> PlatformKey:
        """Build a key from loosely formatted host values."""

        return cls(
            operating_system=normalize_operating_system(operating_system),
            cpu_architecture=normalize_architecture(cpu_architecture),
        )

    @classmethod
    def parse(cls, text: str) -> PlatformKey:
        """Parse ``"<os>/<arch>"`` into a key.

        Args:
            text: Platform token such as ``"linux/x86_64"``.

        Returns:
            PlatformKey: Parsed key.

        Raises:
            UnsupportedPlatform: If the token is malformed or names an unknown platform.
        """

        system, sep, machine = text.partition(PLATFORM_SEPARATOR)
        if not sep or not system.strip() or not machine.strip():
            raise UnsupportedPlatform(f"Platform must look like 'os/arch', got {text!r}")
        return cls.of(system, machine)

    @classmethod
    def detect(cls) -> PlatformKey:
        """Return the key describing the running host."""

        return cls.of(_platform.system(), _platform.machine())

    def __str__(self) -> str:
        return f"{self.operating_system.value}{PLATFORM_SEPARATOR}{self.cpu_architecture.value}"


__all__ = [
    "ARCH_ALIASES",
    "CpuArchitecture",
    "OS_ALIASES",
    "OperatingSystem",
    "PlatformKey",
    "normalize_architecture",
    "normalize_operating_system",
]
