# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the Homebrew formula for a published release."""

from __future__ import annotations

from typing import Final

from .manifest import ReleaseManifest
from .platform import CpuArchitecture, OperatingSystem, PlatformKey
from .resolver import normalize_version

INDENT: Final[str] = "  "
OS_BLOCKS: Final[dict[OperatingSystem, str]] = {
    OperatingSystem.MACOS: "on_macos",
    OperatingSystem.LINUX: "on_linux",
}


def formula_class_name(name: str) -> str:
    """Return the Ruby class name Homebrew expects for ``name``.

    >>> formula_class_name("a8e")
    'A8e'
    >>> formula_class_name("my-tool")
    'MyTool'
    """

    parts = [part for part in name.replace("_", "-").split("-") if part]
    return "".join(part[:1].upper() + part[1:] for part in parts)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _artifact_lines(manifest: ReleaseManifest, key: PlatformKey, version: str, depth: int) -> list[str]:
    pad = INDENT * depth
    return [
        f"{pad}url {_quote(manifest.artifact_url(key, version))}",
        f"{pad}sha256 {_quote(manifest.checksum_for(key, version))}",
    ]


def _os_block(manifest: ReleaseManifest, system: OperatingSystem, version: str) -> list[str]:
    keys = {key.cpu_architecture: key for key in manifest.supported_platforms() if key.operating_system is system}
    if not keys:
        return []
    lines = [f"{INDENT}{OS_BLOCKS[system]} do"]
    arm = keys.get(CpuArchitecture.ARM64)
    intel = keys.get(CpuArchitecture.X86_64)
    if arm is not None and intel is not None:
        lines.append(f"{INDENT * 2}if Hardware::CPU.arm?")
        lines.extend(_artifact_lines(manifest, arm, version, 3))
        lines.append(f"{INDENT * 2}else")
        lines.extend(_artifact_lines(manifest, intel, version, 3))
        lines.append(f"{INDENT * 2}end")
    else:
        only, condition = (arm, "arm?") if arm is not None else (intel, "intel?")
        lines.append(f"{INDENT * 2}if Hardware::CPU.{condition}")
        lines.extend(_artifact_lines(manifest, only, version, 3))
        lines.append(f"{INDENT * 2}end")
    lines.append(f"{INDENT}end")
    return lines


def render_formula(manifest: ReleaseManifest, version: str) -> str:
    """Return the Homebrew formula installing ``version`` of the manifest's binary.

    Every supported platform must carry a published checksum for ``version``.

    Raises:
        InvalidVersion: If ``version`` is not a semantic version.
        UnknownRelease: If a supported platform lacks a checksum.
    """

    release = normalize_version(version)
    lines = [
        f"class {formula_class_name(manifest.name)} < Formula",
        f"{INDENT}desc {_quote(manifest.description)}",
        f"{INDENT}homepage {_quote(manifest.homepage)}",
        f"{INDENT}license {_quote(manifest.license)}",
        f"{INDENT}version {_quote(release)}",
    ]
    for system in OS_BLOCKS:
        block = _os_block(manifest, system, release)
        if block:
            lines.append("")
            lines.extend(block)
    lines.extend(
        [
            "",
            f"{INDENT}def install",
            f"{INDENT * 2}bin.install {_quote(manifest.binary)}",
            f"{INDENT}end",
            "",
            f"{INDENT}test do",
            f'{INDENT * 2}assert_match version.to_s, shell_output("#{{bin}}/{manifest.binary} --version")',
            f"{INDENT}end",
            "end",
        ],
    )
    return "\n".join(lines) + "\n"


__all__ = ["formula_class_name", "render_formula"]
