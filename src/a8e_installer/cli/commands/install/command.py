# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the `a8e-installer install` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ....config import InstallerSettings
from ....logging import enable_verbose_logging, fail, info, report_result, report_retry
from ....manifest import ReleaseManifest
from ....models import InstallResult
from ....platform import PlatformKey
from ....service import install_release
from ...options import (
    CHECKSUMS_FILE_OPTION,
    EMOJI_OPTION,
    EXIT_FAILURE,
    EXIT_RETRYABLE,
    MANIFEST_OPTION,
    PLATFORM_OPTION,
    SHA256_OPTION,
    VERBOSE_OPTION,
    VERSION_ARGUMENT,
)
from ...shared import load_cli_config, select_platform
from .models import (
    DEST_OPTION,
    RETRIES_OPTION,
    SMOKE_TEST_OPTION,
    TIMEOUT_OPTION,
    InstallCLIOptions,
    build_install_options,
)


def install_command(
    version: VERSION_ARGUMENT,
    destination: DEST_OPTION = None,
    platform: PLATFORM_OPTION = None,
    manifest: MANIFEST_OPTION = None,
    checksums_file: CHECKSUMS_FILE_OPTION = None,
    sha256: SHA256_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    retries: RETRIES_OPTION = 0,
    smoke_test: SMOKE_TEST_OPTION = True,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Download, verify, and install one release of the binary.

    Raises:
        typer.Exit: Always raised; ``0`` on success, ``75`` when the last
            failure was transient, ``1`` otherwise.
    """

    options = build_install_options(
        version=version,
        destination=destination,
        platform=platform,
        manifest=manifest,
        checksums_file=checksums_file,
        sha256=sha256,
        timeout=timeout,
        retries=retries,
        smoke_test=smoke_test,
        emoji=emoji,
        verbose=verbose,
    )
    use_emoji = options.use_emoji
    if options.verbose:
        enable_verbose_logging()

    config = load_cli_config(
        options.manifest,
        use_emoji=use_emoji,
        checksums_file=options.checksums_file,
        version=options.version,
    )
    platform_key = select_platform(options.platform, use_emoji=use_emoji)
    settings = _apply_overrides(config.settings, options)
    destination_dir = options.destination or settings.destination

    info(
        f"Installing {config.manifest.name} {options.version} for {platform_key} into {destination_dir}",
        use_emoji=use_emoji,
    )
    try:
        result = _install_with_retries(options, config.manifest, settings, platform_key, destination_dir)
    except OSError as exc:
        fail(f"Cannot install into {destination_dir}: {exc}", use_emoji=use_emoji)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    report_result(result, name=config.manifest.name, use_emoji=use_emoji)
    if result.success:
        raise typer.Exit(code=0)
    raise typer.Exit(code=EXIT_RETRYABLE if result.retryable else EXIT_FAILURE)


def _apply_overrides(settings: InstallerSettings, options: InstallCLIOptions) -> InstallerSettings:
    """Return ``settings`` updated with command-line overrides."""

    updates: dict[str, object] = {}
    if options.timeout is not None:
        updates["timeout"] = options.timeout
    if not options.smoke_test:
        updates["smoke_test"] = False
    return settings.model_copy(update=updates) if updates else settings


def _install_with_retries(
    options: InstallCLIOptions,
    manifest: ReleaseManifest,
    settings: InstallerSettings,
    platform_key: PlatformKey,
    destination_dir: Path,
) -> InstallResult:
    """Run install attempts until one succeeds or fails permanently.

    Only retryable failures (download errors and timeouts) trigger another
    attempt; a checksum mismatch or smoke-test failure is reported at once.
    """

    attempt = 1
    while True:
        result = install_release(
            platform_key,
            options.version,
            destination_dir,
            manifest=manifest,
            settings=settings,
            checksum=options.sha256,
        )
        if result.success or not result.retryable or attempt >= options.attempts:
            return result
        report_retry(result, attempt=attempt, attempts=options.attempts, use_emoji=options.use_emoji)
        attempt += 1


__all__ = ["install_command"]
