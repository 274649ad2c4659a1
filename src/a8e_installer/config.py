# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Installer settings and TOML manifest loading."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .manifest import ReleaseManifest, default_manifest

INSTALL_DIR_ENV: Final[str] = "A8E_INSTALL_DIR"
INSTALL_TIMEOUT_ENV: Final[str] = "A8E_INSTALL_TIMEOUT"
DEFAULT_DESTINATION: Final[Path] = Path("~/.local/bin")
DEFAULT_TIMEOUT: Final[float] = 60.0
DEFAULT_SMOKE_TEST_TIMEOUT: Final[float] = 30.0
DEFAULT_VERSION_FLAG: Final[str] = "--version"

PROJECT_SECTION: Final[str] = "project"
DOWNLOAD_SECTION: Final[str] = "download"
TARGETS_SECTION: Final[str] = "targets"
CHECKSUMS_SECTION: Final[str] = "checksums"
INSTALL_SECTION: Final[str] = "install"
KNOWN_SECTIONS: Final[frozenset[str]] = frozenset(
    {PROJECT_SECTION, DOWNLOAD_SECTION, TARGETS_SECTION, CHECKSUMS_SECTION, INSTALL_SECTION},
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class InstallerSettings(BaseModel):
    """Runtime knobs for a single install invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    destination: Path = Field(default=DEFAULT_DESTINATION, validate_default=True)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    smoke_test: bool = True
    smoke_test_timeout: float = Field(default=DEFAULT_SMOKE_TEST_TIMEOUT, gt=0)
    version_flag: str = DEFAULT_VERSION_FLAG

    @field_validator("destination")
    @classmethod
    def _expand_destination(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("version_flag")
    @classmethod
    def _require_flag(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("version flag must not be empty")
        return value.strip()

    def with_env_overrides(self, env: Mapping[str, str]) -> InstallerSettings:
        """Return a copy honouring ``A8E_INSTALL_DIR`` and ``A8E_INSTALL_TIMEOUT``.

        Raises:
            ConfigError: If an override cannot be parsed.
        """

        updates: dict[str, Any] = {}
        if destination := env.get(INSTALL_DIR_ENV):
            updates["destination"] = Path(destination)
        if timeout := env.get(INSTALL_TIMEOUT_ENV):
            updates["timeout"] = timeout
        if not updates:
            return self
        return _validate(InstallerSettings, {**self.model_dump(), **updates}, source="environment")


class InstallerConfig(BaseModel):
    """Manifest and settings loaded together from one document."""

    model_config = ConfigDict(frozen=True)

    manifest: ReleaseManifest = Field(default_factory=default_manifest)
    settings: InstallerSettings = Field(default_factory=InstallerSettings)


def load_config(path: Path | None = None, *, env: Mapping[str, str] | None = None) -> InstallerConfig:
    """Load the installer configuration.

    Without ``path`` the built-in manifest and default settings are used.
    String values in the TOML document may reference ``${VAR}`` placeholders,
    which are expanded from ``env``. Environment overrides are applied last.

    Args:
        path: Optional TOML manifest path.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        InstallerConfig: Validated configuration.

    Raises:
        ConfigError: If the document is missing, unreadable, or invalid.
    """

    environment = os.environ if env is None else env
    if path is None:
        config = InstallerConfig()
    else:
        document = _expand_env(_read_toml(path), environment)
        config = InstallerConfig(
            manifest=_manifest_from_document(document, source=str(path)),
            settings=_validate(InstallerSettings, _section(document, INSTALL_SECTION), source=str(path)),
        )
    return config.model_copy(update={"settings": config.settings.with_env_overrides(environment)})


def load_manifest(path: Path, *, env: Mapping[str, str] | None = None) -> ReleaseManifest:
    """Return only the release manifest stored at ``path``."""

    return load_config(path, env=env).manifest


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Manifest not found: {path}")
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Manifest at {path} is not valid TOML: {exc}") from exc
    unknown = sorted(set(data) - KNOWN_SECTIONS)
    if unknown:
        raise ConfigError(f"Manifest at {path} has unknown sections: {', '.join(unknown)}")
    return data


def _section(document: Mapping[str, Any], name: str) -> dict[str, Any]:
    value = document.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return dict(value)


def _manifest_from_document(document: Mapping[str, Any], *, source: str) -> ReleaseManifest:
    payload: dict[str, Any] = {}
    payload.update(_section(document, PROJECT_SECTION))
    payload.update(_section(document, DOWNLOAD_SECTION))
    if TARGETS_SECTION in document:
        payload[TARGETS_SECTION] = _section(document, TARGETS_SECTION)
    if CHECKSUMS_SECTION in document:
        payload[CHECKSUMS_SECTION] = _section(document, CHECKSUMS_SECTION)
    return _validate(ReleaseManifest, payload, source=source)


def _validate(model: type[ModelT], payload: Mapping[str, Any], *, source: str) -> ModelT:
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source}: {exc}") from exc


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {_expand_env_value(k, env): _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "INSTALL_DIR_ENV",
    "INSTALL_TIMEOUT_ENV",
    "InstallerConfig",
    "InstallerSettings",
    "load_config",
    "load_manifest",
]
