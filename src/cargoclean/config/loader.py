# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration loading (defaults, TOML file, CLI overrides)."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..errors import ConfigError
from .models import CleanConfig


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Mapping[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Configuration at {self.path} is not valid TOML: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration at {self.path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self.path} must be a table")
        return dict(data)

    def describe(self) -> str:
        return f"TOML configuration at {self.path}"


class ConfigLoader:
    """Resolve :class:`CleanConfig` from defaults, a TOML file and overrides."""

    def __init__(self, source: TomlConfigSource | None = None) -> None:
        """Create a loader reading from ``source`` when provided.

        Args:
            source: Optional TOML source layered above the built-in defaults.
        """

        self._source = source

    @classmethod
    def for_root(cls, root: Path, *, config_path: Path | None = None) -> ConfigLoader:
        """Return a loader for ``root``.

        An explicit ``config_path`` must exist; otherwise ``<root>/.cargo-clean.toml``
        is used when present.

        Args:
            root: Directory the walk starts from.
            config_path: Optional explicit configuration file.

        Returns:
            ConfigLoader: Loader bound to the resolved configuration source.

        Raises:
            ConfigError: If ``config_path`` was given but does not exist.
        """

        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"Configuration file {config_path} does not exist")
            return cls(TomlConfigSource(config_path))
        candidate = root / CONFIG_FILE_NAME
        return cls(TomlConfigSource(candidate) if candidate.is_file() else None)

    @property
    def source(self) -> TomlConfigSource | None:
        """Return the TOML source consulted by the loader, if any."""

        return self._source

    def load(self, overrides: Mapping[str, Any] | None = None) -> CleanConfig:
        """Return the merged configuration.

        Args:
            overrides: Values taking precedence over file content; ``None``
                entries are ignored so unset CLI flags keep file values.

        Returns:
            CleanConfig: Validated configuration.

        Raises:
            ConfigError: If the merged payload fails validation.
        """

        payload: dict[str, Any] = {}
        if self._source is not None:
            payload.update(self._source.load())
        for key, value in (overrides or {}).items():
            if value is not None:
                payload[key] = value
        try:
            return CleanConfig.model_validate(payload)
        except ValidationError as exc:
            origin = self._source.describe() if self._source is not None else "overrides"
            raise ConfigError(f"Invalid configuration ({origin}): {exc}") from exc


__all__ = ["ConfigLoader", "TomlConfigSource"]
