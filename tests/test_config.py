# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration models and loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cargoclean.config import CleanConfig, ConfigError, ConfigLoader, TomlConfigSource


def test_defaults_match_cargo_conventions() -> None:
    config = CleanConfig()

    assert config.clean_command() == ("cargo", "clean")
    assert config.clean_command("--offline") == ("cargo", "clean", "--offline")
    assert config.fallback_flags == [["--offline"], ["--release"]]
    assert config.exclude_dirs == []
    assert config.excluded_directories() == frozenset({".git", "target"})
    assert config.timeout is None


@pytest.mark.parametrize("name", ["", ".", "..", "nested/Cargo.toml"])
def test_manifest_name_must_be_a_plain_file_name(name: str) -> None:
    with pytest.raises(ValidationError):
        CleanConfig(manifest_name=name)


def test_assignment_is_validated() -> None:
    config = CleanConfig()

    with pytest.raises(ValidationError):
        config.timeout = -1


def test_loader_without_source_uses_defaults(tmp_path: Path) -> None:
    loader = ConfigLoader.for_root(tmp_path)

    assert loader.source is None
    assert loader.load() == CleanConfig()


def test_loader_layers_file_and_overrides(tmp_path: Path) -> None:
    (tmp_path / ".cargo-clean.toml").write_text(
        'cargo = "cargo-1.80"\ntimeout = 45\nexclude_dirs = [".git", "target", "vendor"]\n',
        encoding="utf-8",
    )

    config = ConfigLoader.for_root(tmp_path).load({"cargo": "cargo-nightly", "timeout": None})

    assert config.cargo == "cargo-nightly"
    assert config.timeout == 45
    assert "vendor" in config.exclude_dirs


def test_explicit_configuration_path(tmp_path: Path) -> None:
    path = tmp_path / "clean.toml"
    path.write_text("member_scan_lines = 5\n", encoding="utf-8")

    loader = ConfigLoader.for_root(tmp_path, config_path=path)

    assert loader.load().member_scan_lines == 5
    assert loader.source is not None
    assert loader.source.describe() == f"TOML configuration at {path}"


def test_missing_explicit_configuration_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        ConfigLoader.for_root(tmp_path, config_path=tmp_path / "absent.toml")


def test_malformed_toml_is_reported(tmp_path: Path) -> None:
    path = tmp_path / ".cargo-clean.toml"
    path.write_text("cargo = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="not valid TOML"):
        TomlConfigSource(path).load()


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".cargo-clean.toml").write_text("dry_run = true\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        ConfigLoader.for_root(tmp_path).load()


def test_exclude_dirs_extend_the_always_excluded_set() -> None:
    config = CleanConfig(artifact_dir="build-out", exclude_dirs=["vendor"])

    assert config.excluded_directories() == frozenset({".git", "target", "build-out", "vendor"})


@pytest.mark.parametrize("timeout", [0, -5])
def test_timeout_must_be_positive(timeout: float) -> None:
    with pytest.raises(ValidationError):
        CleanConfig(timeout=timeout)
