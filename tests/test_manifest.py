# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for manifest classification and workspace member discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from cargoclean.config import CleanConfig
from cargoclean.errors import ManifestNotFoundError
from cargoclean.manifest import ManifestClassifier


def test_package_manifest_is_valid(cargo_tree) -> None:
    directory = cargo_tree.package("app")

    manifest = ManifestClassifier().classify(directory)

    assert manifest.is_valid
    assert manifest.has_package_section
    assert not manifest.is_workspace
    assert manifest.member_paths == ()


def test_workspace_manifest_lists_members_in_order(cargo_tree) -> None:
    directory = cargo_tree.workspace("ws", ["crates/core", "crates/cli"])

    manifest = ManifestClassifier().classify(directory)

    assert manifest.is_valid
    assert manifest.is_workspace
    assert manifest.member_paths == ("crates/core", "crates/cli")
    assert manifest.member_directory("crates/cli") == directory / "crates" / "cli"


def test_package_and_workspace_sections_together(cargo_tree) -> None:
    directory = cargo_tree.manifest(
        "root",
        '[package]\nname = "root"\nversion = "0.1.0"\n\n[workspace]\nmembers = ["tools"]\n',
    )

    manifest = ManifestClassifier().classify(directory)

    assert manifest.has_package_section
    assert manifest.has_workspace_section
    assert manifest.member_paths == ("tools",)


@pytest.mark.parametrize(
    "content",
    [
        '[dependencies]\nserde = "1"\n',
        '[workspace.dependencies]\nserde = "1"\n',
        '  [package]\nname = "indented"\n',
        "",
    ],
)
def test_manifest_without_markers_is_invalid(cargo_tree, content: str) -> None:
    directory = cargo_tree.manifest("broken", content)

    manifest = ManifestClassifier().classify(directory)

    assert not manifest.is_valid
    assert not manifest.is_workspace


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(ManifestNotFoundError) as excinfo:
        ManifestClassifier().classify(tmp_path)

    assert excinfo.value.manifest == tmp_path / "Cargo.toml"
    assert isinstance(excinfo.value, FileNotFoundError)


def test_glob_members_expand_and_honour_exclude(cargo_tree) -> None:
    for name in ("alpha", "beta", "legacy"):
        cargo_tree.package(f"ws/crates/{name}")
    (cargo_tree.root / "ws" / "crates" / "README.md").write_text("not a crate", encoding="utf-8")
    directory = cargo_tree.manifest(
        "ws",
        '[workspace]\nmembers = ["crates/*", "tools/cli"]\nexclude = ["crates/legacy"]\n',
    )

    manifest = ManifestClassifier().classify(directory)

    assert manifest.member_paths == ("crates/alpha", "crates/beta", "tools/cli")


def test_many_members_are_not_truncated(cargo_tree) -> None:
    members = [f"crates/member-{index:02d}" for index in range(40)]
    directory = cargo_tree.workspace("ws", members)

    manifest = ManifestClassifier().classify(directory)

    assert manifest.member_paths == tuple(members)


def test_unparseable_manifest_falls_back_to_line_scan(cargo_tree) -> None:
    directory = cargo_tree.manifest(
        "ws",
        '[workspace]\nmembers = [\n    "crates/a",\n    "crates/b"\n    "crates/c",\n]\n',
    )

    manifest = ManifestClassifier().classify(directory)

    assert manifest.is_workspace
    assert manifest.member_paths == ("crates/a", "crates/b", "crates/c")


def test_line_scan_is_bounded_by_configuration(cargo_tree) -> None:
    directory = cargo_tree.manifest(
        "ws",
        '[workspace]\nmembers = [\n    "crates/a",\n    "crates/b"\n    "crates/c",\n]\n',
    )
    classifier = ManifestClassifier.from_config(CleanConfig(member_scan_lines=3))

    manifest = classifier.classify(directory)

    assert manifest.member_paths == ("crates/a", "crates/b")


def test_validate_members_collects_every_missing_member(cargo_tree) -> None:
    cargo_tree.package("ws/a")
    cargo_tree.package("ws/c")
    (cargo_tree.root / "ws" / "d").mkdir(parents=True)
    directory = cargo_tree.workspace("ws", ["a", "b", "c", "d"])
    classifier = ManifestClassifier()

    validation = classifier.validate_members(classifier.classify(directory))

    assert not validation.complete
    assert validation.present == ("a", "c")
    assert validation.missing == ("b", "d")


def test_is_workspace_root(cargo_tree) -> None:
    workspace = cargo_tree.workspace("ws", ["a"])
    package = cargo_tree.package("ws/a")
    classifier = ManifestClassifier()

    assert classifier.is_workspace_root(workspace)
    assert not classifier.is_workspace_root(package)
    assert not classifier.is_workspace_root(cargo_tree.root)


def test_absolute_glob_members_expand_to_absolute_paths(cargo_tree) -> None:
    shared = cargo_tree.root / "shared"
    for name in ("net", "io"):
        cargo_tree.package(f"shared/{name}")
    directory = cargo_tree.manifest("ws", f'[workspace]\nmembers = ["{shared.as_posix()}/*", "local"]\n')

    manifest = ManifestClassifier().classify(directory)

    assert manifest.member_paths == (f"{shared.as_posix()}/io", f"{shared.as_posix()}/net", "local")
    assert manifest.member_directory(manifest.member_paths[0]) == shared / "io"


def test_glob_members_survive_special_characters_in_root(cargo_tree) -> None:
    cargo_tree.package("ws [old]/crates/core")
    directory = cargo_tree.manifest("ws [old]", '[workspace]\nmembers = ["crates/*"]\n')

    manifest = ManifestClassifier().classify(directory)

    assert manifest.member_paths == ("crates/core",)


def test_unstatable_manifest_counts_as_absent(cargo_tree, monkeypatch) -> None:
    directory = cargo_tree.package("locked")
    real_stat = os.stat

    def _stat(path, *args, **kwargs):
        if Path(path).parent == directory:
            raise PermissionError(13, "Permission denied", str(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", _stat)
    classifier = ManifestClassifier()

    assert not classifier.has_manifest(directory)
    with pytest.raises(ManifestNotFoundError):
        classifier.classify(directory)
